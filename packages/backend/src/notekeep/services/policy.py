"""Authorization policy for notes.

One rule, applied before every single-note read, update and delete:
admins may touch any note, everyone else only their own.
"""

from notekeep.db.models import Note, User


def can_access(user: User, note: Note) -> bool:
    return user.is_admin or note.owner_id == user.id
