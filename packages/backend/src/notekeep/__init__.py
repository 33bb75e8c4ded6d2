"""NoteKeep — multi-user note-taking backend.

Users sign up, sign in and manage their own notes. Administrators
can see and manage every note.
"""

__version__ = "0.1.0"
