"""Mapping from service outcomes to HTTP responses.

Each ErrorKind maps to exactly one status code. Route handlers call
``unwrap()`` on every outcome; the message travels to the client
unchanged, which is why services only put client-safe text in it.
"""

from typing import TypeVar

from fastapi import HTTPException

from notekeep.services.outcome import ErrorKind, Outcome

T = TypeVar("T")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.DUPLICATE_EMAIL: 400,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
}


def unwrap(outcome: Outcome[T]) -> T:
    """Return the success value or raise the matching HTTPException."""
    if outcome.ok:
        return outcome.value

    headers = None
    if outcome.error == ErrorKind.INVALID_TOKEN:
        headers = {"WWW-Authenticate": "Bearer"}
    raise HTTPException(
        status_code=STATUS_BY_KIND[outcome.error],
        detail=outcome.message,
        headers=headers,
    )
