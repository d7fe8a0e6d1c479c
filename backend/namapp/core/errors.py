# namapp/core/errors.py
"""
Error types raised by the admin API.

Everything a client can see is an `HTTPException`, so FastAPI renders it as
`{"detail": ...}` with the right status code. `SourceUnavailable` is the one
internal type: the stats aggregator logs and absorbs it.
"""
from typing import Optional

from fastapi import HTTPException, status

_BEARER = {"WWW-Authenticate": "Bearer"}


class CredentialMissing(HTTPException):
    def __init__(self, detail: str = "Missing Authorization header"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=_BEARER)


class CredentialInvalid(HTTPException):
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, headers=_BEARER)


class InsufficientPrivilege(HTTPException):
    def __init__(self, detail: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BackendError(HTTPException):
    """Unexpected failure talking to Firebase/Firestore or the SMS gateway."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail or "Server error",
        )


class SourceUnavailable(Exception):
    """One aggregation input could not be read."""

    def __init__(self, source: str, cause: BaseException):
        super().__init__(f"{source}: {cause}")
        self.source = source
        self.cause = cause
