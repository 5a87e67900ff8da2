"""
Credential-specific exceptions.

The engine reports every failure as one of four kinds. Store adapters raise
StoreError (or DuplicateIdentityError) and the engine wraps them.
"""
from fastapi import status

from ..exceptions import AppException


class AuthException(AppException):
    """Base class for credential engine outcomes."""
    kind = "internal"

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class ConflictException(AuthException):
    """Raised when the identity is already used by an account of the same kind."""
    kind = "conflict"

    def __init__(self, detail: str = "Identity already in use"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class UnauthorizedException(AuthException):
    """Raised when login credentials do not match any account."""
    kind = "unauthorized"

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class InvalidTokenException(AuthException):
    """Raised when a token is malformed, wrongly signed or expired."""
    kind = "invalid"

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class InternalException(AuthException):
    """Raised on store or signing failures unrelated to caller input."""
    kind = "internal"

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


class StoreError(Exception):
    """Opaque failure reported by a credential store."""

class DuplicateIdentityError(StoreError):
    """The store's uniqueness constraint rejected an insert."""
