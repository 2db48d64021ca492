"""
Error taxonomy for the credential core.

Every error carries the HTTP status the workflow reports for it, so the
transport layer never has to guess.
"""

from __future__ import annotations

from typing import Optional


class AuthError(Exception):
    """Base class for all credential-core failures."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


# ── Client-fixable input problems (400) ──────────────────────────────────


class ValidationError(AuthError):
    status_code = 400
    field: str = ""
    reason: str = "invalid input"

    def __init__(self, reason: Optional[str] = None, field: Optional[str] = None) -> None:
        if reason is not None:
            self.reason = reason
        if field is not None:
            self.field = field
        super().__init__(self.reason)


class InvalidUsername(ValidationError):
    field = "username"
    reason = "invalid username"


class InvalidName(ValidationError):
    field = "display_name"
    reason = "invalid name"


class InvalidEmail(ValidationError):
    field = "email"
    reason = "invalid email"


class EmptyPassword(ValidationError):
    field = "password"
    reason = "password cannot be empty"


class InvalidPassword(ValidationError):
    field = "password"
    reason = "invalid password"


class PasswordMismatch(ValidationError):
    field = "password_confirmation"
    reason = "passwords do not match"


class ConflictError(AuthError):
    """A username or email is already held by a live record."""

    status_code = 400

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} taken")


# ── Credential failures (401) ────────────────────────────────────────────


class AuthenticationError(AuthError):
    """Wrong credentials or unknown account. Deliberately carries no detail."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("invalid email or password")


# ── Infrastructure failures (500) ────────────────────────────────────────


class StorageError(AuthError):
    status_code = 500


class DuplicateKeyError(StorageError):
    """Raised by a store when a unique constraint rejects an insert."""

    status_code = 400

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"duplicate {field}")


class MalformedHash(AuthError):
    status_code = 500

    def __init__(self) -> None:
        super().__init__("stored password hash is not a bcrypt digest")


class TokenError(AuthError):
    status_code = 500


class EmptySubject(TokenError):
    def __init__(self) -> None:
        super().__init__("token subject cannot be empty")


class InvalidToken(TokenError):
    """Decode, signature or expiry failure. Which one is never disclosed."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("invalid token")
