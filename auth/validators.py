"""
Input validators for signup and login data.

Each check is pure and raises a ``ValidationError`` subclass naming the
exact reason; nothing here touches storage.
"""

from __future__ import annotations

import re

from auth.errors import (
    EmptyPassword,
    InvalidEmail,
    InvalidName,
    InvalidPassword,
    InvalidUsername,
    PasswordMismatch,
)
from auth.schemas import LoginRequest, SignupRequest

# ASCII only: \w and str.isalnum() would also admit non-Latin letters.
_HANDLE_RE = re.compile(r"[A-Za-z0-9!@#$%^&*()_+={}\[\]:;,.<>?/-]{3,32}")
_EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
_PASSWORD_CHARS_RE = re.compile(r"[A-Za-z0-9!@#$%^&*()_+]{8,32}")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")


def validate_username(username: str) -> None:
    """3–32 characters, alphanumeric or ``!@#$%^&*()_+={}[]:;,.<>?/-``."""
    if not _HANDLE_RE.fullmatch(username):
        raise InvalidUsername()


def validate_display_name(name: str) -> None:
    """Same character and length rule as usernames."""
    if not _HANDLE_RE.fullmatch(name):
        raise InvalidName()


def validate_email(email: str) -> None:
    if not _EMAIL_RE.fullmatch(email):
        raise InvalidEmail()


def validate_password(password: str) -> None:
    """
    8–32 characters from ``[A-Za-z0-9!@#$%^&*()_+]`` with at least one
    uppercase letter and one digit.
    """
    if password == "":
        raise EmptyPassword()
    if (
        not _PASSWORD_CHARS_RE.fullmatch(password)
        or not _UPPER_RE.search(password)
        or not _DIGIT_RE.search(password)
    ):
        raise InvalidPassword()


def validate_signup(req: SignupRequest) -> None:
    """Run every signup check in order, stopping at the first failure."""
    validate_username(req.username)
    validate_display_name(req.display_name)
    validate_email(req.email)
    validate_password(req.password)
    try:
        validate_password(req.password_confirmation)
    except (EmptyPassword, InvalidPassword) as exc:
        raise exc.__class__(field="password_confirmation") from None

    if req.password != req.password_confirmation:
        raise PasswordMismatch()


def validate_login(req: LoginRequest) -> None:
    validate_email(req.email)
    validate_password(req.password)
