"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor (default 12).
"""

from __future__ import annotations

import re

import bcrypt

from auth.errors import MalformedHash

DEFAULT_ROUNDS = 12

_BCRYPT_HASH_RE = re.compile(rb"\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}")


class PasswordHasher:
    """Salted, slow one-way hashing of plaintext passwords."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, plaintext: str) -> bytes:
        """Hash a password with a fresh random salt."""
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(rounds=self.rounds))

    def verify(self, password_hash: bytes, plaintext: str) -> bool:
        """
        Constant-time comparison against a bcrypt hash.

        Returns ``False`` for a wrong password; raises ``MalformedHash`` only
        when ``password_hash`` is not a bcrypt digest at all.
        """
        if isinstance(password_hash, str):
            password_hash = password_hash.encode()
        if not isinstance(password_hash, (bytes, bytearray)) or not _BCRYPT_HASH_RE.fullmatch(password_hash):
            raise MalformedHash()
        try:
            return bcrypt.checkpw(plaintext.encode(), bytes(password_hash))
        except ValueError as exc:
            raise MalformedHash() from exc
