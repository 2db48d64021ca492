"""
CredentialStore — abstract interface for identity-record persistence.

The workflow only ever talks to this contract.  Implementations must
enforce uniqueness of ``username`` and ``email`` among live (not soft
deleted) records atomically at the storage layer and report a rejected
insert as ``DuplicateKeyError``.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from database.models import User


class CredentialStore(ABC):
    """Abstract base for identity-record stores."""

    @abstractmethod
    async def create(self, record: User) -> uuid.UUID:
        """
        Persist a new identity record, all-or-nothing.

        Returns
        -------
        The id assigned by the store.

        Raises
        ------
        DuplicateKeyError
            A live record already holds the username or email.
        StorageError
            The store is unavailable or the write failed.
        """
        ...

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Return the live record with this username, or ``None``."""
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Return the live record with this email, or ``None``."""
        ...

    @abstractmethod
    async def soft_delete(self, user_id: uuid.UUID) -> bool:
        """Mark a record deleted, keeping the row.  Returns ``False`` if absent."""
        ...
