"""
SQLAlchemy-backed CredentialStore.

Each call runs in its own session and transaction.  The partial unique
indexes on ``users`` are the real uniqueness guarantee; an insert they
reject is reported as ``DuplicateKeyError`` naming the offending column.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import DuplicateKeyError, StorageError
from auth.store import CredentialStore
from database.models import User

logger = logging.getLogger(__name__)


_FIELD_BY_CONSTRAINT = {
    "uq_users_username_live": "username",
    "uq_users_email_live": "email",
}

# PostgreSQL names the violated index; SQLite names the table column.
# Both appear before any key value the driver echoes back.
_PG_CONSTRAINT_RE = re.compile(r'unique constraint "(\w+)"')
_SQLITE_COLUMN_RE = re.compile(r"UNIQUE constraint failed: users\.(\w+)")


def _constraint_name(orig: BaseException) -> Optional[str]:
    """Structured constraint name from asyncpg / psycopg errors, if present."""
    for err in (orig, orig.__cause__):
        if err is None:
            continue
        name = getattr(err, "constraint_name", None)
        if name is None:
            name = getattr(getattr(err, "diag", None), "constraint_name", None)
        if name:
            return name
    return None


def _duplicate_field(exc: IntegrityError) -> Optional[str]:
    """Work out which unique column an IntegrityError refers to."""
    name = _constraint_name(exc.orig)
    if name is not None:
        return _FIELD_BY_CONSTRAINT.get(name)

    text = str(exc.orig)
    match = _PG_CONSTRAINT_RE.search(text)
    if match:
        return _FIELD_BY_CONSTRAINT.get(match.group(1))
    match = _SQLITE_COLUMN_RE.search(text)
    if match and match.group(1) in _FIELD_BY_CONSTRAINT.values():
        return match.group(1)
    return None


class SqlAlchemyCredentialStore(CredentialStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(self, record: User) -> uuid.UUID:
        if record.user_id is None:
            record.user_id = uuid.uuid4()
        async with self._session_factory() as session:
            try:
                session.add(record)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                field = _duplicate_field(exc)
                if field is None:
                    logger.error("Integrity error creating user: %s", exc.orig)
                    raise StorageError("could not create user") from exc
                logger.info("Rejected duplicate %s on insert", field)
                raise DuplicateKeyError(field) from exc
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Storage failure creating user: %s", exc)
                raise StorageError("could not create user") from exc

        logger.debug("Created user %s", record.user_id)
        return record.user_id

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self._find_one(User.username == username)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one(User.email == email)

    async def soft_delete(self, user_id: uuid.UUID) -> bool:
        now = datetime.now(timezone.utc)
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    update(User)
                    .where(User.user_id == user_id, User.deleted_at.is_(None))
                    .values(deleted_at=now, updated_at=now)
                )
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise StorageError("could not delete user") from exc
        return result.rowcount > 0

    async def _find_one(self, condition) -> Optional[User]:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    select(User).where(condition, User.deleted_at.is_(None))
                )
            except SQLAlchemyError as exc:
                raise StorageError("user lookup failed") from exc
            return result.scalar_one_or_none()
