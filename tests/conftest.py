"""
Shared fixtures: a dict-backed CredentialStore and low-cost crypto services.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from auth.errors import DuplicateKeyError
from auth.password import PasswordHasher
from auth.schemas import LoginRequest, SignupRequest
from auth.store import CredentialStore
from auth.tokens import TokenService
from auth.workflow import AuthWorkflow
from database.models import User

TEST_SECRET = b"test-signing-secret"


class InMemoryCredentialStore(CredentialStore):
    def __init__(self):
        self.records: Dict[uuid.UUID, User] = {}

    def _live(self):
        return [r for r in self.records.values() if r.deleted_at is None]

    async def create(self, record: User) -> uuid.UUID:
        for existing in self._live():
            if existing.username == record.username:
                raise DuplicateKeyError("username")
            if existing.email == record.email:
                raise DuplicateKeyError("email")
        record.user_id = record.user_id or uuid.uuid4()
        self.records[record.user_id] = record
        return record.user_id

    async def find_by_username(self, username: str) -> Optional[User]:
        return next((r for r in self._live() if r.username == username), None)

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((r for r in self._live() if r.email == email), None)

    async def soft_delete(self, user_id: uuid.UUID) -> bool:
        record = self.records.get(user_id)
        if record is None or record.deleted_at is not None:
            return False
        record.deleted_at = datetime.now(timezone.utc)
        return True


@pytest.fixture
def store():
    return InMemoryCredentialStore()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET)


@pytest.fixture
def workflow(store, hasher, tokens):
    return AuthWorkflow(store=store, hasher=hasher, tokens=tokens)


@pytest.fixture
def signup_request():
    return SignupRequest(
        username="testuser",
        name="TestUser",
        email="test@example.com",
        password="Password123",
        confirm_password="Password123",
    )


@pytest.fixture
def login_request():
    return LoginRequest(email="test@example.com", password="Password123")
