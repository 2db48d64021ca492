"""
AuthWorkflow — signup and login orchestration.

Each call is an independent unit of work:

  signup:  validate → uniqueness pre-check → hash → persist
  login:   validate → lookup → verify hash → issue token

The first failing stage ends the request with an ``AuthResult`` carrying
the status and message for that stage.  Validation runs before any side
effect, and the store's ``create`` is all-or-nothing, so a failed request
never leaves a partial record behind.
"""

from __future__ import annotations

import asyncio
import logging

from auth.errors import (
    AuthenticationError,
    ConflictError,
    DuplicateKeyError,
    MalformedHash,
    StorageError,
    TokenError,
    ValidationError,
)
from auth.password import PasswordHasher
from auth.schemas import AuthResult, LoginRequest, SignupRequest, TokenResponse, UserSummary
from auth.store import CredentialStore
from auth.tokens import TokenService
from auth.validators import validate_login, validate_signup
from database.models import User

logger = logging.getLogger(__name__)


class AuthWorkflow:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    # ── Signup ─────────────────────────────────────────────────────────

    async def signup(self, req: SignupRequest) -> AuthResult:
        """Register a new identity.  Returns 201 with the stored record summary."""
        try:
            validate_signup(req)
        except ValidationError as exc:
            logger.info("Signup rejected: %s", exc.reason)
            return AuthResult.error(exc.status_code, exc.reason)

        # Fast path only: the unique indexes decide under concurrency.
        try:
            if await self.store.find_by_username(req.username) is not None:
                return self._conflict(ConflictError("username"))
            if await self.store.find_by_email(req.email) is not None:
                return self._conflict(ConflictError("email"))
        except StorageError as exc:
            logger.error("Signup lookup failed: %s", exc)
            return AuthResult.error(500, "storage error")

        password_hash = await asyncio.to_thread(self.hasher.hash, req.password)

        record = User(
            username=req.username,
            display_name=req.display_name,
            email=req.email,
            password_hash=password_hash,
            is_active=True,
            is_staff=False,
            is_superuser=False,
        )
        try:
            record.user_id = await self.store.create(record)
        except DuplicateKeyError as exc:
            return self._conflict(ConflictError(exc.field))
        except StorageError as exc:
            logger.error("Signup persist failed: %s", exc)
            return AuthResult.error(500, "storage error")

        logger.info("Registered user %s (%s)", record.username, record.user_id)
        return AuthResult(status=201, body=UserSummary.model_validate(record))

    # ── Login ──────────────────────────────────────────────────────────

    async def login(self, req: LoginRequest) -> AuthResult:
        """Check credentials and return 200 with a freshly issued token."""
        try:
            validate_login(req)
        except ValidationError as exc:
            logger.info("Login rejected: %s", exc.reason)
            return AuthResult.error(exc.status_code, exc.reason)

        try:
            user = await self.store.find_by_email(req.email)
        except StorageError as exc:
            logger.error("Login lookup failed: %s", exc)
            return AuthResult.error(500, "storage error")

        # Unknown account and wrong password read the same to the caller.
        if user is None:
            return self._unauthenticated()

        try:
            matches = await asyncio.to_thread(self.hasher.verify, user.password_hash, req.password)
        except MalformedHash:
            logger.error("Stored hash for user %s is not a bcrypt digest", user.user_id)
            return AuthResult.error(500, "storage error")
        if not matches:
            return self._unauthenticated()

        try:
            token = self.tokens.issue(user.email)
        except TokenError as exc:
            logger.error("Token issue failed for user %s: %s", user.user_id, exc)
            return AuthResult.error(500, "token error")

        logger.info("Login: %s (%s)", user.username, user.user_id)
        return AuthResult(status=200, body=TokenResponse(token=token))

    # ── Helpers ────────────────────────────────────────────────────────

    @staticmethod
    def _conflict(exc: ConflictError) -> AuthResult:
        logger.info("Signup rejected: %s", exc.message)
        return AuthResult.error(exc.status_code, exc.message)

    @staticmethod
    def _unauthenticated() -> AuthResult:
        exc = AuthenticationError()
        return AuthResult.error(exc.status_code, exc.message)
