"""
Signed bearer-token creation and verification.

Tokens are HS256 JWTs carrying the account email as ``sub`` plus ``iat``
and ``exp`` claims.  The signing secret comes from ``config.jwt_secret``
(env var: ``JWT_SECRET``) and is handed to ``TokenService`` once at
startup; it is never rotated while the process runs.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from auth.errors import EmptySubject, InvalidToken, TokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_LIFETIME = timedelta(days=7)


class TokenService:
    """Issues and verifies identity tokens with a fixed process-wide secret."""

    __slots__ = ("_secret", "_lifetime")

    def __init__(self, secret: bytes, lifetime: timedelta = DEFAULT_LIFETIME) -> None:
        if not secret:
            raise TokenError("token signing secret is not configured")
        if lifetime <= timedelta(0):
            raise TokenError("token lifetime must be positive")
        self._secret = bytes(secret)
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        """Create a signed token for ``subject`` that expires after the lifetime."""
        if not subject:
            raise EmptySubject()
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.error("Token signing failed: %s", exc)
            raise TokenError("token signing failed") from exc

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify signature and expiry, returning the claims.

        Raises ``InvalidToken`` for every kind of failure so callers cannot
        tell a forged token from an expired one.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise InvalidToken() from None
        if not claims.get("sub"):
            raise InvalidToken()
        return claims

    def subject(self, token: str) -> str:
        """Verify ``token`` and return its subject (the account email)."""
        return self.verify(token)["sub"]
