"""
Tests for signed token issue / verify.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from auth.errors import EmptySubject, InvalidToken, TokenError
from auth.tokens import ALGORITHM, TokenService

TEST_SECRET = b"test-signing-secret"


class TestIssue:
    def test_round_trip(self, tokens):
        token = tokens.issue("test@example.com")
        assert isinstance(token, str) and token
        assert tokens.subject(token) == "test@example.com"

    def test_expiry_is_seven_days(self, tokens):
        now = datetime.now(timezone.utc).replace(microsecond=0)
        claims = tokens.verify(tokens.issue("a@b.co", now=now))
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

    def test_empty_subject(self, tokens):
        with pytest.raises(EmptySubject):
            tokens.issue("")

    def test_empty_subject_is_token_error(self, tokens):
        with pytest.raises(TokenError):
            tokens.issue("")

    def test_missing_secret(self):
        with pytest.raises(TokenError):
            TokenService(b"")


class TestVerify:
    def test_expired(self, tokens):
        issued = datetime.now(timezone.utc) - timedelta(days=8)
        token = tokens.issue("test@example.com", now=issued)
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_manually_built_past_expiry(self):
        token = jwt.encode(
            {"sub": "test@example.com", "exp": datetime.now(timezone.utc) - timedelta(seconds=1)},
            TEST_SECRET,
            algorithm=ALGORITHM,
        )
        with pytest.raises(InvalidToken):
            TokenService(TEST_SECRET).verify(token)

    def test_wrong_secret(self, tokens):
        other = TokenService(b"another-secret")
        with pytest.raises(InvalidToken):
            tokens.verify(other.issue("test@example.com"))

    def test_tampered_payload(self, tokens):
        header, _, signature = tokens.issue("test@example.com").split(".")
        forged_payload = jwt.utils.base64url_encode(b'{"sub":"admin@example.com","exp":9999999999}').decode()
        with pytest.raises(InvalidToken):
            tokens.verify(f"{header}.{forged_payload}.{signature}")

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", None])
    def test_undecodable(self, tokens, token):
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_unsigned_algorithm_rejected(self, tokens):
        token = jwt.encode({"sub": "x@y.co", "exp": 9999999999}, None, algorithm="none")
        with pytest.raises(InvalidToken):
            tokens.verify(token)

    def test_missing_subject(self):
        token = jwt.encode({"exp": 9999999999}, TEST_SECRET, algorithm=ALGORITHM)
        with pytest.raises(InvalidToken):
            TokenService(TEST_SECRET).verify(token)

    def test_failures_share_one_message(self, tokens):
        messages = set()
        expired = tokens.issue("a@b.co", now=datetime.now(timezone.utc) - timedelta(days=30))
        for bad in ("garbage", expired, TokenService(b"other").issue("a@b.co")):
            with pytest.raises(InvalidToken) as exc_info:
                tokens.verify(bad)
            messages.add(str(exc_info.value))
        assert messages == {"invalid token"}
