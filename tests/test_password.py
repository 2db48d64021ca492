"""
Tests for bcrypt password hashing.
"""

import pytest

from auth.errors import MalformedHash
from auth.password import DEFAULT_ROUNDS, PasswordHasher


class TestPasswordHasher:
    def test_round_trip(self, hasher):
        digest = hasher.hash("Password123")
        assert digest != b"Password123"
        assert hasher.verify(digest, "Password123") is True

    def test_wrong_password_is_false_not_error(self, hasher):
        digest = hasher.hash("Password123")
        assert hasher.verify(digest, "Password124") is False

    def test_salted(self, hasher):
        first = hasher.hash("Password123")
        second = hasher.hash("Password123")
        assert first != second
        assert hasher.verify(first, "Password123")
        assert hasher.verify(second, "Password123")

    def test_work_factor_recorded_in_digest(self, hasher):
        assert hasher.hash("Password123").startswith(b"$2b$04$")

    def test_default_work_factor(self):
        assert PasswordHasher().rounds == DEFAULT_ROUNDS == 12

    def test_accepts_str_digest(self, hasher):
        digest = hasher.hash("Password123").decode()
        assert hasher.verify(digest, "Password123")

    @pytest.mark.parametrize("digest", [b"", b"Password123", b"$2b$04$tooshort", b"sha256$" + b"a" * 53])
    def test_malformed(self, hasher, digest):
        with pytest.raises(MalformedHash):
            hasher.verify(digest, "Password123")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rejects_out_of_range_rounds(self, rounds):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=rounds)
