"""Bearer token verification and office password hashing."""

from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import get_settings
from app.infrastructure.security.jwt import create_user_token, verify_token
from app.infrastructure.security.password import BcryptPasswordHasher
from app.shared.utils.datetime import utc_now


class TestTokens:
    def test_round_trip_carries_profile_claims(self) -> None:
        token = create_user_token("user-1", email="a@example.com")
        claims = verify_token(token)
        assert claims["sub"] == "user-1"
        assert claims["email"] == "a@example.com"

    def test_expired_token_is_rejected(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "u", "exp": utc_now() - timedelta(minutes=1)},
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        )
        with pytest.raises(ValueError):
            verify_token(token)

    def test_wrong_key_is_rejected(self) -> None:
        token = jwt.encode(
            {"sub": "u", "exp": utc_now() + timedelta(minutes=5)},
            "another-key",
            algorithm=get_settings().algorithm,
        )
        with pytest.raises(ValueError):
            verify_token(token)

    def test_subject_is_required(self) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"exp": utc_now() + timedelta(minutes=5)},
            settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
        )
        with pytest.raises(ValueError):
            verify_token(token)


class TestBcryptPasswordHasher:
    def test_hash_and_verify(self) -> None:
        hasher = BcryptPasswordHasher()
        hashed = hasher.hash_password("office-pass")
        assert hashed != "office-pass"
        assert hasher.verify_password("office-pass", hashed)
        assert not hasher.verify_password("other", hashed)

    def test_long_passwords_are_not_truncated(self) -> None:
        hasher = BcryptPasswordHasher()
        base = "p" * 80
        hashed = hasher.hash_password(base + "a")
        assert not hasher.verify_password(base + "b", hashed)

    def test_missing_hash_never_verifies(self) -> None:
        assert not BcryptPasswordHasher().verify_password("anything", None)
