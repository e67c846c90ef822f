"""Tests for bearer token issue/verify."""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from restaurant_api.auth.tokens import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenClaims,
    TokenError,
    TokenExpiredError,
    TokenService,
)

SECRET = "token-test-secret-with-enough-bytes-for-hmac"


@pytest.fixture
def service() -> TokenService:
    return TokenService(SECRET)


class TestIssue:
    def test_round_trip_returns_claims(self, service) -> None:
        token = service.issue("user-123", "test@example.com")
        claims = service.verify(token)

        assert isinstance(claims, TokenClaims)
        assert claims.user_id == "user-123"
        assert claims.email == "test@example.com"

    def test_expires_one_hour_after_issue(self, service) -> None:
        claims = service.verify(service.issue("user-123", "test@example.com"))
        assert claims.expires_at - claims.issued_at == timedelta(hours=1)

    def test_payload_uses_user_id_and_email_claims(self, service) -> None:
        token = service.issue("user-123", "test@example.com")
        payload = pyjwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["userId"] == "user-123"
        assert payload["email"] == "test@example.com"
        assert payload["exp"] - payload["iat"] == 3600

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenService("")


class TestVerify:
    def test_expired_token_raises(self, service) -> None:
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = service.issue("user-123", "test@example.com", now=issued)
        with pytest.raises(TokenExpiredError):
            service.verify(token)

    def test_wrong_secret_raises_invalid_signature(self, service) -> None:
        other = TokenService("a-different-secret-that-is-also-long-enough")
        token = other.issue("user-123", "test@example.com")
        with pytest.raises(InvalidSignatureError):
            service.verify(token)

    def test_garbage_raises_malformed(self, service) -> None:
        with pytest.raises(MalformedTokenError):
            service.verify("not.a.jwt")

    def test_missing_user_id_raises_malformed(self, service) -> None:
        now = int(time.time())
        token = pyjwt.encode(
            {"email": "test@example.com", "iat": now, "exp": now + 3600},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(MalformedTokenError):
            service.verify(token)

    def test_all_failures_share_a_base_class(self) -> None:
        for exc in (InvalidSignatureError, TokenExpiredError, MalformedTokenError):
            assert issubclass(exc, TokenError)

    def test_custom_ttl(self) -> None:
        service = TokenService(SECRET, ttl=timedelta(minutes=5))
        claims = service.verify(service.issue("u", "e@example.com"))
        assert claims.expires_at - claims.issued_at == timedelta(minutes=5)
