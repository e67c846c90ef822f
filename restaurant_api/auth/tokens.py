"""Signed bearer tokens.

Tokens are stateless HS256 JWTs carrying ``userId`` and ``email`` plus
``iat``/``exp``. Nothing is recorded server-side, so a token stays valid
until it expires even after logout or account deletion.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
from pydantic import BaseModel


class TokenError(Exception):
    """Base class for every reason a token is rejected."""


class InvalidSignatureError(TokenError):
    pass


class TokenExpiredError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


class TokenClaims(BaseModel):
    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
    ) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: str, email: str, now: datetime | None = None) -> str:
        """Sign a token for ``user_id`` that expires ``ttl`` after ``now``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return pyjwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token`` and check its signature and expiry.

        Raises:
            InvalidSignatureError: Signature doesn't match the secret.
            TokenExpiredError: ``exp`` is in the past.
            MalformedTokenError: Not a JWT, or required claims are missing.
        """
        try:
            payload = pyjwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "userId"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except pyjwt.InvalidSignatureError as exc:
            raise InvalidSignatureError(str(exc)) from exc
        except pyjwt.InvalidTokenError as exc:
            raise MalformedTokenError(str(exc)) from exc

        return TokenClaims(
            user_id=str(payload["userId"]),
            email=payload.get("email", ""),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
