from __future__ import annotations

import logging

from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from ..errors import AuthError
from .tokens import TokenClaims, TokenError

logger = logging.getLogger(__name__)


def get_bearer_token(request: Request) -> str | None:
    """Return the token from ``Authorization: Bearer <token>``, or ``None``."""
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def require_token(request: Request) -> TokenClaims:
    """Raise 403 unless the request carries a valid bearer token."""
    token = get_bearer_token(request)
    if token is None:
        raise AuthError("Token is required")

    try:
        claims = request.app.state.tokens.verify(token)
    except TokenError as exc:
        logger.warning("Rejected token on %s: %s", request.url.path, type(exc).__name__)
        raise AuthError("Invalid token") from exc

    request.state.user = claims
    return claims
