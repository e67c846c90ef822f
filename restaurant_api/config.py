from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

logger = logging.getLogger(__name__)

_DEV_SECRET = "restaurant-api-secret-change-in-production"


@dataclass(frozen=True)
class Settings:
    mongodb_uri: str = ""
    mongodb_database: str = "restaurants"
    jwt_secret: str = _DEV_SECRET
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 3600
    bcrypt_rounds: int = 10
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(seconds=self.token_ttl_seconds)

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == _DEV_SECRET


def load_settings() -> Settings:
    """Read settings from the environment. Called once at process start."""
    settings = Settings(
        mongodb_uri=os.getenv("MONGODB_URI", ""),
        mongodb_database=os.getenv("MONGODB_DATABASE", "restaurants"),
        jwt_secret=os.getenv("JWT_SECRET") or _DEV_SECRET,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=int(os.getenv("TOKEN_TTL_SECONDS", "3600")),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "10")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )
    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set, using the development signing secret")
    return settings
