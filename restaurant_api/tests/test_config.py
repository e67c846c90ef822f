from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from restaurant_api.config import Settings, load_settings


def test_defaults(monkeypatch):
    for key in ("MONGODB_URI", "JWT_SECRET", "TOKEN_TTL_SECONDS", "BCRYPT_ROUNDS", "PORT"):
        monkeypatch.delenv(key, raising=False)
    settings = load_settings()
    assert settings.mongodb_uri == ""
    assert settings.token_ttl == timedelta(hours=1)
    assert settings.bcrypt_rounds == 10
    assert settings.port == 3000
    assert settings.uses_default_secret


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.example:27017")
    monkeypatch.setenv("JWT_SECRET", "from-the-environment")
    monkeypatch.setenv("PORT", "8080")
    settings = load_settings()
    assert settings.mongodb_uri == "mongodb://db.example:27017"
    assert settings.jwt_secret == "from-the-environment"
    assert settings.port == 8080
    assert not settings.uses_default_secret


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(FrozenInstanceError):
        settings.jwt_secret = "changed"
