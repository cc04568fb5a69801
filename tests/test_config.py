"""
Tests — Settings
================
"""

from __future__ import annotations

from hr_authz.core.config import Settings, settings


class TestSettings:
    def test_environment_overrides_database_url(self):
        assert settings.DATABASE_URL == "sqlite+aiosqlite://"
        assert settings.SEED_ON_STARTUP is False

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("SEED_ON_STARTUP", raising=False)
        fresh = Settings(_env_file=None)
        assert fresh.DATABASE_URL.startswith("postgresql+asyncpg://")
        assert fresh.JWT_ALGORITHM == "HS256"
        assert fresh.SEED_ON_STARTUP is True

    def test_only_runtime_fields(self):
        assert set(Settings.model_fields) == {
            "APP_NAME",
            "DEBUG",
            "SEED_ON_STARTUP",
            "DATABASE_URL",
            "SECRET_KEY",
            "JWT_ALGORITHM",
            "ACCESS_TOKEN_EXPIRE_MINUTES",
        }
        assert not hasattr(settings, "SYNC_DATABASE_URL")
