"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from alloggiati.config import Settings


class TestSettings:
    def test_postgres_url_uses_asyncpg(self):
        s = Settings(database_url="postgresql://u:p@db:5432/alloggiati", jwt_secret_key="x" * 32)
        assert s.async_database_url == "postgresql+asyncpg://u:p@db:5432/alloggiati"

    def test_short_postgres_scheme(self):
        s = Settings(database_url="postgres://u:p@db/alloggiati", jwt_secret_key="x" * 32)
        assert s.async_database_url == "postgresql+asyncpg://u:p@db/alloggiati"

    def test_sqlite_url_untouched(self):
        s = Settings(database_url="sqlite+aiosqlite:///:memory:", jwt_secret_key="x" * 32)
        assert s.async_database_url == "sqlite+aiosqlite:///:memory:"
        assert s.is_sqlite is True

    def test_frontend_added_to_cors(self):
        s = Settings(frontend_url="https://desk.example.org", jwt_secret_key="x" * 32)
        assert "https://desk.example.org" in s.cors_origins

    def test_log_level_normalized(self):
        assert Settings(log_level="debug", jwt_secret_key="x" * 32).log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty", jwt_secret_key="x" * 32)

    def test_dev_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(environment="production", jwt_secret_key="change-me-in-production")

    def test_dev_secret_warns_in_development(self):
        with pytest.warns(UserWarning):
            Settings(environment="development", jwt_secret_key="change-me-in-production")
