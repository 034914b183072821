"""Tests for database URL derivation in Settings."""

import pytest

from studydesk.config import Settings


@pytest.fixture
def make_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("DATABASE_URL_OVERRIDE", raising=False)

    def _make(**overrides) -> Settings:
        return Settings(_env_file=None, jwt_secret_key="k", **overrides)

    return _make


class TestDatabaseUrls:
    def test_built_from_parts(self, make_settings) -> None:
        settings = make_settings(postgres_user="u", postgres_password="p@ss", postgres_host="db", postgres_db="study")

        assert settings.database_url == "postgresql+asyncpg://u:p%40ss@db:5432/study"
        assert settings.database_url_sync == "postgresql://u:p%40ss@db:5432/study"
        assert settings.database_requires_ssl is False

    def test_hosted_override_with_ssl(self, make_settings) -> None:
        settings = make_settings(database_url_override="postgres://u:pw@host/db?sslmode=require")

        assert settings.database_url == "postgresql+asyncpg://u:pw@host/db"
        assert settings.database_url_sync == "postgresql://u:pw@host/db?sslmode=require"
        assert settings.database_requires_ssl is True

    def test_sqlite_override(self, make_settings) -> None:
        settings = make_settings(database_url_override="sqlite:///./studydesk.db")

        assert settings.database_url == "sqlite+aiosqlite:///./studydesk.db"
        assert settings.database_url_sync == "sqlite:///./studydesk.db"
