"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

# Driver each URL scheme is rewritten to, per engine flavour
_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}
_SYNC_DRIVERS = {
    "postgres": "postgresql",
    "postgresql+asyncpg": "postgresql",
    "sqlite+aiosqlite": "sqlite",
}


def _with_driver(url: str, drivers: dict[str, str]) -> str:
    scheme, sep, rest = url.partition("://")
    return f"{drivers.get(scheme, scheme)}{sep}{rest}"


class Settings(BaseSettings):
    """StudyDesk settings, read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "StudyDesk"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Storage. A full URL (hosted Postgres, or SQLite for local runs) beats the parts.
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "studydesk"
    postgres_password: str = ""
    postgres_db: str = "studydesk"

    # Identity tokens are signed by the hosting environment and only verified here
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7

    cors_origins: list[str] = ["http://localhost:3000"]

    # Accept client-computed interval/ease on PUT .../review
    legacy_card_review_enabled: bool = True

    def _base_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "postgresql",
            username=self.postgres_user,
            password=self.postgres_password or None,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)

    @computed_field
    @property
    def database_url(self) -> str:
        """Async engine URL. Query parameters are dropped; asyncpg takes SSL via connect_args."""
        url = _with_driver(self._base_url(), _ASYNC_DRIVERS)
        if url.startswith("postgresql"):
            url = make_url(url).set(query={}).render_as_string(hide_password=False)
        return url

    @computed_field
    @property
    def database_requires_ssl(self) -> bool:
        override = self.database_url_override or ""
        return "sslmode=require" in override or "ssl=require" in override

    @computed_field
    @property
    def database_url_sync(self) -> str:
        """Blocking-driver URL for Alembic."""
        return _with_driver(self._base_url(), _SYNC_DRIVERS)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def sanitize_error(error: Exception, *, generic_message: str = "An internal error occurred.") -> str:
    """Full exception text in development, a generic message anywhere else."""
    if get_settings().environment == "development":
        return str(error)
    return generic_message
