"""
Database configuration settings.

Connection parts for the chat history database (documents, document images
and messages). ``POSTGRES_DSN`` overrides the parts entirely, which is how
local runs point at SQLite.

Dependencies: pydantic, pydantic_settings, sqlalchemy
System role: Database connection configuration for ORM
"""

from pydantic import Field
from sqlalchemy.engine import URL

from docchat.configs.base import BaseSettings, prefixed_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection and pool configuration."""

    model_config = prefixed_config("POSTGRES_")

    dsn: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL; when set, the parts below are ignored",
    )
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="docchat", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Overflow connections beyond pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    def _url(self, driver: str) -> str:
        url = URL.create(
            driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db,
        )
        return url.render_as_string(hide_password=False)

    @property
    def database_url(self) -> str:
        """Synchronous URL, for admin scripts and migrations."""
        return self._url("postgresql")

    @property
    def async_database_url(self) -> str:
        """URL used by the application engine (asyncpg unless ``dsn`` is set)."""
        return self.dsn or self._url("postgresql+asyncpg")

    @property
    def uses_server_pool(self) -> bool:
        """False for SQLite URLs, where pool sizing does not apply."""
        return not self.async_database_url.startswith("sqlite")
