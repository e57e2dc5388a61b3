"""
Test suite for the async engine factory.

System role: Verification of pool arguments per database backend
"""

from types import SimpleNamespace
from unittest.mock import patch

from docchat.boundary.db.connection import get_async_engine
from docchat.configs.database import DatabaseSettings


def _build_engine(database: DatabaseSettings):
    with (
        patch("docchat.boundary.db.connection.get_settings", return_value=SimpleNamespace(database=database)),
        patch("docchat.boundary.db.connection.create_async_engine") as create_engine,
    ):
        get_async_engine.__wrapped__()
    return create_engine


class TestGetAsyncEngine:

    def test_server_database_should_get_pool_arguments(self) -> None:
        database = DatabaseSettings(dsn=None, host="db", pool_size=4, max_overflow=2, pool_timeout=9)

        create_engine = _build_engine(database)

        url = create_engine.call_args.args[0]
        kwargs = create_engine.call_args.kwargs
        assert url.startswith("postgresql+asyncpg://")
        assert kwargs["pool_size"] == 4
        assert kwargs["max_overflow"] == 2
        assert kwargs["pool_timeout"] == 9
        assert kwargs["pool_pre_ping"] is True

    def test_sqlite_should_use_default_pool(self) -> None:
        database = DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:")

        create_engine = _build_engine(database)

        assert create_engine.call_args.args[0] == "sqlite+aiosqlite:///:memory:"
        assert set(create_engine.call_args.kwargs) == {"echo"}
