"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI
dependency for database session injection.

Dependencies: sqlalchemy, docchat.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from docchat.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Process-wide async engine.

    Server databases get the configured pool and pre-ping; SQLite URLs
    (local runs) use the dialect default pool.
    """
    db_config = get_settings().database
    pool_options = {}
    if db_config.uses_server_pool:
        pool_options = {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_pre_ping": True,
        }
    return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql, **pool_options)


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Sessions use autoflush=False and expire_on_commit=False so ORM rows stay
    readable after the service commits.

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one async session per request.

    Usage:
        @router.get("/documents/{document_id}/images")
        async def list_images(document_id: int, db: AsyncSession = Depends(get_async_db)):
            return await document_image_crud.get_by_document_id(db, document_id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
