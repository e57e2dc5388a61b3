"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, pinned random sources, sample document
images, artifact store in a temp directory
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import random

import pytest

from docchat.core.diagrams.artifact_store import ArtifactStore
from docchat.models.document import DocumentImage


class StubRandom:
    """Deterministic stand-in for random.Random.

    random() always returns the same value, choice() the first element,
    sample() the leading items and getrandbits() a fixed number.
    """

    def __init__(self, value: float = 0.5, bits: int = 123456789) -> None:
        self.value = value
        self.bits = bits

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[0]

    def sample(self, population, k):
        return list(population)[:k]

    def getrandbits(self, k: int) -> int:
        return self.bits & ((1 << k) - 1)


@pytest.fixture
def stub_rng() -> StubRandom:
    """Random source that always picks the top-scoring option."""
    return StubRandom()


@pytest.fixture
def seeded_rng() -> random.Random:
    """Seeded real random source."""
    return random.Random(1234)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-01T00:00:00Z."""
    return lambda: 1704067200.0


@pytest.fixture
def artifact_store(tmp_path, seeded_rng) -> ArtifactStore:
    """Artifact store rooted in a temp uploads directory."""
    store = ArtifactStore(tmp_path / "uploads", rng=seeded_rng)
    store.ensure_directories()
    return store


@pytest.fixture
def sample_images() -> list[DocumentImage]:
    """Images of one migration guide, captions carry figure labels."""
    return [
        DocumentImage(id=1, document_id=1, image_path="/uploads/images/1.png",
                      alt_text="Company logo", caption="Figure 1: Company logo"),
        DocumentImage(id=3, document_id=1, image_path="/uploads/images/3.png",
                      alt_text="Migration wizard", caption="Figure 3: Migration wizard overview"),
        DocumentImage(id=7, document_id=1, image_path="/uploads/images/7.png",
                      alt_text="Source inventory", caption="Figure 9: Source inventory screen"),
        DocumentImage(id=8, document_id=1, image_path="/uploads/images/8.png",
                      alt_text="OS migration workflow", caption="Figure 8: OS-based migration workflow"),
        DocumentImage(id=12, document_id=1, image_path="/uploads/images/12.png",
                      alt_text="Appliance deployment", caption="Figure 7: Google Cloud appliance deployment"),
    ]


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from docchat.boundary.db import models  # noqa: F401  registers tables
    from docchat.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
