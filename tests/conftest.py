"""Pytest configuration for all tests."""

import os
from typing import AsyncGenerator

os.environ.setdefault("QUILLBASE_ENVIRONMENT", "testing")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from quillbase.domain.entities.collection import Collection, CollectionField, CollectionType
from quillbase.infrastructure.persistence.database import Base, enable_sqlite_foreign_keys
from quillbase.infrastructure.persistence.models import CollectionModel, EntryModel  # noqa: F401


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from quillbase.infrastructure.api.app import app
    from quillbase.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def blog_post() -> Collection:
    """A saved-looking two-field collection."""
    return Collection(
        id="blog-post",
        name="Blog Post",
        singular="blog-post",
        plural="blog-posts",
        type=CollectionType.COLLECTION,
        fields=[
            CollectionField(field_name="title", type="short", label="Text"),
            CollectionField(field_name="body", type="richtext", label="Rich Content"),
        ],
    )
