"""Unit tests for CollectionCatalog."""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from quillbase.domain.services.collection_catalog import CollectionCatalog
from quillbase.domain.services.collection_gateway import (
    CollectionNotFoundError,
    PermissionDeniedError,
)
from quillbase.infrastructure.gateways import InMemoryCollectionGateway


@pytest.mark.asyncio
async def test_refresh_loads_collections(blog_post):
    catalog = CollectionCatalog(InMemoryCollectionGateway([blog_post]))

    collections = await catalog.refresh()

    assert [c.id for c in collections] == ["blog-post"]
    assert catalog.find("blog-post") is not None


@pytest.mark.asyncio
async def test_create_adds_to_local_list(blog_post):
    catalog = CollectionCatalog(InMemoryCollectionGateway())

    created = await catalog.create(blog_post)

    assert created.created_at is not None
    assert catalog.collections == [created]


@pytest.mark.asyncio
async def test_failed_create_leaves_list_untouched(blog_post):
    gateway = AsyncMock()
    gateway.create.side_effect = PermissionDeniedError()
    catalog = CollectionCatalog(gateway)

    with pytest.raises(PermissionDeniedError):
        await catalog.create(blog_post)

    assert catalog.collections == []


@pytest.mark.asyncio
async def test_create_strips_timestamps(blog_post):
    stamped = replace(blog_post, created_at=datetime.now(timezone.utc))
    gateway = AsyncMock()
    gateway.create.return_value = stamped
    catalog = CollectionCatalog(gateway)

    await catalog.create(stamped)

    sent = gateway.create.call_args.args[0]
    assert sent.created_at is None
    assert sent.updated_at is None


@pytest.mark.asyncio
async def test_delete_missing_counts_as_deleted(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])
    catalog = CollectionCatalog(gateway)
    await catalog.refresh()
    await gateway.delete("blog-post")

    assert await catalog.delete("blog-post") is False
    assert catalog.collections == []


@pytest.mark.asyncio
async def test_get_missing_drops_local_entry(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])
    catalog = CollectionCatalog(gateway)
    await catalog.refresh()
    await gateway.delete("blog-post")

    with pytest.raises(CollectionNotFoundError):
        await catalog.get("blog-post")
    assert catalog.find("blog-post") is None
