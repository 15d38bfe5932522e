"""Unit tests for InMemoryCollectionGateway."""

from dataclasses import replace

import pytest

from quillbase.domain.entities.collection import CollectionField, CollectionType
from quillbase.domain.services.collection_gateway import (
    CollectionConflictError,
    CollectionNotFoundError,
    CollectionRejectedError,
)
from quillbase.infrastructure.gateways import InMemoryCollectionGateway


@pytest.mark.asyncio
async def test_create_assigns_timestamps(blog_post):
    gateway = InMemoryCollectionGateway()

    created = await gateway.create(blog_post)

    assert created.created_at is not None
    assert created.updated_at == created.created_at
    assert blog_post.created_at is None


@pytest.mark.asyncio
async def test_create_duplicate_conflicts(blog_post):
    gateway = InMemoryCollectionGateway()
    await gateway.create(blog_post)

    with pytest.raises(CollectionConflictError):
        await gateway.create(blog_post)


@pytest.mark.asyncio
async def test_update_keeps_identity(blog_post):
    gateway = InMemoryCollectionGateway()
    created = await gateway.create(blog_post)

    changed = replace(
        created,
        name="Article",
        type=CollectionType.SINGLE,
        fields=[CollectionField(field_name="title", type="short", label="Text")],
    )
    updated = await gateway.update("blog-post", changed)

    assert updated.name == "Article"
    assert updated.type is CollectionType.COLLECTION
    assert updated.created_at == created.created_at
    assert updated.field_names == ["title"]


@pytest.mark.asyncio
async def test_update_rejects_new_plural(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])

    with pytest.raises(CollectionConflictError):
        await gateway.update("blog-post", replace(blog_post, plural="posts"))


@pytest.mark.asyncio
async def test_update_missing(blog_post):
    with pytest.raises(CollectionNotFoundError):
        await InMemoryCollectionGateway().update("blog-post", blog_post)


@pytest.mark.asyncio
async def test_delete_cascades_entries(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])
    gateway.add_entry("blog-post", {"title": "One"})
    gateway.add_entry("blog-post", {"title": "Two"})
    assert gateway.count_entries("blog-post") == 2

    await gateway.delete("blog-post")

    assert gateway.count_entries("blog-post") == 0
    with pytest.raises(CollectionNotFoundError):
        await gateway.get("blog-post")


@pytest.mark.asyncio
async def test_delete_missing():
    with pytest.raises(CollectionNotFoundError):
        await InMemoryCollectionGateway().delete("nope")


@pytest.mark.asyncio
async def test_returned_objects_are_copies(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])

    fetched = await gateway.get("blog-post")
    fetched.fields.clear()

    assert (await gateway.get("blog-post")).field_names == ["title", "body"]


@pytest.mark.asyncio
async def test_create_rejects_invalid_identifiers(blog_post):
    gateway = InMemoryCollectionGateway()
    bad = replace(blog_post, id="123-get", singular="123-get", plural="")

    with pytest.raises(CollectionRejectedError, match="Validation failed"):
        await gateway.create(bad)
    assert await gateway.list() == []


@pytest.mark.asyncio
async def test_create_rejects_too_few_fields(blog_post):
    with pytest.raises(CollectionRejectedError, match="at least 2"):
        await InMemoryCollectionGateway().create(replace(blog_post, fields=blog_post.fields[:1]))


@pytest.mark.asyncio
async def test_create_rejects_plural_clash(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])
    clash = replace(blog_post, id="post", singular="post", plural="blog-posts")

    with pytest.raises(CollectionConflictError):
        await gateway.create(clash)


@pytest.mark.asyncio
async def test_update_may_drop_below_field_minimum(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])

    updated = await gateway.update("blog-post", replace(blog_post, fields=blog_post.fields[:1]))

    assert updated.field_names == ["title"]


@pytest.mark.asyncio
async def test_update_rejects_duplicate_fields(blog_post):
    gateway = InMemoryCollectionGateway([blog_post])
    doubled = replace(blog_post, fields=[*blog_post.fields, blog_post.fields[0]])

    with pytest.raises(CollectionRejectedError, match="already exists"):
        await gateway.update("blog-post", doubled)
