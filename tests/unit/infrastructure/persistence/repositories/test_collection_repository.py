"""Unit tests for CollectionRepository and EntryRepository."""

import pytest

from quillbase.infrastructure.persistence.models import CollectionModel
from quillbase.infrastructure.persistence.repositories import (
    CollectionRepository,
    EntryRepository,
)


def make_model(singular: str, plural: str) -> CollectionModel:
    return CollectionModel(
        id=singular,
        name=singular.title(),
        singular=singular,
        plural=plural,
        type="collection",
        fields="[]",
    )


@pytest.mark.asyncio
async def test_create_sets_timestamps(db_session):
    repo = CollectionRepository(db_session)

    created = await repo.create(make_model("author", "authors"))

    assert created.created_at is not None
    assert await repo.get_by_id("author") is created


@pytest.mark.asyncio
async def test_identifier_exists_checks_both_names(db_session):
    repo = CollectionRepository(db_session)
    await repo.create(make_model("person", "people"))

    assert await repo.identifier_exists("person", "persons")
    assert await repo.identifier_exists("human", "people")
    assert await repo.identifier_exists("people", "peoples")
    assert not await repo.identifier_exists("author", "authors")


@pytest.mark.asyncio
async def test_list_all(db_session):
    repo = CollectionRepository(db_session)
    await repo.create(make_model("author", "authors"))
    await repo.create(make_model("book", "books"))

    assert sorted(m.id for m in await repo.list_all()) == ["author", "book"]


@pytest.mark.asyncio
async def test_entries_are_counted_and_deleted_per_collection(db_session):
    collections = CollectionRepository(db_session)
    await collections.create(make_model("author", "authors"))
    await collections.create(make_model("book", "books"))
    entries = EntryRepository(db_session)
    await entries.create("author", {"name": "Ann"})
    await entries.create("author", {"name": "Bob"})
    await entries.create("book", {"title": "Dune"})

    assert await entries.count_for_collection("author") == 2
    assert await entries.delete_for_collection("author") == 2
    assert await entries.count_for_collection("author") == 0
    assert await entries.count_for_collection("book") == 1
