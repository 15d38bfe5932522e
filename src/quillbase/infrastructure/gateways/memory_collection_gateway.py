"""In-memory collection gateway.

Local-only store used when no backend is configured and in tests. It keeps
the same guarantees as the REST store: names and fields are validated,
timestamps are assigned on write, singular/plural are write-once, and
deleting a collection drops its entries.
"""

import uuid
from copy import deepcopy
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection
from quillbase.domain.services.collection_gateway import (
    CollectionConflictError,
    CollectionGateway,
    CollectionNotFoundError,
    CollectionRejectedError,
)
from quillbase.domain.services.collection_service import CollectionService

logger = get_logger(__name__)


class InMemoryCollectionGateway(CollectionGateway):
    """Collection store backed by a dict, keyed by collection id."""

    def __init__(self, collections: list[Collection] | None = None) -> None:
        self._collections: dict[str, Collection] = {}
        self._entries: dict[str, dict[str, dict[str, Any]]] = {}
        for collection in collections or []:
            self._collections[collection.id] = deepcopy(collection)
            self._entries[collection.id] = {}

    async def create(self, collection: Collection) -> Collection:
        try:
            collection = CollectionService.prepare_new(collection)
        except ValueError as e:
            raise CollectionRejectedError(str(e)) from e

        taken = {collection.singular, collection.plural}
        for existing in self._collections.values():
            if {existing.id, existing.singular, existing.plural} & taken:
                raise CollectionConflictError(
                    f"Collection '{collection.singular}' already exists"
                )

        now = datetime.now(timezone.utc)
        stored = replace(deepcopy(collection), created_at=now, updated_at=now)
        self._collections[stored.id] = stored
        self._entries[stored.id] = {}

        logger.info("Collection created", collection_id=stored.id, store="memory")
        return deepcopy(stored)

    async def update(self, collection_id: str, collection: Collection) -> Collection:
        existing = self._collections.get(collection_id)
        if existing is None:
            raise CollectionNotFoundError(collection_id)

        if collection.singular != existing.singular or collection.plural != existing.plural:
            raise CollectionConflictError(
                "Collection identifiers are immutable once created"
            )

        field_errors = CollectionService.validate_fields(
            collection.fields, existing.type, enforce_minimum=False
        )
        if field_errors:
            raise CollectionRejectedError(f"Validation failed: {'; '.join(field_errors)}")

        stored = replace(
            deepcopy(collection),
            id=existing.id,
            type=existing.type,
            created_at=existing.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        self._collections[collection_id] = stored

        logger.info("Collection updated", collection_id=collection_id, store="memory")
        return deepcopy(stored)

    async def delete(self, collection_id: str) -> None:
        if collection_id not in self._collections:
            raise CollectionNotFoundError(collection_id)

        del self._collections[collection_id]
        removed = self._entries.pop(collection_id, {})

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            entries_deleted=len(removed),
            store="memory",
        )

    async def get(self, collection_id: str) -> Collection:
        collection = self._collections.get(collection_id)
        if collection is None:
            raise CollectionNotFoundError(collection_id)
        return deepcopy(collection)

    def add_entry(self, collection_id: str, data: dict[str, Any]) -> str:
        """Store an entry under a collection and return its id."""
        if collection_id not in self._collections:
            raise CollectionNotFoundError(collection_id)
        entry_id = str(uuid.uuid4())
        self._entries[collection_id][entry_id] = dict(data)
        return entry_id

    def count_entries(self, collection_id: str) -> int:
        return len(self._entries.get(collection_id, {}))

    async def list(self) -> list[Collection]:
        return [deepcopy(c) for c in self._collections.values()]
