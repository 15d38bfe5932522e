"""Local list of known collections kept in step with the gateway.

The catalog only changes its list after a gateway call succeeds, so the
local view never diverges from the store on failure.
"""

from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection
from quillbase.domain.services.collection_gateway import (
    CollectionGateway,
    CollectionNotFoundError,
)

logger = get_logger(__name__)


class CollectionCatalog:
    """Cached view over a collection gateway."""

    def __init__(self, gateway: CollectionGateway) -> None:
        self.gateway = gateway
        self._collections: list[Collection] = []

    @property
    def collections(self) -> list[Collection]:
        return list(self._collections)

    def find(self, collection_id: str) -> Collection | None:
        for collection in self._collections:
            if collection.id == collection_id:
                return collection
        return None

    def _upsert(self, collection: Collection) -> None:
        for index, existing in enumerate(self._collections):
            if existing.id == collection.id:
                self._collections[index] = collection
                return
        self._collections.append(collection)

    def _drop(self, collection_id: str) -> bool:
        before = len(self._collections)
        self._collections = [c for c in self._collections if c.id != collection_id]
        return len(self._collections) != before

    async def refresh(self) -> list[Collection]:
        """Reload every collection from the gateway."""
        self._collections = await self.gateway.list()
        logger.debug("Collection catalog refreshed", count=len(self._collections))
        return self.collections

    async def get(self, collection_id: str) -> Collection:
        try:
            collection = await self.gateway.get(collection_id)
        except CollectionNotFoundError:
            self._drop(collection_id)
            raise
        self._upsert(collection)
        return collection

    async def create(self, collection: Collection) -> Collection:
        created = await self.gateway.create(collection.without_timestamps())
        self._upsert(created)
        return created

    async def update(self, collection_id: str, collection: Collection) -> Collection:
        updated = await self.gateway.update(collection_id, collection.without_timestamps())
        self._upsert(updated)
        return updated

    async def delete(self, collection_id: str) -> bool:
        """Delete a collection and drop it from the local list.

        Deleting an id the store no longer knows is not an error: the local
        entry is dropped and False is returned.

        Returns:
            True if the store deleted the collection.
        """
        try:
            await self.gateway.delete(collection_id)
        except CollectionNotFoundError:
            self._drop(collection_id)
            logger.info("Collection already deleted", collection_id=collection_id)
            return False

        self._drop(collection_id)
        return True
