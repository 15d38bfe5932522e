"""Repository for entry operations.

Entries belong to exactly one collection and are removed with it.
"""

import json
import uuid
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from quillbase.infrastructure.persistence.models import EntryModel


class EntryRepository:
    """Repository for entry database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, collection_id: str, data: dict[str, Any]) -> EntryModel:
        """Store a new entry under a collection.

        Args:
            collection_id: Owning collection ID.
            data: Field values keyed by field name.

        Returns:
            The created entry model.
        """
        entry = EntryModel(
            id=str(uuid.uuid4()),
            collection_id=collection_id,
            data=json.dumps(data),
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def count_for_collection(self, collection_id: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(EntryModel)
            .where(EntryModel.collection_id == collection_id)
        )
        return result.scalar_one()

    async def delete_for_collection(self, collection_id: str) -> int:
        """Delete every entry of a collection.

        Returns:
            Number of entries deleted.
        """
        result = await self.session.execute(
            delete(EntryModel).where(EntryModel.collection_id == collection_id)
        )
        await self.session.flush()
        return result.rowcount or 0
