"""Repository for collection operations.

Provides CRUD operations for the collections table.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from quillbase.infrastructure.persistence.models import CollectionModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Add a new collection and flush it.

        Args:
            collection: The collection model to create.

        Returns:
            The created collection model.
        """
        self.session.add(collection)
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def identifier_exists(self, singular: str, plural: str) -> bool:
        """Check whether any collection already uses this singular or plural.

        Identifiers share one route namespace, so a singular may not collide
        with another collection's plural either.
        """
        identifiers = (singular, plural)
        result = await self.session.execute(
            select(CollectionModel.id)
            .where(
                or_(
                    CollectionModel.id.in_(identifiers),
                    CollectionModel.singular.in_(identifiers),
                    CollectionModel.plural.in_(identifiers),
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[CollectionModel]:
        """Return every collection, oldest first."""
        result = await self.session.execute(
            select(CollectionModel).order_by(CollectionModel.created_at, CollectionModel.id)
        )
        return list(result.scalars().all())

    async def update(self, collection: CollectionModel) -> CollectionModel:
        await self.session.flush()
        await self.session.refresh(collection)
        return collection

    async def delete(self, collection: CollectionModel) -> None:
        await self.session.delete(collection)
        await self.session.flush()
