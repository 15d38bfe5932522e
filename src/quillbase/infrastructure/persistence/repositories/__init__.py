"""Persistence repositories for database operations."""

from quillbase.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from quillbase.infrastructure.persistence.repositories.entry_repository import (
    EntryRepository,
)

__all__ = [
    "CollectionRepository",
    "EntryRepository",
]
