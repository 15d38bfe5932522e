"""SQLAlchemy models for the collection store."""

from quillbase.infrastructure.persistence.models.collection import CollectionModel
from quillbase.infrastructure.persistence.models.entry import EntryModel

__all__ = [
    "CollectionModel",
    "EntryModel",
]
