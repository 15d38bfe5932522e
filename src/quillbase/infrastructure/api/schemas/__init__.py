"""API request/response schemas."""

from quillbase.infrastructure.api.schemas.collection_schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    DeleteCollectionResponse,
    FieldDefinition,
    UpdateCollectionRequest,
)

__all__ = [
    "CollectionResponse",
    "CreateCollectionRequest",
    "DeleteCollectionResponse",
    "FieldDefinition",
    "UpdateCollectionRequest",
]
