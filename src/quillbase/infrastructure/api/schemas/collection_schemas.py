"""Pydantic schemas for collection endpoints.

Field entries use snake_case keys (``field_name``); collection-level extras
use camelCase on the wire (``createdAt``, ``integrationId``).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quillbase.domain.entities.collection import Collection, CollectionField, CollectionType
from quillbase.domain.services.field_type_registry import field_label


class FieldDefinition(BaseModel):
    """A single field of a collection schema."""

    field_name: str = Field(..., min_length=1, max_length=64, description="camelCase field name")
    type: str = Field(..., description="Registered field type key, e.g. 'short' or 'date'")
    label: str | None = Field(default=None, description="Owning field group name")
    required: bool = Field(default=False, description="Whether entries must set the field")

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        return v.strip().lower()

    def to_entity(self) -> CollectionField:
        return CollectionField(
            field_name=self.field_name,
            type=self.type,
            label=self.label or field_label(self.type),
            required=self.required,
        )


class CreateCollectionRequest(BaseModel):
    """Request body for creating a collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, description="Defaults to the singular name")
    name: str = Field(default="", max_length=255, description="Display name")
    singular: str = Field(..., min_length=1, max_length=50)
    plural: str = Field(default="", max_length=64, description="Defaults to the generated plural")
    type: CollectionType = CollectionType.COLLECTION
    fields: list[FieldDefinition] = Field(default_factory=list)
    integration_id: str | None = Field(default=None, alias="integrationId")
    external_table_name: str | None = Field(default=None, alias="externalTableName")

    def to_entity(self) -> Collection:
        return Collection(
            id=self.id or self.singular,
            name=self.name,
            singular=self.singular,
            plural=self.plural,
            type=self.type,
            fields=[f.to_entity() for f in self.fields],
            integration_id=self.integration_id,
            external_table_name=self.external_table_name,
        )


class UpdateCollectionRequest(BaseModel):
    """Request body for updating a collection.

    Every key is optional. ``singular``, ``plural`` and ``type`` are accepted
    so a client can send the whole collection back, but must be unchanged.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=255)
    singular: str | None = None
    plural: str | None = None
    type: CollectionType | None = None
    fields: list[FieldDefinition] | None = None
    integration_id: str | None = Field(default=None, alias="integrationId")
    external_table_name: str | None = Field(default=None, alias="externalTableName")

    def to_changes(self) -> dict:
        """Return only the keys the client sent, as service arguments."""
        changes = self.model_dump(exclude_unset=True, exclude={"fields"})
        if self.fields is not None:
            changes["fields"] = [f.to_entity() for f in self.fields]
        return changes


class CollectionResponse(BaseModel):
    """A stored collection."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    singular: str
    plural: str
    type: CollectionType
    fields: list[FieldDefinition]
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")
    integration_id: str | None = Field(default=None, serialization_alias="integrationId")
    external_table_name: str | None = Field(
        default=None, serialization_alias="externalTableName"
    )

    @classmethod
    def from_entity(cls, collection: Collection) -> "CollectionResponse":
        return cls(
            id=collection.id,
            name=collection.name,
            singular=collection.singular,
            plural=collection.plural,
            type=collection.type,
            fields=[FieldDefinition(**f.to_dict()) for f in collection.fields],
            created_at=collection.created_at,
            updated_at=collection.updated_at,
            integration_id=collection.integration_id,
            external_table_name=collection.external_table_name,
        )


class DeleteCollectionResponse(BaseModel):
    """Result of deleting a collection."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    collection_id: str = Field(serialization_alias="collectionId")
    entries_deleted: int = Field(serialization_alias="entriesDeleted")
