"""Collection entity for user-defined content schemas.

A collection is a named schema with an ordered list of typed fields. It is
either multi-entry ("collection") or single-entry ("single").
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


class CollectionType(str, Enum):
    """Supported collection kinds."""

    COLLECTION = "collection"
    SINGLE = "single"

    @property
    def min_fields(self) -> int:
        """Minimum number of fields required before the collection can be saved."""
        return 2 if self is CollectionType.COLLECTION else 1


@dataclass
class CollectionField:
    """A single named, typed slot within a collection schema.

    Attributes:
        field_name: Identifier, unique within the owning collection.
        type: Key of a registered field type.
        label: Name of the owning field group at the time of addition.
        required: Whether entries must provide a value.
    """

    field_name: str
    type: str
    label: str
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_name": self.field_name,
            "type": self.type,
            "label": self.label,
            "required": self.required,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionField":
        return cls(
            field_name=data["field_name"],
            type=data["type"],
            label=data.get("label", data["type"]),
            required=bool(data.get("required", False)),
        )


@dataclass
class Collection:
    """Collection entity representing a persisted content schema.

    Attributes:
        id: Stable identifier, equal to ``singular`` at creation time.
        name: Display name.
        singular: Identifier used for single-resource routes. Write-once.
        plural: Identifier used for collection routes. Write-once.
        type: Multi-entry or single-entry collection.
        fields: Ordered field list; order determines display order.
        created_at: Assigned by the store on creation.
        updated_at: Assigned by the store on every write.
        integration_id: Optional external database integration.
        external_table_name: Table backing the collection in that integration.
    """

    id: str
    name: str
    singular: str
    plural: str
    type: CollectionType = CollectionType.COLLECTION
    fields: list[CollectionField] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    integration_id: str | None = None
    external_table_name: str | None = None

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.singular:
            raise ValueError("Collection singular name is required")
        self.type = CollectionType(self.type)

    @property
    def field_names(self) -> list[str]:
        return [f.field_name for f in self.fields]

    def without_timestamps(self) -> "Collection":
        """Return a copy suitable for create/update calls."""
        return replace(
            self,
            fields=[replace(f) for f in self.fields],
            created_at=None,
            updated_at=None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON wire shape used by the collections API."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "singular": self.singular,
            "plural": self.plural,
            "type": self.type.value,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.integration_id is not None:
            data["integrationId"] = self.integration_id
        if self.external_table_name is not None:
            data["externalTableName"] = self.external_table_name
        if self.created_at is not None:
            data["createdAt"] = self.created_at.isoformat()
        if self.updated_at is not None:
            data["updatedAt"] = self.updated_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Collection":
        """Build a collection from its JSON wire shape."""
        created_at = data.get("createdAt")
        updated_at = data.get("updatedAt")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            singular=data["singular"],
            plural=data.get("plural", ""),
            type=CollectionType(data.get("type", CollectionType.COLLECTION.value)),
            fields=[CollectionField.from_dict(f) for f in data.get("fields", [])],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
            integration_id=data.get("integrationId"),
            external_table_name=data.get("externalTableName"),
        )
