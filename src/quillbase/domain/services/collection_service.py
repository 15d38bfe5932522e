"""Collection service for business logic.

Server side of the collections API: validates names and field lists,
enforces write-once identifiers, and deletes a collection together with
its entries.
"""

import json
from dataclasses import replace
from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection, CollectionField, CollectionType
from quillbase.domain.services.collection_name_validator import CollectionNameValidator
from quillbase.domain.services.field_name_validator import validate_field_name
from quillbase.domain.services.field_type_registry import get_field_type
from quillbase.infrastructure.persistence.models import CollectionModel
from quillbase.infrastructure.persistence.repositories import (
    CollectionRepository,
    EntryRepository,
)

logger = get_logger(__name__)


class CollectionService:
    """Service for collection business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.repository = CollectionRepository(session)
        self.entries = EntryRepository(session)

    @staticmethod
    def to_entity(model: CollectionModel) -> Collection:
        """Map a collection row to the domain entity."""
        return Collection(
            id=model.id,
            name=model.name,
            singular=model.singular,
            plural=model.plural,
            type=CollectionType(model.type),
            fields=[CollectionField.from_dict(f) for f in json.loads(model.fields or "[]")],
            created_at=model.created_at,
            updated_at=model.updated_at,
            integration_id=model.integration_id,
            external_table_name=model.external_table_name,
        )

    @staticmethod
    def validate_fields(
        fields: list[CollectionField],
        collection_type: CollectionType,
        enforce_minimum: bool = True,
    ) -> list[str]:
        """Validate a field list for a collection of ``collection_type``.

        The field minimum only applies when a collection is first stored;
        a saved collection may drop below it. The "single" maximum always
        applies.

        Returns:
            Error messages, prefixed with the offending field name; empty
            when the list is acceptable.
        """
        errors: list[str] = []
        seen: set[str] = set()

        for field in fields:
            name_error = validate_field_name(field.field_name)
            if name_error:
                errors.append(f"{field.field_name or '<empty>'}: {name_error}")
            if field.field_name in seen:
                errors.append(f"{field.field_name}: Field name already exists.")
            seen.add(field.field_name)
            if get_field_type(field.type) is None:
                errors.append(f"{field.field_name}: Unknown field type '{field.type}'")

        if enforce_minimum and len(fields) < collection_type.min_fields:
            errors.append(
                f"A {collection_type.value} requires at least "
                f"{collection_type.min_fields} field(s)"
            )
        if collection_type is CollectionType.SINGLE and len(fields) > 1:
            errors.append("Single types can only have one field.")

        return errors

    @classmethod
    def prepare_new(cls, collection: Collection) -> Collection:
        """Validate a collection about to be stored for the first time.

        The id must equal the normalized singular; a blank plural or name
        is filled in from the singular.

        Returns:
            The collection with its plural and name resolved.

        Raises:
            ValueError: If the identifiers or the field list are invalid.
        """
        result = CollectionNameValidator.validate_and_normalize(collection.singular)
        if not result.is_valid:
            raise ValueError(f"Validation failed: {'; '.join(result.errors)}")
        if result.singular != collection.singular:
            raise ValueError(
                f"Validation failed: singular must be normalized ('{result.singular}')"
            )
        if collection.id != collection.singular:
            raise ValueError("Validation failed: id must equal the singular name")

        plural = collection.plural.strip() or result.plural
        normalized_plural = CollectionNameValidator.normalize(plural)
        if not normalized_plural or normalized_plural != plural:
            raise ValueError(
                f"Validation failed: plural must be normalized ('{normalized_plural}')"
            )

        field_errors = cls.validate_fields(collection.fields, collection.type)
        if field_errors:
            raise ValueError(f"Validation failed: {'; '.join(field_errors)}")

        return replace(
            collection,
            plural=plural,
            name=collection.name.strip() or result.display_name,
        )

    async def list_collections(self) -> list[Collection]:
        models = await self.repository.list_all()
        return [self.to_entity(m) for m in models]

    async def get_collection(self, collection_id: str) -> Collection:
        """Get a collection by ID.

        Raises:
            ValueError: If the collection does not exist.
        """
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise ValueError(f"Collection '{collection_id}' not found")
        return self.to_entity(model)

    async def create_collection(self, collection: Collection) -> Collection:
        """Validate and store a new collection.

        Raises:
            ValueError: If validation fails or the identifiers are taken.
        """
        collection = self.prepare_new(collection)

        if await self.repository.identifier_exists(collection.singular, collection.plural):
            raise ValueError(f"Collection '{collection.singular}' already exists")

        model = CollectionModel(
            id=collection.id,
            name=collection.name,
            singular=collection.singular,
            plural=collection.plural,
            type=collection.type.value,
            fields=json.dumps([f.to_dict() for f in collection.fields]),
            integration_id=collection.integration_id,
            external_table_name=collection.external_table_name,
        )
        created = await self.repository.create(model)

        logger.info(
            "Collection created",
            collection_id=created.id,
            plural=created.plural,
            collection_type=created.type,
            field_count=len(collection.fields),
        )
        return self.to_entity(created)

    async def update_collection(self, collection_id: str, changes: dict[str, Any]) -> Collection:
        """Apply a partial update to a collection.

        Args:
            collection_id: The collection ID.
            changes: Any of ``name``, ``fields``, ``integration_id``,
                ``external_table_name``. ``singular``, ``plural`` and ``type``
                may be present but must match the stored values.

        Raises:
            ValueError: If not found, immutable identifiers change, or the
                new field list is invalid.
        """
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise ValueError(f"Collection '{collection_id}' not found")

        for key in ("singular", "plural", "type"):
            value = changes.get(key)
            if value is not None and str(getattr(value, "value", value)) != getattr(model, key):
                raise ValueError(
                    f"Collection {key} is immutable once created "
                    f"(current: '{getattr(model, key)}')"
                )

        if changes.get("name") is not None:
            name = str(changes["name"]).strip()
            if not name:
                raise ValueError("Validation failed: Collection name cannot be empty")
            model.name = name

        if changes.get("fields") is not None:
            fields: list[CollectionField] = changes["fields"]
            field_errors = self.validate_fields(
                fields, CollectionType(model.type), enforce_minimum=False
            )
            if field_errors:
                raise ValueError(f"Validation failed: {'; '.join(field_errors)}")
            model.fields = json.dumps([f.to_dict() for f in fields])

        for key in ("integration_id", "external_table_name"):
            if key in changes:
                setattr(model, key, changes[key])

        model.updated_at = func.now()
        updated = await self.repository.update(model)

        logger.info("Collection updated", collection_id=collection_id)
        return self.to_entity(updated)

    async def delete_collection(self, collection_id: str) -> int:
        """Delete a collection and all of its entries.

        Returns:
            Number of entries deleted with the collection.

        Raises:
            ValueError: If the collection does not exist.
        """
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise ValueError(f"Collection '{collection_id}' not found")

        entries_deleted = await self.entries.delete_for_collection(collection_id)
        await self.repository.delete(model)

        logger.info(
            "Collection deleted",
            collection_id=collection_id,
            entries_deleted=entries_deleted,
        )
        return entries_deleted
