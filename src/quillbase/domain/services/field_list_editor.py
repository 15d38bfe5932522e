"""Ordered field list editing for a collection being built.

Keeps the ordered list of selected field names and their chosen types,
and implements the add (two-phase), remove, move and drag-reorder
operations. Every operation either fully applies or raises
``FieldListError`` leaving the state untouched.
"""

from dataclasses import dataclass

from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection, CollectionField, CollectionType
from quillbase.domain.services.field_name_validator import (
    normalize_to_camel_case,
    validate_field_name,
)
from quillbase.domain.services.field_type_registry import (
    field_label,
    get_field_type,
    get_group_by_name,
)

logger = get_logger(__name__)


class FieldListError(Exception):
    """Raised when a field operation is rejected by a domain rule."""


@dataclass
class PendingField:
    """A field waiting for its name in the naming prompt.

    Attributes:
        group_name: Group the field was picked from.
        type: Concrete field type chosen in that group.
        field_name: Name typed so far (already normalized).
        error: Live validation message for ``field_name``.
    """

    group_name: str
    type: str
    field_name: str = ""
    error: str = ""


class FieldListEditor:
    """In-memory editor for a collection's ordered field list."""

    def __init__(
        self,
        fields: list[str] | None = None,
        types: dict[str, str] | None = None,
        collection_type: CollectionType = CollectionType.COLLECTION,
    ) -> None:
        fields = list(fields or [])
        types = dict(types or {})

        if len(set(fields)) != len(fields):
            raise FieldListError("Field names must be unique")
        missing = [name for name in fields if name not in types]
        if missing:
            raise FieldListError(f"Missing type for fields: {', '.join(missing)}")

        self._fields = fields
        self._types = {name: types[name] for name in fields}
        self.collection_type = CollectionType(collection_type)
        self.group_selections: dict[str, str] = {}
        self.pending: PendingField | None = None

    @classmethod
    def from_collection(cls, collection: Collection) -> "FieldListEditor":
        return cls(
            fields=[f.field_name for f in collection.fields],
            types={f.field_name: f.type for f in collection.fields},
            collection_type=collection.type,
        )

    @property
    def selected_fields(self) -> list[str]:
        return list(self._fields)

    @property
    def selected_types(self) -> dict[str, str]:
        return dict(self._types)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._types

    def filter(self, term: str) -> list[str]:
        """Selected field names containing ``term``, case-insensitively, in order."""
        needle = term.strip().lower()
        return [name for name in self._fields if needle in name.lower()]

    def _check_single_limit(self) -> None:
        if self.collection_type is CollectionType.SINGLE and len(self._fields) >= 1:
            raise FieldListError("Single types can only have one field.")

    def request_add(self, group_name: str, type_key: str) -> PendingField:
        """Start adding a field: remember the type and open the naming prompt.

        Args:
            group_name: Name of the group the type was picked from.
            type_key: Concrete field type key.

        Returns:
            The pending field awaiting a name.

        Raises:
            FieldListError: If the type is unknown or the collection is full.
        """
        self._check_single_limit()

        group = get_group_by_name(group_name)
        if group is None or group.get_type(type_key) is None:
            raise FieldListError(f"Unknown field type '{type_key}' for group '{group_name}'")

        self.group_selections[group_name] = type_key
        self.pending = PendingField(group_name=group_name, type=type_key)
        return self.pending

    def update_pending_name(self, raw: str) -> PendingField:
        """Keystroke handler for the naming prompt.

        Normalizes the typed text and refreshes the live validation message.
        """
        if self.pending is None:
            raise FieldListError("No field is being added")

        normalized = normalize_to_camel_case(raw)
        self.pending.field_name = normalized
        self.pending.error = validate_field_name(normalized)
        return self.pending

    def cancel_add(self) -> None:
        self.pending = None

    def confirm_add(self, field_name: str | None = None) -> str:
        """Finish adding the pending field under ``field_name``.

        Args:
            field_name: Name to use; defaults to the name typed in the prompt.

        Returns:
            The name of the added field.

        Raises:
            FieldListError: If nothing is pending, the name is invalid or
                already taken, or the collection is full.
        """
        if self.pending is None:
            raise FieldListError("No field is being added")

        name = (field_name if field_name is not None else self.pending.field_name).strip()

        error = validate_field_name(name)
        if error:
            self.pending.error = error
            raise FieldListError(error)

        if name in self._types:
            raise FieldListError("Field name already exists.")

        self._check_single_limit()

        self._fields = [*self._fields, name]
        self._types = {**self._types, name: self.pending.type}
        logger.debug("Field added", field_name=name, field_type=self.pending.type)
        self.pending = None
        return name

    def remove_field(self, field_name: str) -> bool:
        """Drop a field from the list and the type map.

        Returns:
            True if the field was present.
        """
        if field_name not in self._types:
            return False

        self._fields = [name for name in self._fields if name != field_name]
        types = dict(self._types)
        del types[field_name]
        self._types = types
        logger.debug("Field removed", field_name=field_name)
        return True

    def move_field(self, from_index: int, to_index: int) -> None:
        """Move one field, keeping the relative order of all others.

        This is a splice-and-reinsert, not a swap:
        ``move_field(0, 2)`` turns ``[a, b, c, d]`` into ``[b, c, a, d]``.

        Raises:
            FieldListError: If either index is out of range.
        """
        size = len(self._fields)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise FieldListError(f"Cannot move field from {from_index} to {to_index}")

        fields = list(self._fields)
        fields.insert(to_index, fields.pop(from_index))
        self._fields = fields

    def reorder_from_drag(self, active_id: str, over_id: str | None) -> bool:
        """Translate a drag-and-drop gesture into a move.

        Returns:
            True if the list changed; False for a drop on itself, outside
            the list, or on an unknown field.
        """
        if over_id is None or active_id == over_id:
            return False
        if active_id not in self._types or over_id not in self._types:
            return False

        self.move_field(self._fields.index(active_id), self._fields.index(over_id))
        return True

    def set_field_type(self, field_name: str, type_key: str) -> None:
        """Change the concrete type of an existing field."""
        if field_name not in self._types:
            raise FieldListError(f"Unknown field '{field_name}'")
        if get_field_type(type_key) is None:
            raise FieldListError(f"Unknown field type '{type_key}'")
        self._types = {**self._types, field_name: type_key}

    def to_fields(self) -> list[CollectionField]:
        """Assemble the ordered schema fields, labelled by their group."""
        return [
            CollectionField(
                field_name=name,
                type=self._types[name],
                label=field_label(self._types[name]),
            )
            for name in self._fields
        ]

    def copy(self) -> "FieldListEditor":
        """Return an independent staged copy of this editor."""
        staged = FieldListEditor(self._fields, self._types, self.collection_type)
        staged.group_selections = dict(self.group_selections)
        if self.pending is not None:
            staged.pending = PendingField(
                group_name=self.pending.group_name,
                type=self.pending.type,
                field_name=self.pending.field_name,
                error=self.pending.error,
            )
        return staged

    def adopt(self, staged: "FieldListEditor") -> None:
        """Commit a staged copy as the visible state."""
        self._fields = list(staged._fields)
        self._types = dict(staged._types)
        self.collection_type = staged.collection_type
        self.group_selections = dict(staged.group_selections)
        self.pending = staged.pending

    def clear(self) -> None:
        self._fields = []
        self._types = {}
        self.group_selections = {}
        self.pending = None
