"""Domain entities for QuillBase.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from quillbase.domain.entities.collection import (
    Collection,
    CollectionField,
    CollectionType,
)
from quillbase.domain.entities.field_type import (
    FieldComponent,
    FieldGroup,
    FieldType,
    FieldValidation,
)

__all__ = [
    "Collection",
    "CollectionField",
    "CollectionType",
    "FieldComponent",
    "FieldGroup",
    "FieldType",
    "FieldValidation",
]
