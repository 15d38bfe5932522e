"""Field type catalog entities.

Field types are static definitions: they are declared in the registry and
never mutated at runtime.
"""

from dataclasses import dataclass
from enum import Enum


class FieldComponent(str, Enum):
    """Rendering hint consumed by the field renderer."""

    INPUT = "Input"
    TEXTAREA = "Textarea"
    DATE_PICKER = "DatePicker"
    IMAGE_UPLOAD = "ImageUpload"
    MULTI_IMAGE_UPLOAD = "MultiImageUpload"
    RICH_TEXT_EDITOR = "RichTextEditor"
    MARKDOWN_EDITOR = "MarkdownEditor"
    CHECKBOX = "Checkbox"
    NUMBER_INPUT = "NumberInput"
    DECIMAL_INPUT = "DecimalInput"
    EMAIL_INPUT = "EmailInput"
    URL_INPUT = "UrlInput"
    COLOR_INPUT = "ColorInput"


@dataclass(frozen=True)
class FieldValidation:
    """Value constraints applied to entries of a field type."""

    required: bool | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None


@dataclass(frozen=True)
class FieldType:
    """A concrete field type.

    Attributes:
        type: Key, unique across every group of the registry.
        label: Human-readable name.
        component: Rendering hint for the field renderer.
        max_length: Input length cap, when the type has one.
        validation: Value constraints, when the type has any.
    """

    type: str
    label: str
    component: FieldComponent
    max_length: int | None = None
    validation: FieldValidation | None = None


@dataclass(frozen=True)
class FieldGroup:
    """A named bucket of related field types, shown as one card in the picker."""

    name: str
    icon: str
    types: tuple[FieldType, ...]

    def get_type(self, type_key: str) -> FieldType | None:
        for field_type in self.types:
            if field_type.type == type_key:
                return field_type
        return None
