"""Static catalog of field groups and field types.

The catalog is data: adding a field type is a change to ``FIELD_GROUPS``,
never a runtime operation. Icons are stored on the group as icon names.
"""

from quillbase.domain.entities.field_type import (
    FieldComponent,
    FieldGroup,
    FieldType,
    FieldValidation,
)

FIELD_GROUPS: tuple[FieldGroup, ...] = (
    FieldGroup(
        name="Text",
        icon="FileText",
        types=(
            FieldType(
                type="short",
                label="Short Text",
                component=FieldComponent.INPUT,
                max_length=100,
                validation=FieldValidation(max_length=100),
            ),
            FieldType(
                type="long",
                label="Long Text",
                component=FieldComponent.TEXTAREA,
                max_length=300,
                validation=FieldValidation(max_length=300),
            ),
        ),
    ),
    FieldGroup(
        name="Rich Content",
        icon="Edit",
        types=(
            FieldType(type="richtext", label="Rich Text", component=FieldComponent.RICH_TEXT_EDITOR),
            FieldType(
                type="richmarkdown",
                label="Rich Markdown",
                component=FieldComponent.MARKDOWN_EDITOR,
            ),
        ),
    ),
    FieldGroup(
        name="Date",
        icon="Calendar",
        types=(FieldType(type="date", label="Date", component=FieldComponent.DATE_PICKER),),
    ),
    FieldGroup(
        name="Image",
        icon="Image",
        types=(
            FieldType(type="single", label="Single Image", component=FieldComponent.IMAGE_UPLOAD),
            FieldType(
                type="multiple",
                label="Multiple Images",
                component=FieldComponent.MULTI_IMAGE_UPLOAD,
            ),
        ),
    ),
    FieldGroup(
        name="Boolean",
        icon="ToggleLeft",
        types=(FieldType(type="boolean", label="Boolean", component=FieldComponent.CHECKBOX),),
    ),
    FieldGroup(
        name="Number",
        icon="Hash",
        types=(
            FieldType(type="integer", label="Integer", component=FieldComponent.NUMBER_INPUT),
            FieldType(type="decimal", label="Decimal", component=FieldComponent.DECIMAL_INPUT),
        ),
    ),
    FieldGroup(
        name="Link",
        icon="Globe",
        types=(
            FieldType(
                type="email",
                label="Email",
                component=FieldComponent.EMAIL_INPUT,
                validation=FieldValidation(pattern=r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),
            ),
            FieldType(
                type="url",
                label="URL",
                component=FieldComponent.URL_INPUT,
                validation=FieldValidation(pattern=r"^https?://\S+$"),
            ),
        ),
    ),
    FieldGroup(
        name="Color",
        icon="Palette",
        types=(
            FieldType(
                type="color",
                label="Color",
                component=FieldComponent.COLOR_INPUT,
                max_length=7,
                validation=FieldValidation(pattern=r"^#[0-9A-Fa-f]{6}$"),
            ),
        ),
    ),
)

_TYPE_INDEX: dict[str, tuple[FieldGroup, FieldType]] = {}
for _group in FIELD_GROUPS:
    for _field_type in _group.types:
        if _field_type.type in _TYPE_INDEX:
            raise RuntimeError(f"Duplicate field type key '{_field_type.type}'")
        _TYPE_INDEX[_field_type.type] = (_group, _field_type)


def get_field_type(type_key: str) -> FieldType | None:
    """Look up a field type by its key across all groups."""
    entry = _TYPE_INDEX.get(type_key)
    return entry[1] if entry else None


def get_field_group(type_key: str) -> FieldGroup | None:
    """Find the group that owns a field type."""
    entry = _TYPE_INDEX.get(type_key)
    return entry[0] if entry else None


def get_group_by_name(name: str) -> FieldGroup | None:
    for group in FIELD_GROUPS:
        if group.name == name:
            return group
    return None


def search_groups(term: str) -> list[FieldGroup]:
    """Filter groups by a case-insensitive substring of their name."""
    needle = term.strip().lower()
    return [group for group in FIELD_GROUPS if needle in group.name.lower()]


def field_label(type_key: str) -> str:
    """Label stored on a field: its group name, or the key itself when unknown."""
    group = get_field_group(type_key)
    return group.name if group else type_key


def all_type_keys() -> list[str]:
    return list(_TYPE_INDEX)
