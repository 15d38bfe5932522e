"""Unit tests for the field type registry."""

from quillbase.domain.entities.field_type import FieldComponent
from quillbase.domain.services.field_type_registry import (
    FIELD_GROUPS,
    all_type_keys,
    field_label,
    get_field_group,
    get_field_type,
    get_group_by_name,
    search_groups,
)


def test_type_keys_are_unique():
    keys = [t.type for group in FIELD_GROUPS for t in group.types]
    assert len(keys) == len(set(keys))
    assert sorted(keys) == sorted(all_type_keys())


def test_every_component_is_covered():
    components = {t.component for group in FIELD_GROUPS for t in group.types}
    assert components == set(FieldComponent)


def test_get_field_type():
    short = get_field_type("short")
    assert short is not None
    assert short.component is FieldComponent.INPUT
    assert short.max_length == 100
    assert get_field_type("nope") is None


def test_get_field_group():
    assert get_field_group("richmarkdown").name == "Rich Content"
    assert get_field_group("multiple").name == "Image"
    assert get_field_group("nope") is None


def test_get_group_by_name():
    group = get_group_by_name("Date")
    assert group is not None
    assert [t.type for t in group.types] == ["date"]
    assert get_group_by_name("date") is None


def test_search_groups_is_case_insensitive():
    assert [g.name for g in search_groups("TEXT")] == ["Text"]
    assert [g.name for g in search_groups("con")] == ["Rich Content"]
    assert len(search_groups("")) == len(FIELD_GROUPS)
    assert search_groups("zzz") == []


def test_field_label_is_group_name():
    assert field_label("long") == "Text"
    assert field_label("boolean") == "Boolean"
    assert field_label("unknown") == "unknown"


def test_groups_carry_icons():
    assert all(group.icon for group in FIELD_GROUPS)
    assert get_group_by_name("Image").icon == "Image"


def test_color_validation_pattern():
    color = get_field_type("color")
    assert color.validation is not None
    assert color.validation.pattern == r"^#[0-9A-Fa-f]{6}$"


def test_group_get_type_only_knows_its_own_types():
    text = get_group_by_name("Text")
    assert text.get_type("short").label == "Short Text"
    assert text.get_type("date") is None
