"""Field name validation and normalization.

Field names follow camelCase: they start with a lowercase letter, contain
only ASCII letters and digits, and must not collide with a reserved word.
Validation stops at the first violated rule and returns a human-readable
message, so it can run on every keystroke.
"""

import re

from quillbase.domain.entities.field_type import FieldComponent
from quillbase.domain.services.field_type_registry import get_field_type

# Language keywords plus API-envelope words that clash with serialization
# envelopes and routing conventions.
RESERVED_WORDS = frozenset({
    "abstract", "arguments", "await", "boolean", "break", "byte", "case",
    "catch", "char", "class", "const", "continue", "debugger", "default",
    "delete", "do", "double", "else", "enum", "eval", "export", "extends",
    "false", "final", "finally", "float", "for", "function", "goto", "if",
    "implements", "import", "in", "instanceof", "int", "interface", "let",
    "long", "native", "new", "null", "package", "private", "protected",
    "public", "return", "short", "static", "super", "switch", "synchronized",
    "this", "throw", "throws", "transient", "true", "try", "typeof", "var",
    "void", "volatile", "while", "with", "yield",
    "id", "type", "data", "value", "result", "error", "message", "status",
    "code", "response", "request", "meta", "config", "options", "params",
    "args", "props", "state",
})

CAMEL_CASE_PATTERN = re.compile(r"^[a-z][a-zA-Z0-9]*$")
BOOLEAN_PREFIXES = ("is", "has", "can", "should")

MIN_FIELD_NAME_LENGTH = 2


def validate_field_name(name: str) -> str:
    """Validate a proposed field name.

    Args:
        name: The field name as typed by the user.

    Returns:
        The first violated rule as a message, or an empty string if valid.
    """
    trimmed = name.strip()
    if not trimmed:
        return "Field name is required"

    if not CAMEL_CASE_PATTERN.match(trimmed):
        if re.search(r"\s", trimmed):
            return "Field name cannot contain spaces. Use camelCase instead."
        if trimmed[0].isdigit():
            return "Field name must start with a lowercase letter, not a number."
        if re.search(r"[^a-zA-Z0-9]", trimmed):
            return (
                "Field name can only contain letters and numbers. "
                "Use camelCase for multi-word names."
            )
        return "Field name must start with a lowercase letter."

    if len(trimmed) < MIN_FIELD_NAME_LENGTH:
        return "Field name must be descriptive and at least 2 characters."

    if trimmed in RESERVED_WORDS:
        return f'"{trimmed}" is a reserved word and cannot be used.'

    return ""


def normalize_to_camel_case(name: str) -> str:
    """Coerce typed text towards a valid field name.

    Strips every non-alphanumeric character, then any leading digits, and
    lowercases the first character.

    Examples:
        >>> normalize_to_camel_case("Published At!")
        'publishedAt'
        >>> normalize_to_camel_case("42Title")
        'title'
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]", "", name)
    cleaned = re.sub(r"^[0-9]+", "", cleaned)
    if cleaned[:1].isupper():
        cleaned = cleaned[0].lower() + cleaned[1:]
    return cleaned


def naming_hints(name: str, type_key: str | None = None) -> list[str]:
    """Suggest semantic naming conventions for a field.

    Hints are advisory and never make a name invalid.
    """
    hints: list[str] = []
    field_type = get_field_type(type_key) if type_key else None
    component = field_type.component if field_type else None

    if component is FieldComponent.CHECKBOX and not name.startswith(BOOLEAN_PREFIXES):
        hints.append("Boolean fields usually start with is, has, can, or should.")
    if component is FieldComponent.DATE_PICKER and not name.endswith("At"):
        hints.append("Date/time fields usually end with At.")
    if component is FieldComponent.MULTI_IMAGE_UPLOAD and not name.endswith("s"):
        hints.append("Fields holding several values usually use a plural noun.")
    if name.endswith("ID"):
        hints.append("Relation fields usually end with Id.")

    return hints
