"""Collection name normalization, validation and pluralization.

Converts free-form user input into a stable, resource-based collection
identifier (singular), a derived plural and a display name.

Rules applied to the normalized form:
- 2-50 characters
- Lowercase letters, digits and hyphens only
- Must start with a letter
- No file-extension suffix, no verb/action prefix, no path separators
"""

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CollectionNameValidationResult:
    """Outcome of normalizing and validating a raw collection name.

    Attributes:
        is_valid: True iff ``errors`` is empty.
        singular: Normalized identifier, present even when invalid.
        plural: Generated plural form (empty when invalid).
        display_name: Human label derived from ``singular``.
        errors: Every violated rule, in rule order.
    """

    is_valid: bool
    singular: str
    plural: str
    display_name: str
    errors: list[str] = field(default_factory=list)


# Irregular plurals, checked before the suffix rules
IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "foot": "feet",
    "tooth": "teeth",
    "goose": "geese",
    "mouse": "mice",
    "ox": "oxen",
    "sheep": "sheep",
    "deer": "deer",
    "fish": "fish",
    "moose": "moose",
    "species": "species",
    "series": "series",
}

# Words ending in "o" that only take "s"
VOICELESS_O_WORDS = ("photo", "piano", "halo")

ACTION_VERBS = (
    "get", "post", "put", "delete", "create", "edit", "update", "remove",
    "add", "fetch", "list", "show", "view", "manage", "build", "make", "set",
    "do", "run", "execute", "process", "handle", "perform", "action",
    "method", "call", "send", "receive", "export", "import", "download",
    "upload", "submit", "validate", "generate",
)

NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
FILE_EXTENSION_PATTERN = re.compile(
    r"\.(com|org|net|json|xml|txt|sql|api|db|rest)$", re.IGNORECASE
)
ACTION_PATTERN = re.compile(rf"^({'|'.join(ACTION_VERBS)})", re.IGNORECASE)


class CollectionNameValidator:
    """Normalizer and validator for collection names."""

    MIN_LENGTH = 2
    MAX_LENGTH = 50

    @classmethod
    def normalize(cls, raw: str) -> str:
        """Normalize user input into a collection identifier.

        Examples:
            >>> CollectionNameValidator.normalize("  Blog   Post ")
            'blog-post'
            >>> CollectionNameValidator.normalize("Café & Bar!")
            'caf-bar'
        """
        name = raw.lower().strip()
        name = re.sub(r"\s+", "-", name)
        name = re.sub(r"[^a-z0-9-]", "", name)
        name = re.sub(r"-+", "-", name)
        return name.strip("-")

    @classmethod
    def validate(cls, normalized: str) -> list[str]:
        """Validate a normalized collection name.

        Every rule is checked so the caller can show all violations at once.

        Args:
            normalized: Output of :meth:`normalize`.

        Returns:
            List of error messages (empty if valid).
        """
        if not normalized:
            return ["Collection name cannot be empty"]

        errors: list[str] = []

        if len(normalized) < cls.MIN_LENGTH:
            errors.append(f"Collection name must be at least {cls.MIN_LENGTH} characters")

        if len(normalized) > cls.MAX_LENGTH:
            errors.append(f"Collection name must be at most {cls.MAX_LENGTH} characters")

        if not NAME_PATTERN.match(normalized):
            errors.append(
                "Collection name must start with a letter and contain only "
                "lowercase letters, numbers, and hyphens"
            )

        if normalized.startswith("-") or normalized.endswith("-"):
            errors.append("Collection name cannot start or end with a hyphen")

        if "--" in normalized:
            errors.append("Collection name cannot contain consecutive hyphens")

        if FILE_EXTENSION_PATTERN.search(normalized):
            errors.append("Collection name cannot contain file extensions")

        if ACTION_PATTERN.match(normalized):
            errors.append(
                "Collection name should be a semantic, resource-based noun, not an action or verb"
            )

        if "/" in normalized or "\\" in normalized:
            errors.append(
                "Collection name cannot contain path separators or hierarchical structures"
            )

        return errors

    @classmethod
    def pluralize(cls, singular: str) -> str:
        """Convert a singular noun to its plural form using basic English rules.

        Examples:
            >>> CollectionNameValidator.pluralize("category")
            'categories'
            >>> CollectionNameValidator.pluralize("person")
            'people'
        """
        word = singular.lower()

        if word in IRREGULAR_PLURALS:
            return IRREGULAR_PLURALS[word]

        if word.endswith("y"):
            return f"{word[:-1]}ies"

        if word.endswith(("s", "ss", "x", "z", "ch", "sh")):
            return f"{word}es"

        if word.endswith("o"):
            if word.endswith(VOICELESS_O_WORDS):
                return f"{word}s"
            return f"{word}es"

        if word.endswith("fe"):
            return f"{word[:-2]}ves"

        if word.endswith("f"):
            return f"{word[:-1]}ves"

        return f"{word}s"

    @classmethod
    def to_display_name(cls, singular: str) -> str:
        """Turn ``blog-post`` into ``Blog Post``."""
        return " ".join(part[:1].upper() + part[1:] for part in singular.split("-") if part)

    @classmethod
    def validate_and_normalize(cls, raw: str) -> CollectionNameValidationResult:
        """Run the complete normalization and validation pipeline.

        Never raises: empty or garbage input produces an invalid result.

        Args:
            raw: Raw user input.

        Returns:
            Validation result with singular, plural and display name.
        """
        singular = cls.normalize(raw)
        errors = cls.validate(singular)
        is_valid = not errors

        return CollectionNameValidationResult(
            is_valid=is_valid,
            singular=singular,
            plural=cls.pluralize(singular) if is_valid else "",
            display_name=cls.to_display_name(singular),
            errors=errors,
        )

    @classmethod
    def resolve_plural(
        cls, result: CollectionNameValidationResult, custom_plural: str | None
    ) -> str:
        """Return the user's plural override when set, else the generated one."""
        if custom_plural and custom_plural.strip():
            return custom_plural.strip()
        return result.plural

    @staticmethod
    def generate_routes(singular: str, plural: str) -> dict[str, str]:
        """Build the API routes derived from a collection's names."""
        return {
            "singular_route": f"/{singular}/:id",
            "plural_route": f"/{plural}",
            "create_route": f"/{plural}/new",
        }
