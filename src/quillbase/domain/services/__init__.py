"""Domain services for QuillBase.

Naming rules, the field type catalog, field list editing and the draft
workflow, plus the gateway contract and the server-side collection service.
"""

from quillbase.domain.services.collection_catalog import CollectionCatalog
from quillbase.domain.services.collection_draft import (
    CollectionDraftError,
    CollectionDraftWorkflow,
    DraftState,
    Notification,
)
from quillbase.domain.services.collection_gateway import (
    CollectionConflictError,
    CollectionGateway,
    CollectionNotFoundError,
    CollectionRejectedError,
    GatewayError,
    PermissionDeniedError,
    describe_failure,
)
from quillbase.domain.services.collection_name_validator import (
    CollectionNameValidationResult,
    CollectionNameValidator,
)
from quillbase.domain.services.collection_service import CollectionService
from quillbase.domain.services.field_list_editor import (
    FieldListEditor,
    FieldListError,
    PendingField,
)
from quillbase.domain.services.field_name_validator import (
    RESERVED_WORDS,
    naming_hints,
    normalize_to_camel_case,
    validate_field_name,
)
from quillbase.domain.services.field_type_registry import (
    FIELD_GROUPS,
    field_label,
    get_field_group,
    get_field_type,
    get_group_by_name,
    search_groups,
)

__all__ = [
    "CollectionCatalog",
    "CollectionConflictError",
    "CollectionDraftError",
    "CollectionDraftWorkflow",
    "CollectionGateway",
    "CollectionNameValidationResult",
    "CollectionNameValidator",
    "CollectionNotFoundError",
    "CollectionRejectedError",
    "CollectionService",
    "DraftState",
    "FIELD_GROUPS",
    "FieldListEditor",
    "FieldListError",
    "GatewayError",
    "Notification",
    "PendingField",
    "PermissionDeniedError",
    "RESERVED_WORDS",
    "describe_failure",
    "field_label",
    "get_field_group",
    "get_field_type",
    "get_group_by_name",
    "naming_hints",
    "normalize_to_camel_case",
    "search_groups",
    "validate_field_name",
]
