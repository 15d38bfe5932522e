"""Collection draft workflow.

State machine behind the collection builder:

    EMPTY --submit_name--> CREATED --save--> SAVED
    CREATED|SAVED --discard--> EMPTY
    SAVED --confirm_delete--> EMPTY (entries are deleted by the store)

``EDITING_NAME`` and ``CONFIRMING_DELETE`` are side states entered from
CREATED or SAVED and left back to where they came from. Once SAVED, the
collection id, singular and plural are locked; only the display name and
the field list may change, and every field change is written through the
gateway before it becomes visible.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection, CollectionType
from quillbase.domain.services.collection_catalog import CollectionCatalog
from quillbase.domain.services.collection_gateway import (
    CollectionGateway,
    CollectionNotFoundError,
    GatewayError,
    NOT_FOUND_MESSAGE,
    describe_failure,
)
from quillbase.domain.services.collection_name_validator import (
    CollectionNameValidationResult,
    CollectionNameValidator,
)
from quillbase.domain.services.field_list_editor import (
    FieldListEditor,
    FieldListError,
    PendingField,
)

logger = get_logger(__name__)

IMMUTABLE_IDENTIFIERS_MESSAGE = (
    "Collection identifiers are immutable once created to ensure API route "
    "stability and database consistency."
)


class DraftState(str, Enum):
    """States of the collection draft workflow."""

    EMPTY = "empty"
    CREATED = "created"
    SAVED = "saved"
    EDITING_NAME = "editing_name"
    CONFIRMING_DELETE = "confirming_delete"


class CollectionDraftError(Exception):
    """Raised when an operation is not available in the current state."""


@dataclass(frozen=True)
class Notification:
    """A transient message for the user."""

    level: Literal["success", "error", "info"]
    message: str


NotifyCallback = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    log = logger.error if notification.level == "error" else logger.info
    log("Notification", level=notification.level, notification=notification.message)


class CollectionDraftWorkflow:
    """Drive the creation, editing and deletion of one collection."""

    def __init__(
        self,
        gateway: CollectionGateway,
        notify: NotifyCallback | None = None,
        catalog: CollectionCatalog | None = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            gateway: Store used to persist the collection.
            notify: Receives user-facing notifications; logs them by default.
            catalog: Shared local collection list, kept in step on every write.
        """
        self.catalog = catalog or CollectionCatalog(gateway)
        self._notify = notify or log_notification
        self._generation = 0
        self._reset()

    def _reset(self) -> None:
        # Results of writes started under an older generation are dropped.
        self._generation += 1
        self.state = DraftState.EMPTY
        self._return_state: DraftState | None = None
        self.name_input = ""
        self.name_validation: CollectionNameValidationResult | None = None
        self.custom_plural = ""
        self.display_name = ""
        self.collection_type = CollectionType.COLLECTION
        self.editor = FieldListEditor()
        self.collection: Collection | None = None
        self.is_pending = False

    @property
    def gateway(self) -> CollectionGateway:
        return self.catalog.gateway

    # -- derived state -------------------------------------------------

    @property
    def base_state(self) -> DraftState:
        """The main state, looking through any open side state."""
        if self.state in (DraftState.EDITING_NAME, DraftState.CONFIRMING_DELETE):
            return self._return_state or DraftState.EMPTY
        return self.state

    @property
    def is_saved(self) -> bool:
        return self.collection is not None

    @property
    def singular(self) -> str:
        if self.collection is not None:
            return self.collection.singular
        return self.name_validation.singular if self.name_validation else ""

    @property
    def plural(self) -> str:
        if self.collection is not None:
            return self.collection.plural
        if self.name_validation is None:
            return ""
        return CollectionNameValidator.resolve_plural(self.name_validation, self.custom_plural)

    @property
    def routes(self) -> dict[str, str]:
        return CollectionNameValidator.generate_routes(self.singular, self.plural)

    @property
    def selected_fields(self) -> list[str]:
        return self.editor.selected_fields

    @property
    def selected_types(self) -> dict[str, str]:
        return self.editor.selected_types

    def filter_fields(self, term: str) -> list[str]:
        """Search box over the current fields."""
        return self.editor.filter(term)

    @property
    def min_fields(self) -> int:
        return self.collection_type.min_fields

    @property
    def can_save(self) -> bool:
        """Whether the save action is enabled."""
        return (
            self.state is DraftState.CREATED
            and not self.is_pending
            and self.name_validation is not None
            and self.name_validation.is_valid
            and len(self.editor) >= self.min_fields
        )

    def _require(self, *states: DraftState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise CollectionDraftError(
                f"Operation not available in state '{self.state.value}' (expected {allowed})"
            )

    def _error(self, message: str) -> None:
        self._notify(Notification("error", message))

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # -- naming --------------------------------------------------------

    def preview_name(self, raw: str) -> CollectionNameValidationResult | None:
        """Keystroke handler for the name input.

        Only available before the name is submitted. Resets the custom
        plural, since it was derived from the previous name.
        """
        self._require(DraftState.EMPTY)
        self.name_input = raw
        self.custom_plural = ""
        self.name_validation = (
            CollectionNameValidator.validate_and_normalize(raw) if raw.strip() else None
        )
        return self.name_validation

    def set_custom_plural(self, value: str) -> None:
        if self.is_saved:
            raise CollectionDraftError(IMMUTABLE_IDENTIFIERS_MESSAGE)
        self.custom_plural = value.strip()

    def submit_name(
        self,
        raw: str,
        collection_type: CollectionType | str = CollectionType.COLLECTION,
    ) -> CollectionNameValidationResult:
        """Fix the collection name and type, enabling field editing.

        An invalid name leaves the workflow EMPTY and notifies the first error.
        """
        self._require(DraftState.EMPTY)

        custom_plural = self.custom_plural if raw == self.name_input else ""
        result = self.preview_name(raw)
        self.custom_plural = custom_plural
        if result is None:
            result = CollectionNameValidator.validate_and_normalize(raw)
            self.name_validation = result

        if not result.is_valid:
            self._error(result.errors[0])
            return result

        self.collection_type = CollectionType(collection_type)
        self.display_name = result.display_name
        self.editor = FieldListEditor(collection_type=self.collection_type)
        self.state = DraftState.CREATED

        logger.info(
            "Collection draft created",
            singular=result.singular,
            plural=self.plural,
            collection_type=self.collection_type.value,
        )
        return result

    # -- fields --------------------------------------------------------

    def _require_fields_editable(self) -> None:
        self._require(DraftState.CREATED, DraftState.SAVED)

    def request_add_field(self, group_name: str, type_key: str) -> PendingField | None:
        """Open the naming prompt for a field of ``type_key``."""
        self._require_fields_editable()
        try:
            return self.editor.request_add(group_name, type_key)
        except FieldListError as e:
            self._error(str(e))
            return None

    def update_field_name(self, raw: str) -> PendingField:
        self._require_fields_editable()
        return self.editor.update_pending_name(raw)

    def cancel_add_field(self) -> None:
        self.editor.cancel_add()

    async def confirm_add_field(self, field_name: str | None = None) -> bool:
        return await self._apply(lambda staged: bool(staged.confirm_add(field_name)), "add")

    async def remove_field(self, field_name: str) -> bool:
        return await self._apply(lambda staged: staged.remove_field(field_name), "remove")

    async def move_field(self, from_index: int, to_index: int) -> bool:
        def move(staged: FieldListEditor) -> bool:
            staged.move_field(from_index, to_index)
            return from_index != to_index

        return await self._apply(move, "move")

    async def reorder_from_drag(self, active_id: str, over_id: str | None) -> bool:
        return await self._apply(lambda staged: staged.reorder_from_drag(active_id, over_id), "reorder")

    async def set_field_type(self, field_name: str, type_key: str) -> bool:
        def retype(staged: FieldListEditor) -> bool:
            staged.set_field_type(field_name, type_key)
            return True

        return await self._apply(retype, "retype")

    async def _apply(self, operation: Callable[[FieldListEditor], bool], action: str) -> bool:
        """Run a field operation on a staged copy and commit it on success.

        When the collection is saved, the staged field list is written
        through the gateway first; a failed write discards the copy.
        """
        self._require_fields_editable()
        if self.is_pending:
            logger.debug("Field operation ignored while a save is pending", action=action)
            return False

        staged = self.editor.copy()
        try:
            changed = operation(staged)
        except FieldListError as e:
            if staged.pending is not None and self.editor.pending is not None:
                self.editor.pending.error = staged.pending.error
            self._error(str(e))
            return False

        if not changed:
            self.editor.adopt(staged)
            return False

        if self.collection is not None:
            updated = await self._write(
                replace(self.collection, fields=staged.to_fields()), action=action
            )
            if updated is None:
                return False
            self.collection = updated

        self.editor.adopt(staged)
        return True

    async def _write(self, collection: Collection, action: str) -> Collection | None:
        """Send an update; None if it failed or the draft was reset meanwhile."""
        generation = self._generation
        self.is_pending = True
        try:
            updated = await self.catalog.update(collection.id, collection)
        except GatewayError as e:
            if not self._is_current(generation):
                return None
            logger.warning(
                "Collection auto-save failed",
                collection_id=collection.id,
                action=action,
                error=str(e),
            )
            self._error(describe_failure(e))
            return None
        finally:
            if self._is_current(generation):
                self.is_pending = False

        if not self._is_current(generation):
            logger.info("Stale auto-save result dropped", collection_id=collection.id, action=action)
            return None
        return updated

    # -- save / discard ------------------------------------------------

    async def save(self) -> Collection | None:
        """Persist the draft.

        Below the field minimum, with an invalid name, or while another
        write is in flight, the save action is disabled: nothing is sent
        and None is returned. A result arriving after the draft was
        discarded is dropped.
        """
        if not self.can_save:
            logger.debug(
                "Save ignored",
                state=self.state.value,
                fields=len(self.editor),
                min_fields=self.min_fields,
                pending=self.is_pending,
            )
            return None

        collection = Collection(
            id=self.singular,
            name=self.display_name,
            singular=self.singular,
            plural=self.plural,
            type=self.collection_type,
            fields=self.editor.to_fields(),
        )

        generation = self._generation
        self.is_pending = True
        try:
            created = await self.catalog.create(collection)
        except GatewayError as e:
            if self._is_current(generation):
                logger.warning("Collection save failed", collection_id=collection.id, error=str(e))
                self._error(describe_failure(e))
            return None
        finally:
            if self._is_current(generation):
                self.is_pending = False

        if not self._is_current(generation):
            logger.info("Save result dropped after discard", collection_id=created.id)
            return None

        self.collection = created
        self.state = DraftState.SAVED
        logger.info("Collection saved", collection_id=created.id, fields=len(created.fields))
        self._notify(Notification("success", f'Collection "{created.name}" saved'))
        return created

    def discard(self) -> None:
        """Drop the draft and every name, type and field choice."""
        self._require(
            DraftState.CREATED,
            DraftState.SAVED,
            DraftState.EDITING_NAME,
            DraftState.CONFIRMING_DELETE,
        )
        logger.info("Collection draft discarded", singular=self.singular)
        self._reset()

    async def load(self, collection_id: str) -> bool:
        """Open an existing collection for field editing.

        A missing collection leaves the workflow EMPTY and notifies.
        """
        self._require(DraftState.EMPTY)
        generation = self._generation
        try:
            collection = await self.catalog.get(collection_id)
        except CollectionNotFoundError:
            self._notify(Notification("error", NOT_FOUND_MESSAGE))
            return False
        except GatewayError as e:
            self._error(describe_failure(e))
            return False

        if not self._is_current(generation) or self.state is not DraftState.EMPTY:
            logger.info("Loaded collection dropped; draft changed meanwhile", collection_id=collection_id)
            return False

        self.collection = collection
        self.collection_type = collection.type
        self.display_name = collection.name
        self.name_input = collection.name
        self.name_validation = CollectionNameValidator.validate_and_normalize(collection.singular)
        self.editor = FieldListEditor.from_collection(collection)
        self.state = DraftState.SAVED
        return True

    # -- edit name -----------------------------------------------------

    def begin_edit_name(self) -> None:
        self._require(DraftState.CREATED, DraftState.SAVED)
        self._return_state = self.state
        self.state = DraftState.EDITING_NAME

    def cancel_edit_name(self) -> None:
        self._require(DraftState.EDITING_NAME)
        self.state = self._return_state or DraftState.EMPTY
        self._return_state = None

    async def apply_edit_name(self, display_name: str, custom_plural: str | None = None) -> bool:
        """Apply the edit-name dialog.

        Before the first save the name is re-validated and singular/plural
        follow it. After saving only the display name may change.
        """
        self._require(DraftState.EDITING_NAME)
        if self.is_pending:
            return False

        if self.collection is None:
            result = CollectionNameValidator.validate_and_normalize(display_name)
            if not result.is_valid:
                self._error(result.errors[0])
                return False
            self.name_input = display_name
            self.name_validation = result
            self.display_name = result.display_name
            self.custom_plural = (custom_plural or "").strip()
            self.state = DraftState.CREATED
            self._return_state = None
            return True

        new_name = display_name.strip()
        if not new_name:
            self._error("Collection name cannot be empty")
            return False
        if custom_plural and custom_plural.strip() != self.collection.plural:
            self._error(IMMUTABLE_IDENTIFIERS_MESSAGE)
            return False

        updated = await self._write(replace(self.collection, name=new_name), action="rename")
        if updated is None:
            return False

        self.collection = updated
        self.display_name = updated.name
        self.state = DraftState.SAVED
        self._return_state = None
        return True

    # -- delete --------------------------------------------------------

    def request_delete(self) -> None:
        self._require(DraftState.CREATED, DraftState.SAVED)
        self._return_state = self.state
        self.state = DraftState.CONFIRMING_DELETE

    def cancel_delete(self) -> None:
        self._require(DraftState.CONFIRMING_DELETE)
        self.state = self._return_state or DraftState.EMPTY
        self._return_state = None

    async def confirm_delete(self) -> bool:
        """Delete the collection (and, when saved, all of its entries)."""
        self._require(DraftState.CONFIRMING_DELETE)
        if self.is_pending:
            return False

        if self.collection is not None:
            collection_id = self.collection.id
            generation = self._generation
            self.is_pending = True
            try:
                await self.catalog.delete(collection_id)
            except GatewayError as e:
                if not self._is_current(generation):
                    return False
                logger.warning("Collection delete failed", collection_id=collection_id, error=str(e))
                self._error(describe_failure(e))
                self.state = self._return_state or DraftState.SAVED
                self._return_state = None
                return False
            finally:
                if self._is_current(generation):
                    self.is_pending = False
            logger.info("Collection deleted", collection_id=collection_id)
            if not self._is_current(generation):
                return False

        name = self.display_name
        self._reset()
        self._notify(Notification("success", f'Collection "{name}" deleted'))
        return True
