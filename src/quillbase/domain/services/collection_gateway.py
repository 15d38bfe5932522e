"""Persistence gateway contract for collections.

The draft workflow only talks to the backing store through this interface,
so a local-only store and a remote REST store are interchangeable.
Implementations never retry; retry belongs to the transport.
"""

from abc import ABC, abstractmethod

from quillbase.domain.entities.collection import Collection

PERMISSION_DENIED_MESSAGE = "You don't have permission to modify this collection."
GENERIC_FAILURE_MESSAGE = "Something went wrong while saving. Please try again."
NOT_FOUND_MESSAGE = "The collection you're looking for doesn't exist or has been deleted."


class GatewayError(Exception):
    """A persistence call failed.

    Attributes:
        status_code: HTTP-style status of the failure, when known.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PermissionDeniedError(GatewayError):
    """The caller is not allowed to perform the operation (403)."""

    def __init__(self, message: str = PERMISSION_DENIED_MESSAGE) -> None:
        super().__init__(message, status_code=403)


class CollectionNotFoundError(GatewayError):
    """No collection matches the requested id (404)."""

    def __init__(self, collection_id: str) -> None:
        super().__init__(f"Collection with ID '{collection_id}' not found", status_code=404)
        self.collection_id = collection_id


class CollectionConflictError(GatewayError):
    """The collection already exists or an immutable attribute changed (409)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class CollectionRejectedError(GatewayError):
    """The store refused the collection as invalid (400)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


def describe_failure(exc: BaseException) -> str:
    """Map a persistence failure to the single message shown to the user."""
    if isinstance(exc, PermissionDeniedError) or getattr(exc, "status_code", None) == 403:
        return PERMISSION_DENIED_MESSAGE
    if isinstance(exc, CollectionNotFoundError):
        return NOT_FOUND_MESSAGE
    if isinstance(exc, (CollectionConflictError, CollectionRejectedError)):
        return exc.message
    return GENERIC_FAILURE_MESSAGE


class CollectionGateway(ABC):
    """Abstract base class for collection stores."""

    @abstractmethod
    async def create(self, collection: Collection) -> Collection:
        """Create a collection; the store assigns its timestamps."""
        ...

    @abstractmethod
    async def update(self, collection_id: str, collection: Collection) -> Collection:
        """Replace a collection's name and fields."""
        ...

    @abstractmethod
    async def delete(self, collection_id: str) -> None:
        """Delete a collection together with all of its entries."""
        ...

    @abstractmethod
    async def list(self) -> list[Collection]:
        """Return every collection."""
        ...

    @abstractmethod
    async def get(self, collection_id: str) -> Collection:
        """Return one collection or raise ``CollectionNotFoundError``."""
        ...
