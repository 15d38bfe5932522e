"""Collections API routes.

Server side of the collection gateway: list, create, read, update and
delete collection schemas.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quillbase.core.logging import get_logger
from quillbase.domain.services import CollectionService
from quillbase.infrastructure.api.dependencies import ApiAccess
from quillbase.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    DeleteCollectionResponse,
    UpdateCollectionRequest,
)
from quillbase.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


def error_response(error_message: str) -> JSONResponse:
    """Map a service ``ValueError`` message to an error response."""
    lowered = error_message.lower()
    if "not found" in lowered:
        status_code, error = status.HTTP_404_NOT_FOUND, "Not Found"
    elif "already exists" in lowered or "immutable" in lowered:
        status_code, error = status.HTTP_409_CONFLICT, "Conflict"
    else:
        status_code, error = status.HTTP_400_BAD_REQUEST, "Validation error"
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": error_message},
    )


@router.get(
    "",
    status_code=status.HTTP_200_OK,
    response_model=list[CollectionResponse],
    responses={403: {"description": "Invalid API token"}},
)
async def list_collections(
    _access: ApiAccess,
    session: AsyncSession = Depends(get_db_session),
) -> list[CollectionResponse]:
    """List every collection, oldest first."""
    collections = await CollectionService(session).list_collections()
    logger.debug("Collections listed", count=len(collections))
    return [CollectionResponse.from_entity(c) for c in collections]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={
        400: {"description": "Validation error"},
        403: {"description": "Invalid API token"},
        409: {"description": "Collection already exists"},
    },
)
async def create_collection(
    request: CreateCollectionRequest,
    _access: ApiAccess,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    """Create a collection.

    The id defaults to the singular name and the plural to the generated one.
    """
    service = CollectionService(session)
    try:
        collection = await service.create_collection(request.to_entity())
        await session.commit()
    except ValueError as e:
        await session.rollback()
        logger.info(
            "Collection creation rejected",
            singular=request.singular,
            error=str(e),
        )
        return error_response(str(e))

    return CollectionResponse.from_entity(collection)


@router.get(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={
        403: {"description": "Invalid API token"},
        404: {"description": "Collection not found"},
    },
)
async def get_collection(
    collection_id: str,
    _access: ApiAccess,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    try:
        collection = await CollectionService(session).get_collection(collection_id)
    except ValueError as e:
        return error_response(str(e))

    return CollectionResponse.from_entity(collection)


@router.put(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=CollectionResponse,
    responses={
        400: {"description": "Validation error"},
        403: {"description": "Invalid API token"},
        404: {"description": "Collection not found"},
        409: {"description": "Identifiers are immutable"},
    },
)
async def update_collection(
    collection_id: str,
    request: UpdateCollectionRequest,
    _access: ApiAccess,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionResponse | JSONResponse:
    """Update the display name, field list or integration of a collection.

    Singular, plural and type are write-once.
    """
    service = CollectionService(session)
    try:
        collection = await service.update_collection(collection_id, request.to_changes())
        await session.commit()
    except ValueError as e:
        await session.rollback()
        logger.info(
            "Collection update rejected",
            collection_id=collection_id,
            error=str(e),
        )
        return error_response(str(e))

    return CollectionResponse.from_entity(collection)


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteCollectionResponse,
    responses={
        403: {"description": "Invalid API token"},
        404: {"description": "Collection not found"},
    },
)
async def delete_collection(
    collection_id: str,
    _access: ApiAccess,
    session: AsyncSession = Depends(get_db_session),
) -> DeleteCollectionResponse | JSONResponse:
    """Delete a collection and every entry stored under it."""
    service = CollectionService(session)
    try:
        entries_deleted = await service.delete_collection(collection_id)
        await session.commit()
    except ValueError as e:
        await session.rollback()
        logger.info("Collection deletion failed: not found", collection_id=collection_id)
        return error_response(str(e))

    return DeleteCollectionResponse(
        message="Collection deleted successfully",
        collection_id=collection_id,
        entries_deleted=entries_deleted,
    )
