"""Unit tests for the collections router."""

import json
from datetime import datetime
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import status
from fastapi.responses import JSONResponse

from quillbase.infrastructure.api.routes.collections_router import (
    create_collection,
    delete_collection,
    error_response,
    get_collection,
    update_collection,
)
from quillbase.infrastructure.api.schemas import (
    CreateCollectionRequest,
    FieldDefinition,
    UpdateCollectionRequest,
)


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    return AsyncMock()


@pytest.fixture
def valid_request():
    return CreateCollectionRequest(
        name="Blog Post",
        singular="blog-post",
        fields=[
            FieldDefinition(field_name="title", type="short"),
            FieldDefinition(field_name="body", type="RichText"),
        ],
    )


def body(response: JSONResponse) -> dict:
    return json.loads(response.body)


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_create_collection_success(mock_service_cls, mock_session, valid_request, blog_post):
    mock_service = mock_service_cls.return_value
    blog_post.created_at = datetime(2026, 1, 1)
    mock_service.create_collection = AsyncMock(return_value=blog_post)

    response = await create_collection(valid_request, None, mock_session)

    sent = mock_service.create_collection.call_args.args[0]
    assert sent.id == "blog-post"
    assert sent.fields[1].type == "richtext"
    mock_session.commit.assert_awaited_once()
    assert response.id == "blog-post"
    assert response.model_dump(by_alias=True)["createdAt"] == datetime(2026, 1, 1)


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_create_collection_validation_error(mock_service_cls, mock_session, valid_request):
    mock_service = mock_service_cls.return_value
    mock_service.create_collection = AsyncMock(
        side_effect=ValueError("Validation failed: Collection name cannot be empty")
    )

    response = await create_collection(valid_request, None, mock_session)

    assert isinstance(response, JSONResponse)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert body(response)["error"] == "Validation error"
    mock_session.commit.assert_not_called()
    mock_session.rollback.assert_awaited_once()


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_create_collection_conflict(mock_service_cls, mock_session, valid_request):
    mock_service = mock_service_cls.return_value
    mock_service.create_collection = AsyncMock(
        side_effect=ValueError("Collection 'blog-post' already exists")
    )

    response = await create_collection(valid_request, None, mock_session)

    assert response.status_code == status.HTTP_409_CONFLICT


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_get_collection_not_found(mock_service_cls, mock_session):
    mock_service = mock_service_cls.return_value
    mock_service.get_collection = AsyncMock(side_effect=ValueError("Collection 'x' not found"))

    response = await get_collection("x", None, mock_session)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert body(response) == {"error": "Not Found", "message": "Collection 'x' not found"}


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_update_passes_only_sent_keys(mock_service_cls, mock_session, blog_post):
    mock_service = mock_service_cls.return_value
    mock_service.update_collection = AsyncMock(return_value=blog_post)
    request = UpdateCollectionRequest.model_validate({"name": "Article", "integrationId": "pg-1"})

    await update_collection("blog-post", request, None, mock_session)

    changes = mock_service.update_collection.call_args.args[1]
    assert changes == {"name": "Article", "integration_id": "pg-1"}


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_update_immutable_is_conflict(mock_service_cls, mock_session):
    mock_service = mock_service_cls.return_value
    mock_service.update_collection = AsyncMock(
        side_effect=ValueError("Collection plural is immutable once created (current: 'posts')")
    )
    request = UpdateCollectionRequest(plural="articles")

    response = await update_collection("post", request, None, mock_session)

    assert response.status_code == status.HTTP_409_CONFLICT


@patch("quillbase.infrastructure.api.routes.collections_router.CollectionService")
@pytest.mark.asyncio
async def test_delete_reports_entry_count(mock_service_cls, mock_session):
    mock_service = mock_service_cls.return_value
    mock_service.delete_collection = AsyncMock(return_value=3)

    response = await delete_collection("blog-post", None, mock_session)

    assert response.entries_deleted == 3
    mock_session.commit.assert_awaited_once()


def test_error_response_defaults_to_400():
    assert error_response("something odd").status_code == 400
