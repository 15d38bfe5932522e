"""Integration tests for the collections API."""

import pytest
from httpx import ASGITransport, AsyncClient

from quillbase.core.config import get_settings
from quillbase.domain.services.collection_draft import CollectionDraftWorkflow, DraftState
from quillbase.domain.services.collection_gateway import (
    CollectionNotFoundError,
    PermissionDeniedError,
)
from quillbase.infrastructure.gateways import HttpCollectionGateway
from quillbase.infrastructure.persistence.repositories import EntryRepository

PAYLOAD = {
    "id": "blog-post",
    "name": "Blog Post",
    "singular": "blog-post",
    "plural": "blog-posts",
    "type": "collection",
    "fields": [
        {"field_name": "title", "type": "short", "label": "Text", "required": True},
        {"field_name": "body", "type": "richtext", "label": "Rich Content"},
    ],
}


@pytest.mark.asyncio
async def test_round_trip(client: AsyncClient, db_session):
    response = await client.post("/api/v1/collections", json=PAYLOAD)
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == "blog-post"
    assert "createdAt" in created
    assert "updatedAt" in created
    assert created["fields"][0]["required"] is True

    response = await client.get("/api/v1/collections")
    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["blog-post"]

    fields = [*PAYLOAD["fields"], {"field_name": "publishedAt", "type": "date"}]
    response = await client.put(
        "/api/v1/collections/blog-post", json={"name": "Article", "fields": fields}
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Article"
    assert updated["fields"][2] == {
        "field_name": "publishedAt",
        "type": "date",
        "label": "Date",
        "required": False,
    }

    await EntryRepository(db_session).create("blog-post", {"title": "Hello"})
    await db_session.commit()

    response = await client.delete("/api/v1/collections/blog-post")
    assert response.status_code == 200
    assert response.json()["entriesDeleted"] == 1

    response = await client.get("/api/v1/collections/blog-post")
    assert response.status_code == 404
    assert response.json()["error"] == "Not Found"


@pytest.mark.asyncio
async def test_duplicate_is_conflict(client: AsyncClient):
    assert (await client.post("/api/v1/collections", json=PAYLOAD)).status_code == 201

    response = await client.post("/api/v1/collections", json=PAYLOAD)

    assert response.status_code == 409
    assert "already exists" in response.json()["message"]


@pytest.mark.asyncio
async def test_invalid_name_is_rejected(client: AsyncClient):
    payload = {**PAYLOAD, "id": "get-posts", "singular": "get-posts", "plural": ""}

    response = await client.post("/api/v1/collections", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


@pytest.mark.asyncio
async def test_plural_change_is_conflict(client: AsyncClient):
    await client.post("/api/v1/collections", json=PAYLOAD)

    response = await client.put("/api/v1/collections/blog-post", json={"plural": "posts"})

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_api_token_required_when_configured(client: AsyncClient, monkeypatch):
    monkeypatch.setenv("QUILLBASE_API_TOKEN", "s3cret")
    get_settings.cache_clear()
    try:
        response = await client.get("/api/v1/collections")
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

        response = await client.get(
            "/api/v1/collections", headers={"Authorization": "Bearer s3cret"}
        )
        assert response.status_code == 200
    finally:
        monkeypatch.delenv("QUILLBASE_API_TOKEN")
        get_settings.cache_clear()


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["X-Correlation-ID"].startswith("cid_")

    response = await client.get("/health", headers={"X-Correlation-ID": "cid_given"})
    assert response.headers["X-Correlation-ID"] == "cid_given"


def asgi_gateway(token: str | None = None) -> HttpCollectionGateway:
    from quillbase.infrastructure.api.app import app

    return HttpCollectionGateway(
        base_url="http://test/api/v1",
        token=token,
        transport=ASGITransport(app=app),
    )


@pytest.mark.asyncio
async def test_draft_workflow_against_api(client: AsyncClient):
    notifications = []
    workflow = CollectionDraftWorkflow(asgi_gateway(), notify=notifications.append)

    workflow.submit_name("Team Member")
    workflow.request_add_field("Text", "short")
    await workflow.confirm_add_field("fullName")
    workflow.request_add_field("Image", "single")
    await workflow.confirm_add_field("avatar")
    saved = await workflow.save()

    assert saved is not None
    assert saved.plural == "team-members"
    assert workflow.state is DraftState.SAVED

    assert await workflow.move_field(1, 0) is True
    response = await client.get("/api/v1/collections/team-member")
    assert [f["field_name"] for f in response.json()["fields"]] == ["avatar", "fullName"]

    workflow.request_delete()
    assert await workflow.confirm_delete() is True
    assert (await client.get("/api/v1/collections/team-member")).status_code == 404


@pytest.mark.asyncio
async def test_saved_collection_can_drop_below_field_minimum(client: AsyncClient):
    notifications = []
    workflow = CollectionDraftWorkflow(asgi_gateway(), notify=notifications.append)

    workflow.submit_name("Team Member")
    workflow.request_add_field("Text", "short")
    await workflow.confirm_add_field("fullName")
    workflow.request_add_field("Image", "single")
    await workflow.confirm_add_field("avatar")
    await workflow.save()

    assert await workflow.remove_field("avatar") is True
    assert workflow.selected_fields == ["fullName"]
    assert [n.level for n in notifications] == ["success"]

    response = await client.get("/api/v1/collections/team-member")
    assert [f["field_name"] for f in response.json()["fields"]] == ["fullName"]


@pytest.mark.asyncio
async def test_saved_single_can_replace_its_field(client: AsyncClient):
    workflow = CollectionDraftWorkflow(asgi_gateway(), notify=[].append)

    workflow.submit_name("Homepage", "single")
    workflow.request_add_field("Text", "short")
    await workflow.confirm_add_field("headline")
    await workflow.save()

    assert await workflow.remove_field("headline") is True
    workflow.request_add_field("Image", "single")
    assert await workflow.confirm_add_field("heroImage") is True

    response = await client.get("/api/v1/collections/homepage")
    assert [f["field_name"] for f in response.json()["fields"]] == ["heroImage"]


@pytest.mark.asyncio
async def test_gateway_error_mapping_against_api(client: AsyncClient, monkeypatch):
    gateway = asgi_gateway()

    with pytest.raises(CollectionNotFoundError):
        await gateway.get("nope")

    monkeypatch.setenv("QUILLBASE_API_TOKEN", "s3cret")
    get_settings.cache_clear()
    try:
        with pytest.raises(PermissionDeniedError):
            await gateway.list()
    finally:
        monkeypatch.delenv("QUILLBASE_API_TOKEN")
        get_settings.cache_clear()
