"""REST collection gateway.

Talks to the collections API (``GET/POST /collections``,
``GET/PUT/DELETE /collections/{id}``) with httpx. Failures are mapped to the
gateway error types; nothing is retried here.
"""

from typing import Any

import httpx

from quillbase.core.config import get_settings
from quillbase.core.logging import get_logger
from quillbase.domain.entities.collection import Collection
from quillbase.domain.services.collection_gateway import (
    CollectionConflictError,
    CollectionGateway,
    CollectionNotFoundError,
    CollectionRejectedError,
    GatewayError,
    PermissionDeniedError,
)

logger = get_logger(__name__)


class HttpCollectionGateway(CollectionGateway):
    """Collection store reached over HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: API root, e.g. ``http://localhost:8000/api/v1``.
                Defaults to the ``gateway_base_url`` setting.
            token: Bearer token; defaults to the ``gateway_token`` setting.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used to target an ASGI app).
        """
        settings = get_settings()
        self.base_url = (base_url or settings.gateway_base_url).rstrip("/")
        self.token = token if token is not None else settings.gateway_token
        self.timeout = timeout if timeout is not None else settings.gateway_timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail") or body.get("error")
            if message:
                return str(message)
        return response.reason_phrase

    def _raise_for_status(self, response: httpx.Response, collection_id: str | None) -> None:
        if response.is_success:
            return

        status_code = response.status_code
        message = self._error_message(response)
        logger.warning(
            "Collection request failed",
            method=response.request.method,
            url=str(response.request.url),
            status_code=status_code,
            error=message,
        )

        if status_code == 403:
            raise PermissionDeniedError()
        if status_code == 404 and collection_id is not None:
            raise CollectionNotFoundError(collection_id)
        if status_code == 409:
            raise CollectionConflictError(message)
        if status_code in (400, 422):
            raise CollectionRejectedError(message)
        raise GatewayError(message, status_code=status_code)

    async def _request(
        self,
        method: str,
        path: str,
        collection_id: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.request(method, path, json=json)
            except httpx.HTTPError as e:
                logger.error("Collection request error", method=method, path=path, error=str(e))
                raise GatewayError(f"Could not reach the collection store: {e}") from e

        self._raise_for_status(response, collection_id)
        return response

    async def create(self, collection: Collection) -> Collection:
        payload = collection.without_timestamps().to_dict()
        response = await self._request("POST", "/collections", json=payload)
        return Collection.from_dict(response.json())

    async def update(self, collection_id: str, collection: Collection) -> Collection:
        payload = collection.without_timestamps().to_dict()
        payload.pop("id", None)
        response = await self._request(
            "PUT", f"/collections/{collection_id}", collection_id=collection_id, json=payload
        )
        return Collection.from_dict(response.json())

    async def delete(self, collection_id: str) -> None:
        await self._request("DELETE", f"/collections/{collection_id}", collection_id=collection_id)

    async def get(self, collection_id: str) -> Collection:
        response = await self._request(
            "GET", f"/collections/{collection_id}", collection_id=collection_id
        )
        return Collection.from_dict(response.json())

    async def list(self) -> list[Collection]:
        response = await self._request("GET", "/collections")
        return [Collection.from_dict(item) for item in response.json()]
