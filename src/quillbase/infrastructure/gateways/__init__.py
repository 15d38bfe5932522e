"""Collection gateway implementations."""

from quillbase.core.config import Settings, get_settings
from quillbase.domain.services.collection_gateway import CollectionGateway
from quillbase.infrastructure.gateways.http_collection_gateway import HttpCollectionGateway
from quillbase.infrastructure.gateways.memory_collection_gateway import (
    InMemoryCollectionGateway,
)


def create_gateway(settings: Settings | None = None) -> CollectionGateway:
    """Build the HTTP gateway from settings."""
    settings = settings or get_settings()
    return HttpCollectionGateway(
        base_url=settings.gateway_base_url,
        token=settings.gateway_token,
        timeout=settings.gateway_timeout,
    )


__all__ = [
    "HttpCollectionGateway",
    "InMemoryCollectionGateway",
    "create_gateway",
]
