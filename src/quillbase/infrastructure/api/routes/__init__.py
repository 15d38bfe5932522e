"""API routes for QuillBase."""

from quillbase.infrastructure.api.routes.collections_router import router as collections_router

__all__ = [
    "collections_router",
]
