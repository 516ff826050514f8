"""
API Package

Central package for the HTTP adapters over the embedding coordinator.

Note: Routers are imported lazily to avoid circular import issues with application services.
"""

from fastapi import APIRouter


def create_api_router() -> APIRouter:
    """
    Create and configure the main API router with all v1 routes.

    Routes are mounted without a version prefix so the paths stay
    ``/embeddings/...`` as the web and mobile clients call them.
    """
    from app.api.v1.embeddings import router as embeddings_router

    api_router = APIRouter()
    api_router.include_router(embeddings_router)

    return api_router


__all__ = ["create_api_router"]
