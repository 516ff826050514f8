"""
API-specific dependencies and domain exception mapping.

Bridges the FastAPI layer with the embedding coordinator and turns domain
exceptions into HTTP errors rendered as ``{"error": ...}`` bodies.
"""

from typing import Annotated, Optional

import structlog
from fastapi import Depends, HTTPException, Query

from app.application.embedding_service import ProfileEmbeddingService
from app.domain.exceptions import (
    ConfigurationError,
    DomainException,
    NotFoundError,
    PersistenceError,
    ProcessingError,
    ValidationError,
)
from app.infrastructure.providers.ai_provider import get_embedding_service

logger = structlog.get_logger(__name__)

PROFILE_ID_REQUIRED = "Profile ID required"


async def get_profile_embedding_service() -> ProfileEmbeddingService:
    """Resolve the coordinator, reporting wiring failures as a JSON 500."""
    try:
        return await get_embedding_service()
    except ConfigurationError as e:
        logger.error("Embedding service misconfigured", error=str(e))
        raise HTTPException(status_code=500, detail="Embedding service not configured") from e
    except (PersistenceError, OSError) as e:
        logger.error("Embedding service unavailable", error=str(e))
        raise HTTPException(status_code=500, detail="Embedding service unavailable") from e


async def require_profile_id(
    profile_id: Annotated[Optional[str], Query(alias="profileId")] = None,
) -> str:
    """Query-string profile ID that must be present and non-blank."""
    if profile_id is None or not profile_id.strip():
        raise HTTPException(status_code=400, detail=PROFILE_ID_REQUIRED)
    return profile_id.strip()


EmbeddingServiceDep = Annotated[ProfileEmbeddingService, Depends(get_profile_embedding_service)]
RequiredProfileIdDep = Annotated[str, Depends(require_profile_id)]


def map_domain_exception_to_http(exception: Exception) -> HTTPException:
    """Map domain exceptions to appropriate HTTP responses."""

    # NotFoundError hierarchy - 404 Not Found
    if isinstance(exception, NotFoundError):
        return HTTPException(status_code=404, detail=str(exception))

    # ValidationError - 400 Bad Request
    elif isinstance(exception, ValidationError):
        return HTTPException(status_code=400, detail=str(exception))

    # Provider and store failures - 500 with the failure reason
    elif isinstance(exception, ProcessingError):
        return HTTPException(status_code=500, detail=str(exception))

    elif isinstance(exception, ConfigurationError):
        logger.error("Configuration error", error=str(exception))
        return HTTPException(status_code=500, detail="Service configuration error")

    elif isinstance(exception, DomainException):
        logger.error("Unhandled domain exception", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail=str(exception) or "Domain operation failed")

    else:
        logger.error("Non-domain exception in mapping", exception_type=type(exception).__name__, error=str(exception))
        return HTTPException(status_code=500, detail="Internal server error")


__all__ = [
    "EmbeddingServiceDep",
    "PROFILE_ID_REQUIRED",
    "RequiredProfileIdDep",
    "get_profile_embedding_service",
    "map_domain_exception_to_http",
    "require_profile_id",
]
