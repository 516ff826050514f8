"""
Embedding API Endpoints

Thin adapters over the profile embedding coordinator:
- On-demand regeneration for one profile (POST or GET)
- Sized batch regeneration for profiles missing an embedding
- Semantic search over stored profile embeddings
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Body, HTTPException

from app.api.dependencies import (
    EmbeddingServiceDep,
    RequiredProfileIdDep,
    map_domain_exception_to_http,
)
from app.api.schemas.embedding_schemas import (
    ErrorResponse,
    GenerateEmbeddingsRequest,
    GenerateEmbeddingsResponse,
    SemanticSearchRequest,
    SemanticSearchResponse,
    SimilarProfileResponse,
)
from app.application.embedding_service import ProfileEmbeddingService
from app.core.config import get_settings
from app.domain.entities.embedding import (
    BatchReport,
    EmbeddingJobRequest,
    EmbeddingResult,
    EmbeddingStatus,
)
from app.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/embeddings", tags=["embeddings"])

ALL_GENERATED_MESSAGE = "All embeddings generated successfully"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _single_profile_message(result: EmbeddingResult) -> str:
    if result.status == EmbeddingStatus.SKIPPED:
        return f"Profile {result.profile_id} has no content to embed"
    return f"Embedding generated for profile {result.profile_id}"


def _batch_message(report: BatchReport) -> str:
    if report.all_succeeded:
        return ALL_GENERATED_MESSAGE
    return f"Embeddings generated with {report.failed} failure(s)"


async def _run_job(service: ProfileEmbeddingService, **job_fields) -> GenerateEmbeddingsResponse:
    """Run one embedding job through the coordinator and describe its outcome."""
    try:
        job = EmbeddingJobRequest(**job_fields)
        outcome = await service.run(job)
    except DomainException as e:
        logger.warning(
            "Embedding generation failed",
            profile_id=job_fields.get("profile_id"),
            error_type=type(e).__name__,
            error=str(e),
        )
        raise map_domain_exception_to_http(e) from e
    except Exception as e:
        logger.error("Embedding generation error", profile_id=job_fields.get("profile_id"), error=str(e))
        raise HTTPException(status_code=500, detail="Failed to generate embeddings") from e

    if isinstance(outcome, BatchReport):
        logger.info(
            "Batch embedding request completed",
            batch_size=job.batch_size,
            selected=outcome.selected,
            succeeded=outcome.succeeded,
            failed=outcome.failed,
            skipped=outcome.skipped,
        )
        return GenerateEmbeddingsResponse(success=True, message=_batch_message(outcome))

    return GenerateEmbeddingsResponse(success=True, message=_single_profile_message(outcome))


@router.post(
    "/generate",
    response_model=GenerateEmbeddingsResponse,
    responses=_ERROR_RESPONSES,
)
async def generate_embeddings(
    service: EmbeddingServiceDep,
    request: Optional[GenerateEmbeddingsRequest] = Body(None),
) -> GenerateEmbeddingsResponse:
    """
    Generate embeddings for one profile or a batch of profiles.

    With ``profileId`` the named profile is (re)embedded. Otherwise up to
    ``batchSize`` profiles selected by the configured policy are processed;
    per-profile failures are counted rather than failing the request.
    """
    request = request or GenerateEmbeddingsRequest()

    if request.profile_id:
        return await _run_job(service, profile_id=request.profile_id)

    return await _run_job(
        service,
        batch_size=request.batch_size or get_settings().DEFAULT_HTTP_BATCH_SIZE,
    )


@router.get(
    "/generate",
    response_model=GenerateEmbeddingsResponse,
    responses=_ERROR_RESPONSES,
)
async def generate_profile_embedding(
    profile_id: RequiredProfileIdDep,
    service: EmbeddingServiceDep,
) -> GenerateEmbeddingsResponse:
    """Generate the embedding for the profile named in the ``profileId`` query parameter."""
    return await _run_job(service, profile_id=profile_id)


@router.post(
    "/search",
    response_model=SemanticSearchResponse,
    responses=_ERROR_RESPONSES,
)
async def search_profiles(
    request: SemanticSearchRequest,
    service: EmbeddingServiceDep,
) -> SemanticSearchResponse:
    """Find public profiles semantically similar to a free-text description."""
    try:
        matches = await service.search_similar(
            request.query,
            threshold=request.threshold,
            max_results=request.max_results,
        )
    except DomainException as e:
        logger.warning("Semantic search failed", error_type=type(e).__name__, error=str(e))
        raise map_domain_exception_to_http(e) from e
    except Exception as e:
        logger.error("Semantic search error", error=str(e))
        raise HTTPException(status_code=500, detail="Search failed") from e

    return SemanticSearchResponse(
        results=[
            SimilarProfileResponse(
                profile_id=match.profile_id,
                full_name=match.full_name,
                similarity=match.similarity,
            )
            for match in matches
        ]
    )
