"""API request and response schemas."""

from app.api.schemas.embedding_schemas import (
    ErrorResponse,
    GenerateEmbeddingsRequest,
    GenerateEmbeddingsResponse,
    SemanticSearchRequest,
    SemanticSearchResponse,
    SimilarProfileResponse,
)

__all__ = [
    "ErrorResponse",
    "GenerateEmbeddingsRequest",
    "GenerateEmbeddingsResponse",
    "SemanticSearchRequest",
    "SemanticSearchResponse",
    "SimilarProfileResponse",
]
