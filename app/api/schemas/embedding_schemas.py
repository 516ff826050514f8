"""Request/response DTOs for the embedding endpoints.

Field names follow the camelCase JSON used by the web and mobile clients.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenerateEmbeddingsRequest(BaseModel):
    """Body of ``POST /embeddings/generate``."""

    model_config = ConfigDict(populate_by_name=True)

    profile_id: Optional[str] = Field(None, alias="profileId", description="Profile to embed")
    batch_size: Optional[int] = Field(
        None,
        alias="batchSize",
        ge=1,
        description="Maximum profiles to process when no profileId is given",
    )

    @field_validator("profile_id")
    @classmethod
    def blank_profile_id_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v.strip() if v is not None else v


class GenerateEmbeddingsResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str


class SemanticSearchRequest(BaseModel):
    """Body of ``POST /embeddings/search``."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., min_length=1, description="Free-text description of the performer")
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0)
    max_results: Optional[int] = Field(None, alias="maxResults", ge=1)


class SimilarProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    profile_id: str = Field(..., alias="profileId")
    full_name: str = Field(..., alias="fullName")
    similarity: float


class SemanticSearchResponse(BaseModel):
    results: List[SimilarProfileResponse]


__all__ = [
    "ErrorResponse",
    "GenerateEmbeddingsRequest",
    "GenerateEmbeddingsResponse",
    "SemanticSearchRequest",
    "SemanticSearchResponse",
    "SimilarProfileResponse",
]
