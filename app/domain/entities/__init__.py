"""Domain entities exposed for application layer use."""

from .embedding import (
    BatchReport,
    EmbeddingJobRequest,
    EmbeddingResult,
    EmbeddingStatus,
    SimilarProfile,
)
from .profile import Profile, content_hash

__all__ = [
    # Embedding runs
    "BatchReport",
    "EmbeddingJobRequest",
    "EmbeddingResult",
    "EmbeddingStatus",
    "SimilarProfile",
    # Profile
    "Profile",
    "content_hash",
]
