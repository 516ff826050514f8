"""Ephemeral values describing one embedding run and its outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from app.domain.exceptions import ValidationError


class EmbeddingStatus(str, Enum):
    """Outcome of processing a single profile."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class EmbeddingJobRequest:
    """
    Unit of work for the coordinator.

    Either a single ``profile_id`` or a ``batch_size`` bound for processing
    the profiles currently selected for embedding. ``max_profiles`` caps the
    selection and defaults to ``batch_size``.
    """

    profile_id: Optional[str] = None
    batch_size: int = 10
    max_profiles: Optional[int] = None

    def __post_init__(self):
        if self.profile_id is not None and not str(self.profile_id).strip():
            raise ValidationError("Profile ID must not be empty")
        if self.batch_size < 1:
            raise ValidationError("Batch size must be at least 1")
        if self.max_profiles is not None and self.max_profiles < 1:
            raise ValidationError("Profile limit must be at least 1")

    @property
    def is_single(self) -> bool:
        return self.profile_id is not None


@dataclass(frozen=True)
class EmbeddingResult:
    """Pairs a profile with either its computed vector size or a failure reason."""

    profile_id: str
    status: EmbeddingStatus
    dimensions: Optional[int] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == EmbeddingStatus.SUCCEEDED

    @classmethod
    def success(cls, profile_id: str, dimensions: int) -> "EmbeddingResult":
        return cls(profile_id=profile_id, status=EmbeddingStatus.SUCCEEDED, dimensions=dimensions)

    @classmethod
    def failure(cls, profile_id: str, error: str) -> "EmbeddingResult":
        return cls(profile_id=profile_id, status=EmbeddingStatus.FAILED, error=error)

    @classmethod
    def skipped(cls, profile_id: str, reason: str) -> "EmbeddingResult":
        return cls(profile_id=profile_id, status=EmbeddingStatus.SKIPPED, error=reason)


@dataclass
class BatchReport:
    """Aggregated outcome of one ``generate_all`` invocation."""

    selected: int = 0
    chunks: int = 0
    results: List[EmbeddingResult] = field(default_factory=list)

    def record(self, result: EmbeddingResult) -> None:
        self.results.append(result)

    def _count(self, status: EmbeddingStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def succeeded(self) -> int:
        return self._count(EmbeddingStatus.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self._count(EmbeddingStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self._count(EmbeddingStatus.SKIPPED)

    @property
    def failures(self) -> List[EmbeddingResult]:
        return [result for result in self.results if result.status == EmbeddingStatus.FAILED]

    @property
    def all_succeeded(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True)
class SimilarProfile:
    """A profile returned by semantic search with its cosine similarity."""

    profile_id: str
    full_name: str
    similarity: float


__all__ = [
    "BatchReport",
    "EmbeddingJobRequest",
    "EmbeddingResult",
    "EmbeddingStatus",
    "SimilarProfile",
]
