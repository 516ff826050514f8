"""Domain-layer service interfaces.

These abstractions define the stable contracts that the embedding coordinator
relies on, while infrastructure adapters provide concrete implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.domain.entities.embedding import SimilarProfile
from app.domain.entities.profile import Profile


class IHealthCheck:
    """Health check interface mixin."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """Return health check details."""
        pass


class IProfileStore(IHealthCheck, ABC):
    """Narrow view of the profile table used by the embedding job.

    Implementations raise ``PersistenceError`` for any storage failure.
    """

    @abstractmethod
    async def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Fetch a profile with its textual attributes, or None if absent."""
        pass

    @abstractmethod
    async def list_profiles_for_embedding(
        self,
        limit: int,
        *,
        missing_only: bool = True,
        public_only: bool = True,
    ) -> List[Profile]:
        """Select up to ``limit`` profiles, optionally only those without an embedding."""
        pass

    @abstractmethod
    async def update_embedding(
        self,
        profile_id: str,
        embedding: List[float],
        content_hash: str,
        generated_at: datetime,
    ) -> None:
        """Write the vector, its content hash and timestamp to one profile row."""
        pass

    @abstractmethod
    async def search_by_embedding(
        self,
        query_embedding: List[float],
        *,
        threshold: float,
        limit: int,
    ) -> List[SimilarProfile]:
        """Return public profiles ordered by descending cosine similarity."""
        pass


class IEmbeddingProvider(IHealthCheck, ABC):
    """Computes fixed-dimension vectors for text.

    Implementations raise ``UpstreamError`` on provider failure or timeout.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Dimension of every vector this provider returns."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        pass

    @abstractmethod
    async def embed(self, text: str) -> List[float]:
        """Compute the embedding for one text."""
        pass


__all__ = [
    "IHealthCheck",
    "IProfileStore",
    "IEmbeddingProvider",
]
