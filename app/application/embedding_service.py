"""Application service coordinating profile embedding generation.

The coordinator is the only place that sequences provider calls and store
writes. Both the HTTP endpoint and the command-line script delegate here.
Processing is strictly sequential: each profile is embedded and persisted
before the next one starts, and chunks are separated by a configurable pause
because the embedding provider is rate limited.
"""

from __future__ import annotations

import asyncio
import math
from datetime import datetime, timezone
from typing import List, Optional

import structlog

from app.core.config import Settings
from app.domain.entities.embedding import (
    BatchReport,
    EmbeddingJobRequest,
    EmbeddingResult,
    SimilarProfile,
)
from app.domain.entities.profile import Profile, content_hash
from app.domain.exceptions import (
    ProcessingError,
    ProfileNotFoundError,
    UpstreamError,
    ValidationError,
)
from app.domain.interfaces import IEmbeddingProvider, IProfileStore

logger = structlog.get_logger(__name__)


class ProfileEmbeddingService:
    """Compute and persist semantic embedding vectors for performer profiles."""

    def __init__(
        self,
        profile_store: IProfileStore,
        embedding_provider: IEmbeddingProvider,
        settings: Settings,
    ) -> None:
        self._store = profile_store
        self._provider = embedding_provider
        self._settings = settings

    @property
    def dimension(self) -> int:
        return self._settings.EMBEDDING_DIMENSION

    async def run(self, job: EmbeddingJobRequest) -> EmbeddingResult | BatchReport:
        """Dispatch a job request to the single-profile or batch path."""
        if job.is_single:
            return await self.generate_one(job.profile_id)
        return await self.generate_all(job.batch_size, max_profiles=job.max_profiles)

    async def generate_one(self, profile_id: str) -> EmbeddingResult:
        """
        Generate and store the embedding for one profile.

        Raises:
            ValidationError: the identifier is empty.
            ProfileNotFoundError: no profile matches the identifier.
            UpstreamError: the embedding provider failed or timed out.
            PersistenceError: the profile could not be read or written.
        """
        if profile_id is None or not str(profile_id).strip():
            raise ValidationError("Profile ID required")

        profile_id = str(profile_id).strip()
        profile = await self._store.get_profile(profile_id)
        if profile is None:
            logger.warning("Profile not found for embedding", profile_id=profile_id)
            raise ProfileNotFoundError(profile_id)

        return await self._embed_profile(profile)

    async def generate_all(
        self,
        batch_size: int,
        max_profiles: Optional[int] = None,
    ) -> BatchReport:
        """
        Generate embeddings for the profiles selected by the configured policy.

        At most ``max_profiles`` profiles are selected (``batch_size`` when not
        given) and processed in sequential chunks of ``batch_size``. Any
        failure while embedding an individual profile is logged and counted;
        only a failing selection query or cancellation propagates.
        """
        if batch_size is None or batch_size < 1:
            raise ValidationError("Batch size must be at least 1")
        if max_profiles is not None and max_profiles < 1:
            raise ValidationError("Profile limit must be at least 1")

        limit = max_profiles or batch_size
        missing_only = self._settings.selects_missing_only()

        profiles = await self._store.list_profiles_for_embedding(
            limit,
            missing_only=missing_only,
            public_only=self._settings.EMBEDDING_PUBLIC_ONLY,
        )
        profiles = profiles[:limit]

        report = BatchReport(selected=len(profiles))
        if not profiles:
            logger.info("No profiles found for embedding", missing_only=missing_only)
            return report

        total_chunks = math.ceil(len(profiles) / batch_size)
        logger.info(
            "Starting embedding generation",
            profiles=len(profiles),
            batch_size=batch_size,
            chunks=total_chunks,
            missing_only=missing_only,
        )

        for chunk_number, start in enumerate(range(0, len(profiles), batch_size), start=1):
            chunk = profiles[start:start + batch_size]
            logger.info(
                "Processing chunk",
                chunk=chunk_number,
                total_chunks=total_chunks,
                size=len(chunk),
            )

            for profile in chunk:
                report.record(await self._embed_contained(profile))

            report.chunks += 1
            logger.info("Completed chunk", chunk=chunk_number, total_chunks=total_chunks)

            if chunk_number < total_chunks and self._settings.EMBEDDING_CHUNK_PAUSE_SECONDS > 0:
                logger.info(
                    "Pausing between chunks",
                    seconds=self._settings.EMBEDDING_CHUNK_PAUSE_SECONDS,
                )
                await asyncio.sleep(self._settings.EMBEDDING_CHUNK_PAUSE_SECONDS)

        logger.info(
            "Embedding generation complete",
            selected=report.selected,
            succeeded=report.succeeded,
            failed=report.failed,
            skipped=report.skipped,
        )
        return report

    async def search_similar(
        self,
        query_text: str,
        *,
        threshold: Optional[float] = None,
        max_results: Optional[int] = None,
    ) -> List[SimilarProfile]:
        """Embed a free-text query and return the most similar public profiles."""
        if not query_text or not query_text.strip():
            raise ValidationError("Search query required")

        threshold = self._settings.SEARCH_SIMILARITY_THRESHOLD if threshold is None else threshold
        if not 0.0 <= threshold <= 1.0:
            raise ValidationError("Similarity threshold must be between 0 and 1")

        limit = min(max_results or self._settings.SEARCH_MAX_RESULTS, self._settings.SEARCH_MAX_RESULTS)
        if limit < 1:
            raise ValidationError("Max results must be at least 1")

        query_embedding = self._check_dimension(
            "search query", await self._provider.embed(query_text.strip())
        )
        results = await self._store.search_by_embedding(
            query_embedding,
            threshold=threshold,
            limit=limit,
        )

        logger.info(
            "Semantic profile search completed",
            results=len(results),
            threshold=threshold,
            limit=limit,
        )
        return results

    async def _embed_contained(self, profile: Profile) -> EmbeddingResult:
        try:
            return await self._embed_profile(profile)
        except ProcessingError as exc:
            logger.warning(
                "Embedding failed for profile",
                profile_id=profile.id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return EmbeddingResult.failure(profile.id, str(exc))
        except Exception as exc:
            logger.error(
                "Unexpected error embedding profile",
                profile_id=profile.id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return EmbeddingResult.failure(profile.id, f"{type(exc).__name__}: {exc}")

    async def _embed_profile(self, profile: Profile) -> EmbeddingResult:
        content = profile.embedding_content()
        if not content.strip():
            logger.info("Skipping profile with no content to embed", profile_id=profile.id)
            return EmbeddingResult.skipped(profile.id, "no content to embed")

        logger.info("Generating embedding", profile_id=profile.id, replacing=profile.has_embedding)
        vector = self._check_dimension(profile.id, await self._provider.embed(content))

        digest = content_hash(content)
        generated_at = datetime.now(timezone.utc)
        await self._store.update_embedding(profile.id, vector, digest, generated_at)
        profile.apply_embedding(vector, digest, generated_at)

        logger.info(
            "Stored embedding",
            profile_id=profile.id,
            dimensions=len(vector),
            model=self._provider.model_name,
        )
        return EmbeddingResult.success(profile.id, len(vector))

    def _check_dimension(self, subject: str, vector: List[float]) -> List[float]:
        if len(vector) != self.dimension:
            raise UpstreamError(
                f"Embedding for {subject} has {len(vector)} dimensions, expected {self.dimension}"
            )
        return vector


__all__ = ["ProfileEmbeddingService"]
