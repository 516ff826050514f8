"""PostgreSQL implementation of IProfileStore using SQLModel tables and pgvector."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, Dict, Iterable, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.sqlmodel_engine import SQLModelDatabaseManager
from app.domain.entities.embedding import SimilarProfile
from app.domain.entities.profile import Profile
from app.domain.exceptions import PersistenceError
from app.domain.interfaces import IProfileStore
from app.infrastructure.persistence.mappers.profile_mapper import ProfileMapper
from app.infrastructure.persistence.models.profile_table import (
    ProfileSkillTable,
    ProfileTable,
    SkillTable,
)

logger = structlog.get_logger(__name__)


def _parse_profile_id(profile_id: str) -> Optional[UUID]:
    try:
        return UUID(str(profile_id))
    except (TypeError, ValueError):
        return None


class PostgresProfileStore(IProfileStore):
    """Profile store backed by the Supabase Postgres database."""

    def __init__(self, db_manager: SQLModelDatabaseManager):
        self._db = db_manager

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Open a session and translate driver failures into PersistenceError."""
        try:
            async with self._db.get_session() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            logger.error("Profile store operation failed", operation=operation, error=str(e))
            raise PersistenceError(f"Failed to {operation}: {e}") from e

    async def get_profile(self, profile_id: str) -> Optional[Profile]:
        """Fetch a profile and its skills by ID."""
        key = _parse_profile_id(profile_id)
        if key is None:
            return None

        async with self._session("fetch profile") as session:
            row = await session.get(ProfileTable, key)
            if row is None:
                return None
            skills = await self._load_skills(session, [row.id])

        return ProfileMapper.to_domain(row, skills.get(str(row.id), []))

    async def list_profiles_for_embedding(
        self,
        limit: int,
        *,
        missing_only: bool = True,
        public_only: bool = True,
    ) -> List[Profile]:
        """Select profiles to embed, oldest first."""
        statement = select(ProfileTable)
        if missing_only:
            statement = statement.where(ProfileTable.content_embedding.is_(None))
        if public_only:
            statement = statement.where(ProfileTable.is_public.is_(True))
        statement = statement.order_by(
            ProfileTable.created_at.asc().nullslast(),
            ProfileTable.id,
        ).limit(limit)

        async with self._session("select profiles for embedding") as session:
            rows = (await session.execute(statement)).scalars().all()
            skills = await self._load_skills(session, [row.id for row in rows])

        logger.debug(
            "Selected profiles for embedding",
            count=len(rows),
            limit=limit,
            missing_only=missing_only,
            public_only=public_only,
        )
        return [ProfileMapper.to_domain(row, skills.get(str(row.id), [])) for row in rows]

    async def update_embedding(
        self,
        profile_id: str,
        embedding: List[float],
        content_hash: str,
        generated_at: datetime,
    ) -> None:
        """Write the vector and its metadata to a single profile row."""
        key = _parse_profile_id(profile_id)
        if key is None:
            raise PersistenceError(f"Invalid profile ID: {profile_id}")

        statement = (
            update(ProfileTable)
            .where(ProfileTable.id == key)
            .values(
                content_embedding=list(embedding),
                embedding_content_hash=content_hash,
                embedding_generated_at=generated_at,
            )
        )

        async with self._session("update embedding") as session:
            result = await session.execute(statement)
            if result.rowcount == 0:
                raise PersistenceError(f"Profile {profile_id} no longer exists")

    async def search_by_embedding(
        self,
        query_embedding: List[float],
        *,
        threshold: float,
        limit: int,
    ) -> List[SimilarProfile]:
        """Cosine-similarity search over public profiles with an embedding."""
        distance = ProfileTable.content_embedding.cosine_distance(query_embedding)
        similarity = (1 - distance).label("similarity")

        statement = (
            select(ProfileTable.id, ProfileTable.full_name, similarity)
            .where(ProfileTable.content_embedding.is_not(None))
            .where(ProfileTable.is_public.is_(True))
            .where(1 - distance >= threshold)
            .order_by(distance)
            .limit(limit)
        )

        async with self._session("search profiles by embedding") as session:
            rows = (await session.execute(statement)).all()

        return [
            SimilarProfile(
                profile_id=str(row.id),
                full_name=row.full_name,
                similarity=float(row.similarity),
            )
            for row in rows
        ]

    async def check_health(self) -> Dict[str, Any]:
        return await self._db.health_check()

    async def _load_skills(
        self,
        session: AsyncSession,
        profile_ids: Iterable[UUID],
    ) -> Dict[str, List[str]]:
        ids = list(profile_ids)
        if not ids:
            return {}

        statement = (
            select(
                ProfileSkillTable.profile_id,
                SkillTable.name,
                ProfileSkillTable.proficiency_level,
            )
            .join(SkillTable, SkillTable.id == ProfileSkillTable.skill_id)
            .where(ProfileSkillTable.profile_id.in_(ids))
            .order_by(ProfileSkillTable.profile_id, SkillTable.name)
        )
        rows = (await session.execute(statement)).all()
        return ProfileMapper.group_skills(rows)


__all__ = ["PostgresProfileStore"]
