"""Mapper between ProfileTable rows and Profile domain entities."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from app.domain.entities.profile import Profile
from app.infrastructure.persistence.models.profile_table import ProfileTable


class ProfileMapper:
    """Converts persistence rows plus their skill names into domain profiles."""

    @staticmethod
    def to_domain(table: ProfileTable, skills: Optional[Iterable[str]] = None) -> Profile:
        return Profile(
            id=str(table.id),
            full_name=table.full_name or "",
            bio=table.bio,
            skills=list(skills or []),
            experience_years=table.experience_years,
            location=table.location,
            union_status=table.union_status,
            is_public=bool(table.is_public),
            embedding=ProfileMapper.vector_to_list(table.content_embedding),
            embedding_content_hash=table.embedding_content_hash,
            embedding_generated_at=table.embedding_generated_at,
        )

    @staticmethod
    def format_skill(name: str, proficiency_level: Optional[str]) -> str:
        """Render a skill with its proficiency, e.g. ``High Falls (expert)``."""
        name = (name or "").strip()
        level = (proficiency_level or "").strip()
        return f"{name} ({level})" if name and level else name

    @staticmethod
    def group_skills(rows: Iterable[Tuple[object, str, Optional[str]]]) -> dict[str, List[str]]:
        """Group ``(profile_id, skill_name, proficiency)`` rows by profile id."""
        grouped: dict[str, List[str]] = {}
        for profile_id, name, level in rows:
            formatted = ProfileMapper.format_skill(name, level)
            if formatted:
                grouped.setdefault(str(profile_id), []).append(formatted)
        return grouped

    @staticmethod
    def vector_to_list(value) -> Optional[List[float]]:
        """pgvector returns numpy arrays; the domain works with plain lists."""
        if value is None:
            return None
        return [float(v) for v in value]


__all__ = ["ProfileMapper"]
