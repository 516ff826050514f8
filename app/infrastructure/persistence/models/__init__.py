"""
Infrastructure persistence models module.

Database table definitions, kept separate from domain entities.
"""

from app.infrastructure.persistence.models.profile_table import (
    PROFILE_EMBEDDING_DIMENSION,
    ProfileSkillTable,
    ProfileTable,
    SkillTable,
)

__all__ = [
    "PROFILE_EMBEDDING_DIMENSION",
    "ProfileSkillTable",
    "ProfileTable",
    "SkillTable",
]
