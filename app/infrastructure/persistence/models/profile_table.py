"""
SQLModel mappings for the profile tables the embedding job touches.

The schema itself is owned and migrated by the Supabase project; these
models only describe the columns read and written here.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pgvector.sqlalchemy import Vector
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID as PostgreSQLUUID
from sqlmodel import Field, SQLModel

# Matches the vector(1536) column created for text-embedding-3-small.
PROFILE_EMBEDDING_DIMENSION = 1536


class ProfileTable(SQLModel, table=True):
    """Performer profile row (``public.profiles``)."""
    __tablename__ = "profiles"

    id: UUID = Field(
        sa_column=Column(PostgreSQLUUID(as_uuid=True), primary_key=True),
        description="Profile identifier"
    )
    full_name: str = Field(
        sa_column=Column(String, nullable=False),
        description="Performer's full name"
    )
    bio: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text biography"
    )
    location: Optional[str] = Field(
        default=None,
        sa_column=Column(String, nullable=True),
    )
    union_status: Optional[str] = Field(
        default=None,
        sa_column=Column(String, nullable=True),
    )
    experience_years: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
    )
    is_public: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )

    content_embedding: Optional[List[float]] = Field(
        default=None,
        sa_column=Column(Vector(PROFILE_EMBEDDING_DIMENSION), nullable=True),
        description="Semantic embedding of the profile content"
    )
    embedding_content_hash: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="SHA-256 of the text the embedding was computed from"
    )
    embedding_generated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )

    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
    )


class SkillTable(SQLModel, table=True):
    """Skill catalogue row (``public.skills``)."""
    __tablename__ = "skills"

    id: UUID = Field(
        sa_column=Column(PostgreSQLUUID(as_uuid=True), primary_key=True),
    )
    name: str = Field(sa_column=Column(String, nullable=False))
    category: str = Field(sa_column=Column(String, nullable=False))


class ProfileSkillTable(SQLModel, table=True):
    """Skill assignment with proficiency (``public.profile_skills``)."""
    __tablename__ = "profile_skills"

    id: UUID = Field(
        sa_column=Column(PostgreSQLUUID(as_uuid=True), primary_key=True),
    )
    profile_id: UUID = Field(
        sa_column=Column(
            PostgreSQLUUID(as_uuid=True),
            ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    skill_id: UUID = Field(
        sa_column=Column(
            PostgreSQLUUID(as_uuid=True),
            ForeignKey("skills.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    proficiency_level: Optional[str] = Field(
        default=None,
        sa_column=Column(String, nullable=True),
    )


__all__ = [
    "PROFILE_EMBEDDING_DIMENSION",
    "ProfileSkillTable",
    "ProfileTable",
    "SkillTable",
]
