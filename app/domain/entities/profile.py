"""Pure domain representation of a performer profile as seen by the embedding job."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Profile:
    """A stunt performer's directory record."""

    id: str
    full_name: str = ""
    bio: Optional[str] = None
    skills: List[str] = field(default_factory=list)
    experience_years: Optional[int] = None
    location: Optional[str] = None
    union_status: Optional[str] = None
    is_public: bool = True
    embedding: Optional[List[float]] = None
    embedding_content_hash: Optional[str] = None
    embedding_generated_at: Optional[datetime] = None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    def embedding_content(self) -> str:
        """
        Build the text used as embedding input.

        Name, biography, skills, experience and the descriptive attributes
        are joined into labelled lines. Empty attributes are left out so a
        profile with no text at all produces an empty string.
        """
        parts: List[str] = []

        if self.full_name and self.full_name.strip():
            parts.append(f"Name: {self.full_name.strip()}")
        if self.bio and self.bio.strip():
            parts.append(f"Bio: {self.bio.strip()}")

        skills = [skill.strip() for skill in self.skills if skill and skill.strip()]
        if skills:
            parts.append(f"Skills: {', '.join(skills)}")

        if self.experience_years is not None and self.experience_years > 0:
            unit = "year" if self.experience_years == 1 else "years"
            parts.append(f"Experience: {self.experience_years} {unit}")
        if self.location and self.location.strip():
            parts.append(f"Location: {self.location.strip()}")
        if self.union_status and self.union_status.strip():
            parts.append(f"Union status: {self.union_status.strip()}")

        return "\n".join(parts)

    def apply_embedding(
        self,
        vector: List[float],
        content_hash: str,
        generated_at: datetime,
    ) -> None:
        self.embedding = list(vector)
        self.embedding_content_hash = content_hash
        self.embedding_generated_at = generated_at


def content_hash(text: str) -> str:
    """SHA-256 hex digest of the embedding input."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


__all__ = ["Profile", "content_hash"]
