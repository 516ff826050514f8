"""
Mappers for converting between domain entities and persistence models.
"""

from app.infrastructure.persistence.mappers.profile_mapper import ProfileMapper

__all__ = ["ProfileMapper"]
