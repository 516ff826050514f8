"""Repository implementations using PostgreSQL and domain mappers."""

from .profile_store import PostgresProfileStore

__all__ = ["PostgresProfileStore"]
