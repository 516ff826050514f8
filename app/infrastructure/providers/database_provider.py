"""Database and profile store providers."""

from __future__ import annotations

import asyncio
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.database.sqlmodel_engine import SQLModelDatabaseManager
from app.domain.exceptions import ConfigurationError, PersistenceError
from app.domain.interfaces import IProfileStore
from app.infrastructure.persistence.models.profile_table import PROFILE_EMBEDDING_DIMENSION
from app.infrastructure.persistence.repositories.profile_store import PostgresProfileStore

_database_manager: Optional[SQLModelDatabaseManager] = None
_profile_store: Optional[IProfileStore] = None

_db_lock = asyncio.Lock()
_store_lock = asyncio.Lock()


async def get_database_manager() -> SQLModelDatabaseManager:
    """Return the initialized database manager singleton."""
    global _database_manager

    if _database_manager is not None:
        return _database_manager

    async with _db_lock:
        if _database_manager is not None:
            return _database_manager

        manager = SQLModelDatabaseManager(get_settings())
        try:
            await manager.initialize()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Database unavailable: {e}") from e
        _database_manager = manager
        return _database_manager


async def get_profile_store() -> IProfileStore:
    """Return the Postgres-backed profile store."""
    global _profile_store

    if _profile_store is not None:
        return _profile_store

    async with _store_lock:
        if _profile_store is not None:
            return _profile_store

        settings = get_settings()
        if settings.EMBEDDING_DIMENSION != PROFILE_EMBEDDING_DIMENSION:
            raise ConfigurationError(
                f"EMBEDDING_DIMENSION={settings.EMBEDDING_DIMENSION} does not match the "
                f"profiles.content_embedding column (vector({PROFILE_EMBEDDING_DIMENSION}))"
            )

        _profile_store = PostgresProfileStore(await get_database_manager())
        return _profile_store


async def reset_database_service() -> None:
    """Dispose the engine and forget cached instances (shutdown and tests)."""
    global _database_manager, _profile_store
    async with _store_lock:
        _profile_store = None
    async with _db_lock:
        if _database_manager is not None:
            await _database_manager.shutdown()
        _database_manager = None


__all__ = [
    "get_database_manager",
    "get_profile_store",
    "reset_database_service",
]
