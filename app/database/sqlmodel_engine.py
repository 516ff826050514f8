"""
SQLModel database engine and session management.

This module provides SQLAlchemy/SQLModel engine initialization, connection pooling
and async session management for the Supabase Postgres database (pgvector enabled).
"""

from typing import Optional, AsyncGenerator, Dict, Any
from contextlib import asynccontextmanager
import structlog
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine, async_sessionmaker
from sqlalchemy.sql import text

from app.core.config import Settings

logger = structlog.get_logger(__name__)


class SQLModelDatabaseManager:
    """
    SQLModel database manager with async session support.

    Provides the SQLAlchemy engine and session factory for the profile store.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        """Check if SQLModel manager is initialized."""
        return self._initialized and self.engine is not None

    def _build_database_url(self) -> str:
        """
        Build SQLAlchemy async database URL from settings.

        Converts a PostgreSQL URL to the asyncpg dialect.
        """
        url = str(self.settings.get_postgres_url())
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    async def initialize(self) -> None:
        """
        Initialize the async engine and session factory and verify connectivity.
        """
        if self._initialized:
            logger.warning("SQLModel database manager already initialized")
            return

        database_url = self._build_database_url()
        try:
            self.engine = create_async_engine(
                database_url,
                pool_size=self.settings.POSTGRES_POOL_SIZE,
                max_overflow=self.settings.POSTGRES_POOL_SIZE,
                pool_timeout=30,
                pool_recycle=1800,
                pool_pre_ping=True,
                echo=self.settings.DEBUG,
                connect_args={
                    # Supabase's transaction pooler does not support prepared statements.
                    "statement_cache_size": 0,
                    "server_settings": {
                        "application_name": "stuntpitch-embeddings",
                    },
                },
            )

            self.async_session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=True,
            )

            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            self._initialized = True
            logger.info(
                "SQLModel database manager initialized successfully",
                database_url=database_url.split("@")[-1]
            )

        except Exception as e:
            logger.error("Failed to initialize SQLModel database manager", error=str(e))
            if self.engine is not None:
                await self.engine.dispose()
            self.engine = None
            self.async_session_factory = None
            raise

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session with automatic commit/rollback.

        Usage:
            async with db_manager.get_session() as session:
                result = await session.execute(select(ProfileTable))
        """
        if not self.async_session_factory:
            raise RuntimeError("Database manager not initialized")

        session = self.async_session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the database connection.

        Returns health status information for monitoring.
        """
        if not self.engine:
            return {
                "status": "unhealthy",
                "error": "Database manager not initialized"
            }

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1 as health_check"))

            pool = self.engine.pool
            return {
                "status": "healthy",
                "pool_size": pool.size(),
                "checked_in": pool.checkedin(),
                "checked_out": pool.checkedout(),
                "overflow": pool.overflow()
            }

        except Exception as e:
            logger.error("SQLModel database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    async def shutdown(self) -> None:
        """
        Shutdown the database manager and close connections.
        """
        if self.engine:
            try:
                await self.engine.dispose()
                logger.info("SQLModel database manager shut down successfully")
            finally:
                self.engine = None
                self.async_session_factory = None
                self._initialized = False


__all__ = ["SQLModelDatabaseManager"]
