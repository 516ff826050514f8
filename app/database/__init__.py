"""
Database module for StuntPitch Embeddings.

Provides the async SQLAlchemy engine and session management for Supabase
PostgreSQL with pgvector support.
"""

from .sqlmodel_engine import SQLModelDatabaseManager

__all__ = ["SQLModelDatabaseManager"]
