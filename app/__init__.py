"""
StuntPitch Embeddings - semantic profile embeddings for the StuntPitch casting platform.

This package provides the embedding coordinator, its FastAPI endpoints and the
command-line batch script, backed by Supabase Postgres with pgvector.
"""

__version__ = "1.0.0"
