"""Application layer entry points.

Holds the use-case services that coordinate domain logic with adapters.

Note: Services are imported directly from their modules to avoid circular imports.
Use:
    from app.application.embedding_service import ProfileEmbeddingService
"""
