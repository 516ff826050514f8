"""Infrastructure provider accessors package."""

from .ai_provider import (  # noqa: F401
    get_embedding_provider,
    get_embedding_service,
    reset_ai_services,
)
from .database_provider import (  # noqa: F401
    get_database_manager,
    get_profile_store,
    reset_database_service,
)

__all__ = [
    "get_database_manager",
    "get_embedding_provider",
    "get_embedding_service",
    "get_profile_store",
    "reset_ai_services",
    "reset_database_service",
]
