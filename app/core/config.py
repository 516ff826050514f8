"""
Configuration management for the StuntPitch profile embedding service.

This module provides centralized configuration management supporting:
- Environment variables and .env files
- OpenAI embedding provider settings
- Supabase Postgres connection settings
- Batch coordinator policy and pacing
"""

from functools import lru_cache
from typing import Any, Dict, List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.get_logger(__name__)


SELECTION_POLICY_MISSING = "missing"
SELECTION_POLICY_ALL = "all"


class Settings(BaseSettings):
    """
    Application settings with local development defaults.

    Values are read once and handed to the coordinator and adapters
    explicitly; business logic never reads the process environment.
    """

    # Environment Detection
    ENVIRONMENT: str = Field(
        default="local",
        description="Environment (local/development/staging/production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # Core Application Settings
    APP_NAME: str = Field(
        default="StuntPitch Embeddings",
        description="Application name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version"
    )

    # Server Configuration
    HOST: str = Field(
        default="0.0.0.0",
        description="Server host"
    )
    PORT: int = Field(
        default=8000,
        description="Server port"
    )
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FORMAT: str = Field(
        default="console",
        description="Log format (json/console)"
    )

    # OpenAI Configuration
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="OpenAI API key"
    )
    OPENAI_BASE_URL: Optional[str] = Field(
        default="https://api.openai.com/v1",
        description="OpenAI API base URL"
    )
    OPENAI_EMBEDDING_MODEL: str = Field(
        default="text-embedding-3-small",
        description="OpenAI embedding model name"
    )
    OPENAI_MAX_RETRIES: int = Field(
        default=2,
        ge=0,
        description="Client-level retries for transient OpenAI failures"
    )
    REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Embedding request timeout in seconds"
    )

    # PostgreSQL Configuration (Supabase database)
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL (Supabase direct or pooler connection)"
    )
    POSTGRES_HOST: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )
    POSTGRES_PORT: int = Field(
        default=5432,
        description="PostgreSQL port"
    )
    POSTGRES_USER: str = Field(
        default="postgres",
        description="PostgreSQL user"
    )
    POSTGRES_PASSWORD: str = Field(
        default="postgres",
        description="PostgreSQL password"
    )
    POSTGRES_DB: str = Field(
        default="postgres",
        description="PostgreSQL database name"
    )
    POSTGRES_POOL_SIZE: int = Field(
        default=5,
        ge=1,
        description="Connection pool size"
    )

    # Embedding Configuration
    EMBEDDING_DIMENSION: int = Field(
        default=1536,
        ge=1,
        description="Embedding vector dimension (text-embedding-3-small)"
    )
    EMBEDDING_SELECTION_POLICY: str = Field(
        default=SELECTION_POLICY_MISSING,
        description="Batch selection policy: 'missing' (no embedding yet) or 'all'"
    )
    EMBEDDING_PUBLIC_ONLY: bool = Field(
        default=True,
        description="Only select public profiles for batch generation"
    )
    EMBEDDING_CHUNK_PAUSE_SECONDS: float = Field(
        default=2.0,
        ge=0,
        description="Pause between sequential chunks to respect provider rate limits"
    )
    DEFAULT_HTTP_BATCH_SIZE: int = Field(
        default=10,
        ge=1,
        description="Batch size used by the HTTP endpoint when none is given"
    )
    DEFAULT_CLI_BATCH_SIZE: int = Field(
        default=5,
        ge=1,
        description="Batch size used by the CLI when none is given"
    )

    # Semantic Search Configuration
    SEARCH_SIMILARITY_THRESHOLD: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Minimum similarity score for search results"
    )
    SEARCH_MAX_RESULTS: int = Field(
        default=15,
        ge=1,
        description="Maximum search results to return"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate and normalize environment name."""
        v = v.lower()
        if v not in ('local', 'development', 'staging', 'production'):
            logger.warning(f"Unknown environment: {v}, defaulting to 'local'")
            return 'local'
        return v

    @field_validator('EMBEDDING_SELECTION_POLICY')
    @classmethod
    def validate_selection_policy(cls, v: str) -> str:
        """Only 'missing' and 'all' are supported."""
        v = v.strip().lower()
        if v not in (SELECTION_POLICY_MISSING, SELECTION_POLICY_ALL):
            raise ValueError("EMBEDDING_SELECTION_POLICY must be 'missing' or 'all'")
        return v

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ('console', 'json'):
            raise ValueError("LOG_FORMAT must be 'console' or 'json'")
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == 'production'

    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == 'local'

    def selects_missing_only(self) -> bool:
        """True when batch runs skip profiles that already carry an embedding."""
        return self.EMBEDDING_SELECTION_POLICY == SELECTION_POLICY_MISSING

    def get_cors_origins(self) -> List[str]:
        """Get CORS origins as a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def get_postgres_url(self) -> str:
        """Get PostgreSQL connection URL."""
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    def is_openai_configured(self) -> bool:
        """Check if OpenAI is configured."""
        return bool(self.OPENAI_API_KEY)

    def get_openai_config(self) -> Dict[str, Any]:
        """Get OpenAI client configuration."""
        if not self.OPENAI_API_KEY:
            raise ValueError("No OpenAI configuration found. Set OPENAI_API_KEY.")

        return {
            "api_key": self.OPENAI_API_KEY,
            "base_url": self.OPENAI_BASE_URL,
            "embedding_model": self.OPENAI_EMBEDDING_MODEL,
            "dimension": self.EMBEDDING_DIMENSION,
            "timeout": self.REQUEST_TIMEOUT,
            "max_retries": self.OPENAI_MAX_RETRIES,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Loads settings from environment variables and the .env file once and
    returns the same validated instance afterwards.
    """
    settings = Settings()

    logger.info(
        "Configuration ready",
        environment=settings.ENVIRONMENT,
        openai_configured=settings.is_openai_configured(),
        embedding_model=settings.OPENAI_EMBEDDING_MODEL,
        selection_policy=settings.EMBEDDING_SELECTION_POLICY,
        public_only=settings.EMBEDDING_PUBLIC_ONLY,
    )

    return settings
