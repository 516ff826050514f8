"""
StuntPitch Embeddings - Main FastAPI Application
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import create_api_router
from app.api.dependencies import map_domain_exception_to_http
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.domain.exceptions import DomainException
from app.infrastructure.providers.ai_provider import (
    get_embedding_provider,
    reset_ai_services,
)
from app.infrastructure.providers.database_provider import (
    get_profile_store,
    reset_database_service,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()
    logger.info(
        "Starting StuntPitch Embeddings API",
        version=app.version,
        environment=settings.ENVIRONMENT,
        openai_configured=settings.is_openai_configured(),
    )

    yield

    logger.info("Shutting down StuntPitch Embeddings API")
    try:
        await reset_ai_services()
        await reset_database_service()
        logger.info("Service cleanup completed")
    except Exception as e:
        logger.error("Cleanup error", error=str(e))


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as an ``{"error": ...}`` JSON body."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        http_exc = map_domain_exception_to_http(exc)
        return JSONResponse(status_code=http_exc.status_code, content={"error": http_exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            exception_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Profile embedding generation and semantic search for StuntPitch",
        version=settings.APP_VERSION,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(create_api_router())

    # Basic health check endpoint
    @app.get("/health")
    async def health_check():
        """Basic health check endpoint"""
        return {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health/detailed")
    async def detailed_health_check():
        """Health of the profile store and the embedding provider"""
        health_status = {
            "status": "healthy",
            "version": app.version,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {},
        }

        try:
            store = await get_profile_store()
            health_status["services"]["database"] = await store.check_health()
        except Exception as e:
            health_status["services"]["database"] = {"status": "unhealthy", "error": str(e)}

        try:
            provider = await get_embedding_provider()
            health_status["services"]["embeddings"] = await provider.check_health()
        except Exception as e:
            health_status["services"]["embeddings"] = {"status": "unhealthy", "error": str(e)}

        if any(s.get("status") != "healthy" for s in health_status["services"].values()):
            health_status["status"] = "unhealthy"

        return health_status

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_local(),
        log_config=None,  # Use our structured logging
    )
