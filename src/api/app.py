"""
FastAPI Application Factory.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Or with the configured host/port
    outfit-recommend-api

    # Or build the app yourself
    from api.app import create_app
    app = create_app()
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.

    Logging is configured on startup. The catalog and the OpenAI client
    are loaded lazily on the first recommendation request.
    """
    settings = get_settings()

    configure_logging(
        json_logs=settings.is_production,
        log_level=settings.log_level,
    )

    logger.info(
        "Starting outfit recommender API",
        environment=settings.environment,
        port=settings.port,
        catalog_path=str(settings.catalog_path),
    )

    yield

    logger.info("Shutting down outfit recommender API")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title="Outfit Recommender API",
        description="""
        Prompt-driven outfit recommendations from a tagged clothing catalog.

        ## Endpoints

        - `POST /api/recommend` - Outfits (or single items) for a style prompt
        - `/health`, `/live` - Health checks
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # =========================================================================
    # Middleware (first added = outermost)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request tracing (adds X-Request-ID, logs timing)
    app.add_middleware(RequestTracingMiddleware)

    # =========================================================================
    # Routes
    # =========================================================================

    from api.routes.health import router as health_router
    app.include_router(health_router)

    from api.routes.recommend import router as recommend_router
    app.include_router(recommend_router)

    return app


def main() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "api.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    main()
