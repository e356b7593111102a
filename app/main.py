"""FastAPI application factory. No business logic; only wiring, lifecycle and error handlers.

Run with:  uvicorn app.main:create_app --factory
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.database import Database

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def create_app(
    settings: Settings | None = None,
    db: Database | None = None,
    products_db: Database | None = None,
) -> FastAPI:
    """
    Build the application.

    Settings are validated here, so a missing JWT_SECRET stops startup.
    Storage handles are opened at startup (unless injected) and disposed at shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        main = db or Database(settings.DATABASE_URL, echo=settings.DEBUG)
        if products_db is not None:
            catalog = products_db
        elif settings.products_database_url == settings.DATABASE_URL:
            catalog = main
        else:
            catalog = Database(settings.products_database_url, echo=settings.DEBUG)
        app.state.db = main
        app.state.products_db = catalog
        logger.info("Application started", extra={"app_env": settings.APP_ENV})
        try:
            yield
        finally:
            main.dispose()
            if catalog is not main:
                catalog.dispose()
            logger.info("Application stopped")

    app = FastAPI(
        title="Pharma Catalog CMS API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Pharma Catalog CMS API"}

    return app
