"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carbon_ledger.api import (
    data_entries_router,
    facilities_router,
    factors_router,
    organizations_router,
)
from carbon_ledger.core.config import get_config
from carbon_ledger.database.base import get_db_url, get_engine_kw
from carbon_ledger.database.session_manager.db_session import Database
from carbon_ledger.services.exceptions import LedgerError
from carbon_ledger.services.extraction import get_extractor
from carbon_ledger.services.storage import get_document_storage

logging.basicConfig(
    level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def register_routers(app: FastAPI):
    """Register all API routers."""
    app.include_router(organizations_router)
    app.include_router(facilities_router)
    app.include_router(factors_router)
    app.include_router(data_entries_router)


def register_exception_handlers(app: FastAPI):
    """Translate service and framework errors into ``{"detail": ...}`` responses."""

    @app.exception_handler(LedgerError)
    async def ledger_exception_handler(request: Request, exc: LedgerError):
        logging.info(f"{type(exc).__name__} on {request.url.path}: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logging.error(f"HTTPException occurred: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc.detail)},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": jsonable_encoder(exc.errors()),
                "message": "Validation error",
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.error(f"Exception occurred: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles database initialization and cleanup.
    """
    logging.info("Application startup")
    async_db_url = get_db_url(app.state.config)

    Database.init(async_db_url, engine_kw=get_engine_kw(async_db_url))
    logging.info("Initialized database")

    try:
        yield
    finally:
        await Database.dispose()
        logging.info("Application shutdown")


def get_app(config_file: str) -> FastAPI:
    """
    Application factory function.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Configured FastAPI application instance
    """
    config = get_config(config_file)
    api = config.section("api")

    app = FastAPI(
        title=api.get("title", "Carbon Ledger API"),
        description=api.get("description", "Multi-tenant carbon accounting data capture"),
        version=api.get("version", "1.0.0"),
        debug=api.get("debug", False),
        lifespan=lifespan,
        # Generate better OpenAPI schema for enums
        generate_unique_id_function=lambda route: (
            f"{route.tags[0]}-{route.name}" if route.tags else route.name
        ),
    )

    app.state.config = config
    app.state.storage = get_document_storage(config)
    app.state.extractor = get_extractor(config)

    register_routers(app)
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.section("cors").get("origins", []),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
