"""FastAPI application for the net worth service."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from networth import __version__
from networth.config.settings import Settings, get_settings
from networth.config.logging_config import setup_logging
from networth.repositories.sqlalchemy.database import init_db
from networth.api.routers import net_worth_router
from networth.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and make sure the schema exists before serving."""
    setup_logging()
    init_db()
    logger.info("%s %s ready", app.title, app.version)
    yield


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application."""
    settings = settings or get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Monthly net worth and investment history reconstructed from the ledger",
        version=__version__,
        lifespan=lifespan,
    )
    application.include_router(net_worth_router)
    application.add_exception_handler(AppError, app_error_handler)

    @application.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @application.get("/")
    def root() -> dict[str, str]:
        return {
            "app": application.title,
            "version": application.version,
            "docs": "/docs",
        }

    return application


app = create_app()
