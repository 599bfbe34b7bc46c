"""
FastAPI application entry point
Main application factory and configuration
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reviewhub.api.v1.api import api_router
from reviewhub.core.config import settings
from reviewhub.core.database import engine, init_models
from reviewhub.core.exceptions import setup_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events
    Applies the schema on startup, disposes connections on shutdown
    Reference: https://fastapi.tiangolo.com/advanced/events/
    """
    await init_models(engine)
    logger.info(f"Database schema ready ({engine.url.get_backend_name()})")

    yield

    await engine.dispose()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Build the application with routes, CORS and envelope error handlers."""
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Businesses, reviews, users and photos",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(application)
    application.include_router(api_router)

    @application.get("/")
    async def root():
        """Basic information about the API"""
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "docs": "/docs",
        }

    return application


app = create_app()
