import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api import __version__
from blog_api.api.errors import register_exception_handlers
from blog_api.api.http import health_router, posts_router
from blog_api.core.config import Settings, get_settings
from blog_api.core.db import Database
from blog_api.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Build the API around an explicit database handle"""
    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.sql_echo)

    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.connect()
        logger.info("Blog API started")
        try:
            yield
        finally:
            await database.disconnect()
            logger.info("Blog API stopped")

    app = FastAPI(
        title="Blog API",
        description="Blog post CRUD REST API",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(posts_router)

    @app.get("/")
    async def root():
        return {
            "message": "Blog API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    return app
