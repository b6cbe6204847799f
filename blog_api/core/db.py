import logging
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from blog_api.db.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Process-wide handle to the post store.

    Opened once at startup and disposed once at shutdown; request handlers
    only borrow sessions from it.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine and make sure the schema exists"""
        if self._engine is not None:
            return

        engine = create_async_engine(self.url, echo=self.echo)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Connected to database {engine.url.render_as_string(hide_password=True)}")

    async def disconnect(self) -> None:
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    async def ping(self) -> bool:
        """Round-trip a trivial query to check the store is reachable"""
        if not self.is_connected:
            return False
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database ping failed: {e}")
            return False
        return True


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Session dependency for FastAPI routes"""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
