"""
Request-scoped database session manager.

``Database.init`` is called once per process (app lifespan, test fixtures,
scripts). Every unit of work then opens ``async with Database() as session``:
the session is committed when the block exits cleanly, rolled back when it
raises, and closed in both cases.
"""
import logging
from typing import Any, Optional

from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from carbon_ledger.database.base import get_async_engine
from carbon_ledger.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    """Async context manager handing out one committed-or-rolled-back session."""

    _async_engine: Optional[AsyncEngine] = None
    _async_session_maker: Optional[async_sessionmaker] = None

    def __init__(self):
        self.session: Optional[AsyncSession] = None

    @classmethod
    def init(cls, async_db_url: URL, engine_kw: Optional[dict[str, Any]] = None):
        """Create the shared engine and session factory."""
        cls._async_engine = get_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._async_engine, expire_on_commit=False, class_=AsyncSession
        )

    @classmethod
    async def dispose(cls):
        """Release every pooled connection."""
        if cls._async_engine is not None:
            await cls._async_engine.dispose()
        cls._async_engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized(
                "Database.init() must be called before opening a session"
            )
        self.session = self._async_session_maker()
        return self.session

    async def __aexit__(self, exc_type, exc_value, traceback):
        try:
            if exc_type is None:
                try:
                    await self.session.commit()
                except SQLAlchemyError as e:
                    await self.session.rollback()
                    logger.error(f"Commit failed, transaction rolled back: {e}")
                    raise DatabaseTransactionError(str(e)) from e
            else:
                await self.session.rollback()
        finally:
            await self.session.close()
