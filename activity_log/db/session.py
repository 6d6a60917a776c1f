import logging
from typing import Optional
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from activity_log.core.config.settings import settings
from activity_log.db.base import Base


from activity_log.db import models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Owns the process-wide async engine and its session factory."""

    def __init__(self, database_url: Optional[str] = None):
        self._database_url = database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.DATABASE_URL

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            logger.info("🔧 Creating pooled engine for the activity database")
            self._engine = create_async_engine(
                    self.database_url,
                    echo=False,
                    pool_size=settings.DB_POOL_SIZE,
                    max_overflow=settings.DB_MAX_OVERFLOW,
                    pool_pre_ping=True,
                    )
        return self._engine

    def get_session_factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.get_engine(),
                expire_on_commit=False,
            )
            logger.debug("Created session factory")
        return self._session_factory

    async def initialize(self):
        """Create the schema when CREATE_DB is enabled."""
        if not settings.CREATE_DB:
            logger.debug("CREATE_DB disabled, skipping schema creation")
            return
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Created all activity tables")

    async def close(self):
        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Disposed database engine")
        self._engine = None
        self._session_factory = None


db_manager = DatabaseSessionManager()
