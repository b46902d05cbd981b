"""Standardized database configuration and session management."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from .logging_config import get_logger

logger = get_logger(__name__)


class DatabaseConfig:
    """Database configuration manager."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    async def initialize(self, metadata: Optional[MetaData] = None) -> None:
        """Initialize database engine and session factory, creating tables for ``metadata``."""
        self.engine = create_async_engine(
            self.database_url,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=300,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            expire_on_commit=False
        )
        if metadata is not None:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        logger.info("Database engine and session factory initialized", url=self.engine.url.render_as_string())

    async def close(self) -> None:
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database engine closed")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session; commits on success, rolls back on error."""
        if not self.session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.warning("Database session rolled back", error=str(e))
                raise

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False
