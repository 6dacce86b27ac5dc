"""
Database connection and session management for FunnelPress.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from funnelpress.config import settings
from funnelpress.models.base import Base

logger = logging.getLogger(__name__)

# Convert sync URL to async
DATABASE_URL = settings.DATABASE_URL.replace(
    "postgresql://", "postgresql+asyncpg://"
)


def _engine_options(url: str) -> dict:
    """Pool options only apply to server databases."""
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
    }


engine = create_async_engine(
    DATABASE_URL,
    echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL == "DEBUG",
    **_engine_options(DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_session_maker() -> async_sessionmaker:
    """Dependency returning the session factory used by background writes."""
    return AsyncSessionLocal


@asynccontextmanager
async def get_db_context(
    session_maker: async_sessionmaker | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Context manager for database sessions (for background tasks)."""
    maker = session_maker or AsyncSessionLocal
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """Create tables and register the built-in widgets.

    Runs once at process startup. Both steps are idempotent.
    """
    from funnelpress.models import (  # noqa: F401
        ActivityLogEntry,
        Article,
        ClickEvent,
        EmailSubscriber,
        NavigationTemplate,
        Page,
        Site,
        Tenant,
        User,
        ViewEvent,
        WidgetCategory,
        WidgetDefinition,
        WidgetInstance,
    )
    from funnelpress.services.widget_registry import initialize_built_in_widgets

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db_context() as session:
        await initialize_built_in_widgets(session)

    logger.info("Database initialized")
