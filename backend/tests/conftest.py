"""
Pytest configuration and fixtures for FunnelPress tests.
"""
import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-jwt-signing")
os.environ.setdefault("VISITOR_HASH_SALT", "test-visitor-salt")
os.environ["WIDGET_RENDER_CACHE_ENABLED"] = "false"
os.environ["AUTO_INIT_DB"] = "false"

from funnelpress.core.security import create_access_token, hash_password  # noqa: E402
from funnelpress.database import get_db, get_session_maker  # noqa: E402
from funnelpress.models import (  # noqa: E402
    Article,
    Page,
    Site,
    SiteStatus,
    Tenant,
    User,
    UserRole,
)
from funnelpress.models.base import Base  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TENANT_ID = "00000000-0000-0000-0000-000000000001"
OTHER_TENANT_ID = "00000000-0000-0000-0000-000000000009"
ADMIN_ID = "00000000-0000-0000-0000-000000000002"
EDITOR_ID = "00000000-0000-0000-0000-000000000004"
SITE_ID = "00000000-0000-0000-0000-000000000003"
ARTICLE_ID = "00000000-0000-0000-0000-000000000005"
PAGE_ID = "00000000-0000-0000-0000-000000000006"
TEST_PASSWORD = "correct-horse-battery"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
def session_maker(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def db_session_with_data(db_session: AsyncSession) -> AsyncSession:
    """Database session with a tenant, two users, a site, an article and a page."""
    db_session.add(Tenant(id=TENANT_ID, name="Test Tenant"))
    db_session.add(Tenant(id=OTHER_TENANT_ID, name="Other Tenant"))

    db_session.add(
        User(
            id=ADMIN_ID,
            tenant_id=TENANT_ID,
            email="admin@example.com",
            name="Admin User",
            password_hash=hash_password(TEST_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    db_session.add(
        User(
            id=EDITOR_ID,
            tenant_id=TENANT_ID,
            email="editor@example.com",
            name="Editor User",
            password_hash=hash_password(TEST_PASSWORD),
            role=UserRole.EDITOR,
        )
    )

    db_session.add(
        Site(
            id=SITE_ID,
            tenant_id=TENANT_ID,
            name="Test Site",
            subdomain="test-site",
            domain="example.com",
            status=SiteStatus.PUBLISHED,
        )
    )
    db_session.add(
        Article(
            id=ARTICLE_ID,
            site_id=SITE_ID,
            title="Test Article",
            slug="test-article",
            published=True,
        )
    )
    db_session.add(
        Page(
            id=PAGE_ID,
            site_id=SITE_ID,
            title="About",
            slug="about",
            published=True,
        )
    )

    await db_session.commit()

    return db_session


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app(db_session: AsyncSession, session_maker: async_sessionmaker) -> FastAPI:
    """Create test FastAPI application."""
    from funnelpress.main import app as main_app

    async def override_get_db():
        yield db_session
        await db_session.commit()

    main_app.dependency_overrides[get_db] = override_get_db
    main_app.dependency_overrides[get_session_maker] = lambda: session_maker

    yield main_app

    main_app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================

@pytest.fixture
def tenant_headers() -> dict:
    return {"X-Tenant-Id": TENANT_ID}


@pytest.fixture
def auth_headers() -> dict:
    """Headers for the tenant admin with a valid token."""
    token = create_access_token(data={"sub": ADMIN_ID, "tenant_id": TENANT_ID})
    return {"Authorization": f"Bearer {token}", "X-Tenant-Id": TENANT_ID}


@pytest.fixture
def editor_headers() -> dict:
    token = create_access_token(data={"sub": EDITOR_ID, "tenant_id": TENANT_ID})
    return {"Authorization": f"Bearer {token}", "X-Tenant-Id": TENANT_ID}


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_redis():
    """Mock Redis client for render cache tests."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def site_id() -> str:
    """Default test site ID."""
    return SITE_ID


@pytest.fixture
def article_id() -> str:
    """Default test article ID."""
    return ARTICLE_ID


@pytest.fixture
def page_id() -> str:
    """Default test page ID."""
    return PAGE_ID
