import os

# Settings are read at import time.
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_auth.core.application import create_application
from panel_auth.infrastructure.database.async_db import (
    create_async_db_and_tables,
    get_db_session,
)
from panel_auth.infrastructure.dependency_injection.reset_password_dependencies import (
    get_event_publisher,
    get_page_state_store,
    get_rate_limiter,
)
from panel_auth.infrastructure.services import (
    InMemoryEventPublisher,
    InMemoryPageStateStore,
    InMemoryRateLimiter,
)


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'panel_auth.db'}")
    await create_async_db_and_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def async_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def rate_limiter():
    return InMemoryRateLimiter()


@pytest.fixture
def page_store():
    return InMemoryPageStateStore()


@pytest.fixture
def event_publisher():
    return InMemoryEventPublisher()


@pytest.fixture
def app(session_factory, rate_limiter, page_store, event_publisher):
    application = create_application()

    async def _get_test_db_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_test_db_session
    application.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    application.dependency_overrides[get_page_state_store] = lambda: page_store
    application.dependency_overrides[get_event_publisher] = lambda: event_publisher
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
