"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.deps import get_db
from app.core.security import create_access_token
from app.db.base import Base
from app.db import models_registry  # noqa: F401 - Import to register models
from app.main import app
from app.models.event import Event
from app.models.timeline import Timeline
from app.models.user import User
from app.services.user_service import get_profile_cache

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_profile_cache():
    """Profile cache is process-wide; start every test empty."""
    get_profile_cache().clear()
    yield
    get_profile_cache().clear()


def _headers(user_id: str, username: str | None = None) -> dict:
    token = create_access_token(data={"sub": user_id, "username": username})
    return {"Authorization": f"Bearer {token}"}


async def _add_user(db_session: AsyncSession, **fields) -> User:
    user = User(**fields)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def owner(db_session: AsyncSession) -> User:
    """Event organizer."""
    return await _add_user(
        db_session,
        id="owner",
        username="harbour-yc",
        email="races@harbour-yc.example",
        role="ADMIN",
    )


@pytest_asyncio.fixture(scope="function")
async def participant(db_session: AsyncSession) -> User:
    """Sailor taking part in the event."""
    return await _add_user(
        db_session,
        id="sailor",
        username="jo-laser",
        email="jo@example.com",
    )


@pytest_asyncio.fixture(scope="function")
async def other_user(db_session: AsyncSession) -> User:
    """Unrelated club member."""
    return await _add_user(
        db_session,
        id="spectator",
        username="sam-ilca",
        email="sam@example.com",
    )


@pytest.fixture
def owner_headers(owner: User) -> dict:
    return _headers(owner.id, owner.username)


@pytest.fixture
def participant_headers(participant: User) -> dict:
    return _headers(participant.id, participant.username)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return _headers(other_user.id, other_user.username)


@pytest_asyncio.fixture(scope="function")
async def event(db_session: AsyncSession, owner: User) -> Event:
    """Event owned by ``owner`` with no timeline yet."""
    event = Event(
        id="evt-spring",
        title="Spring Regatta",
        slug="spring-regatta",
        user_id=owner.id,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture(scope="function")
async def timeline(db_session: AsyncSession, event: Event) -> Timeline:
    """Active, moderated timeline on ``event``."""
    timeline = Timeline(
        event_id=event.id,
        is_active=True,
        require_approval=True,
        allow_public_viewing=True,
        allow_participant_posting=True,
    )
    db_session.add(timeline)
    await db_session.commit()
    await db_session.refresh(timeline)
    return timeline


@pytest.fixture
def headers_for():
    """Bearer headers for an arbitrary identity-provider subject."""
    return _headers
