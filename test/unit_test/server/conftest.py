from typing import AsyncGenerator, Awaitable, Callable, Dict
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "password123"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with every table for each test."""
    from dpf_cms.core.database import create_all

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    from dpf_cms.server.services.storage import LocalStorage

    return LocalStorage(str(tmp_path / "public"), "/storage")


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, session_factory, storage) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from dpf_cms.core.database import get_session, get_session_factory
    from dpf_cms.server.main import app
    from dpf_cms.server.services.storage import get_storage

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_storage] = lambda: storage

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("dpf_cms.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: AsyncSession) -> Callable[..., Awaitable]:
    """Factory persisting a user with a known password."""
    from dpf_cms.core.database.entities.users import User
    from dpf_cms.core.database.repositories.users import UserRepository
    from dpf_cms.server.core.security import hash_password

    counter = {"n": 0}

    async def factory(role: str = "editor", *, email: str = None, name: str = None, is_active: bool = True, password: str = DEFAULT_PASSWORD):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=name or f"{role.title()} {n}",
            email=email or f"{role}{n}@example.org",
            role=role,
            is_active=is_active,
            password_hash=hash_password(password),
        )
        return await UserRepository(session).create(user)

    return factory


@pytest.fixture
def headers_for(session: AsyncSession) -> Callable[..., Awaitable[Dict[str, str]]]:
    """Issue a token for a user and return the Authorization header."""
    from dpf_cms.server.core.auth import issue_token

    async def factory(user) -> Dict[str, str]:
        token = await issue_token(session, user)
        return {"Authorization": f"Bearer {token}"}

    return factory


@pytest_asyncio.fixture
async def editor(make_user):
    return await make_user("editor")


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("admin")


@pytest_asyncio.fixture
async def superadmin(make_user):
    return await make_user("superadmin")


@pytest_asyncio.fixture
async def editor_headers(editor, headers_for) -> Dict[str, str]:
    return await headers_for(editor)


@pytest_asyncio.fixture
async def admin_headers(admin, headers_for) -> Dict[str, str]:
    return await headers_for(admin)


@pytest_asyncio.fixture
async def superadmin_headers(superadmin, headers_for) -> Dict[str, str]:
    return await headers_for(superadmin)


@pytest.fixture
def program_payload() -> Dict:
    return {
        "title": "Clean Water for Villages",
        "category": "Health",
        "short_description": "Wells for remote villages.",
        "description": "We build wells and train local maintainers.",
        "target_amount": 1000000,
        "status": "active",
    }


@pytest.fixture
def article_payload() -> Dict:
    return {
        "title": "First Well Completed",
        "category": "News",
        "excerpt": "The first well is done.",
        "body": "After three weeks of work the first well is ready.",
        "status": "draft",
    }
