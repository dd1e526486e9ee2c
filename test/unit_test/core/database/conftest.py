"""Test configuration for database unit tests.

Fixtures provide an in-memory SQLite database with every table created and
small factories for rows the repositories query.
"""

from __future__ import annotations

from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dpf_cms.core.database import create_all


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    factory = async_sessionmaker(in_memory_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def add_program(in_memory_session):
    from dpf_cms.core.database.entities.programs import Program

    async def _add(title: str, **fields) -> Program:
        data = {
            "slug": title.lower().replace(" ", "-"),
            "category": "Health",
            "short_description": "Short",
            "description": "Long",
            "target_amount": Decimal("1000"),
            "status": "active",
            **fields,
        }
        program = Program(title=title, **data)
        in_memory_session.add(program)
        await in_memory_session.commit()
        await in_memory_session.refresh(program)
        return program

    return _add


@pytest.fixture
def add_article(in_memory_session):
    from dpf_cms.core.database.entities.articles import Article

    async def _add(title: str, **fields) -> Article:
        data = {
            "slug": title.lower().replace(" ", "-"),
            "category": "News",
            "excerpt": "Excerpt",
            "body": "Body",
            "status": "draft",
            **fields,
        }
        article = Article(title=title, **data)
        in_memory_session.add(article)
        await in_memory_session.commit()
        await in_memory_session.refresh(article)
        return article

    return _add


@pytest.fixture
def add_user(in_memory_session):
    from dpf_cms.core.database.entities.users import User

    counter = {"n": 0}

    async def _add(role: str = "editor", **fields) -> User:
        counter["n"] += 1
        data = {
            "name": f"User {counter['n']}",
            "email": f"user{counter['n']}@example.org",
            "password_hash": "x",
            "role": role,
            **fields,
        }
        user = User(**data)
        in_memory_session.add(user)
        await in_memory_session.commit()
        await in_memory_session.refresh(user)
        return user

    return _add
