"""
Testcontainers-based PostGIS fixtures for integration tests.

A single container is started per test session. Every test gets freshly
created tables, so tests never see each other's rows.

Usage:
    # In a conftest.py
    from tests.shared.fixtures.database import make_user, session_maker

    async def test_something(session_maker, make_user):
        user = await make_user(name="Alex")
"""

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

from core.db import Base
from domain.user import CreateUserInput, Location, User
from repositories import UserRepository

POSTGIS_IMAGE = "postgis/postgis:16-3.4-alpine"

# Where discover callers stand in these tests
ORIGIN = Location(lon=-5.0527, lat=50.266)


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostGIS container for the test session."""
    with PostgresContainer(POSTGIS_IMAGE) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def async_engine(postgres_container):
    """Create an async engine connected to the test container."""
    connection_url = postgres_container.get_connection_url()
    async_url = connection_url.replace("postgresql+psycopg2://", "postgresql+asyncpg://")
    async_url = async_url.replace("postgresql://", "postgresql+asyncpg://")

    return create_async_engine(async_url, echo=False, poolclass=NullPool)


@pytest_asyncio.fixture
async def session_maker(async_engine) -> async_sessionmaker:
    """Provide a session factory over clean tables."""
    import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def make_user(session_maker):
    """Factory inserting a user and returning it."""
    counter = 0

    async def _make_user(
        name: str = "user",
        gender: str = "female",
        age: int = 25,
        location: Location = ORIGIN,
    ) -> User:
        nonlocal counter
        counter += 1
        data = CreateUserInput(
            email=f"{name.lower()}{counter}@example.com",
            password="Passw0rd!",
            name=name,
            gender=gender,
            age=age,
            location=location,
        )
        async with session_maker() as session:
            return await UserRepository(session).create_user(data, password_hash="not-a-real-hash")

    return _make_user
