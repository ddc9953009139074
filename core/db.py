"""Database engine and sessions."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from core.config import settings

# At most POOL_SIZE + POOL_OVERFLOW open connections
POOL_SIZE = 2
POOL_OVERFLOW = 3
POOL_RECYCLE_SECONDS = 30 * 60


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine with the service's pool limits."""
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=POOL_SIZE,
        max_overflow=POOL_OVERFLOW,
        pool_recycle=POOL_RECYCLE_SECONDS,
    )


engine = create_engine(settings.database_url, echo=settings.debug_enabled)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Declarative base for the user, swipe and match tables."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that is closed once the request is done."""
    async with AsyncSessionLocal() as session:
        yield session


async def ping_db(session: AsyncSession) -> None:
    await session.execute(text("SELECT 1"))


async def close_db() -> None:
    """Dispose of the engine connection pool."""
    await engine.dispose()
