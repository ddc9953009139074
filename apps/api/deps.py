"""FastAPI dependencies."""

from collections.abc import AsyncGenerator

import httpx
import redis.asyncio as redis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import Authorizer, get_authorizer
from core.db import get_db as _get_db
from core.errors import InternalError
from core.location import LocationError, LocationResolver
from core.location import get_location_resolver as _get_location_resolver
from core.redis import get_redis as _get_redis
from domain.user import Location
from repositories import MatchRepository, UserRepository
from services import AuthService, MatchService, UserService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in _get_db():
        yield session


async def get_redis_client() -> redis.Redis:
    """Get Redis client dependency."""
    return await _get_redis()


async def get_location_resolver() -> LocationResolver:
    """Get geo-IP location resolver dependency."""
    return await _get_location_resolver()


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
) -> AuthService:
    return AuthService(UserRepository(db), authorizer)


def get_match_service(db: AsyncSession = Depends(get_db)) -> MatchService:
    return MatchService(MatchRepository(db))


def client_ip(request: Request) -> str:
    """Best guess at the caller's IP, honouring reverse proxy headers."""
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.client.host if request.client else ""


async def caller_location(
    request: Request,
    resolver: LocationResolver = Depends(get_location_resolver),
) -> Location:
    """Resolve the caller's location from their IP address."""
    try:
        return await resolver.by_ip(client_ip(request))
    except (LocationError, httpx.HTTPError) as e:
        raise InternalError(f"resolving location: {e}") from e
