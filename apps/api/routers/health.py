"""Liveness and dependency health endpoints."""

import logging
from collections.abc import Awaitable

import redis.asyncio as redis
from fastapi import APIRouter, Depends, Response
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api.deps import get_db, get_redis_client
from core.db import ping_db
from core.redis import ping_redis

router = APIRouter()
logger = logging.getLogger(__name__)


async def _probe(name: str, check: Awaitable[None], response: Response) -> dict[str, str]:
    try:
        await check
    except Exception as e:
        logger.warning(f"Health check failed: {name}: {e}")
        response.status_code = http_status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unhealthy", name: "disconnected", "error": str(e)}
    return {"status": "healthy", name: "connected"}


@router.get("/status")
async def status() -> dict[str, str]:
    """Liveness check, touches no dependencies."""
    return {"status": "ok"}


@router.get("/health/db")
async def health_db(response: Response, db: AsyncSession = Depends(get_db)) -> dict[str, str]:
    return await _probe("database", ping_db(db), response)


@router.get("/health/redis")
async def health_redis(response: Response, cache: redis.Redis = Depends(get_redis_client)) -> dict[str, str]:
    return await _probe("redis", ping_redis(cache), response)
