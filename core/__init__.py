"""Core configuration, storage and cross-cutting helpers."""

from core.config import settings
from core.db import Base, close_db, engine, get_db, ping_db
from core.redis import close_redis, get_redis, ping_redis

__all__ = ["settings", "Base", "engine", "get_db", "ping_db", "close_db", "get_redis", "ping_redis", "close_redis"]
