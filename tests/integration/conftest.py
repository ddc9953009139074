"""
Pytest configuration for integration tests.

Integration tests use Testcontainers for an ephemeral PostGIS instance.
Import the shared fixtures to make them available.
"""

from tests.shared.fixtures.database import (
    async_engine,
    make_user,
    postgres_container,
    session_maker,
)

__all__ = [
    "async_engine",
    "make_user",
    "postgres_container",
    "session_maker",
]
