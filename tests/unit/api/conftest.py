"""API test fixtures.

Services are swapped for ones backed by mock repositories so the app runs
without a database, cache or geo-IP service.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import caller_location, get_auth_service, get_match_service, get_user_service
from apps.api.main import app
from core.auth import authorizer
from domain.user import Location
from services import AuthService, MatchService, UserService

CALLER_LOCATION = Location(lon=-5.0527, lat=50.266)


@pytest.fixture
def user_repository() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def match_repository() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def client(user_repository, match_repository):
    app.dependency_overrides[get_user_service] = lambda: UserService(user_repository)
    app.dependency_overrides[get_auth_service] = lambda: AuthService(user_repository, authorizer)
    app.dependency_overrides[get_match_service] = lambda: MatchService(match_repository)
    app.dependency_overrides[caller_location] = lambda: CALLER_LOCATION

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {authorizer.mint(1)}"}


@pytest.fixture
def login_location() -> Location:
    """Location every request resolves to."""
    return CALLER_LOCATION
