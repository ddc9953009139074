"""Unit tests for AuthService."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from core.auth import Authorizer
from core.errors import BadInputError, InternalError, NoResultsError, UnauthorizedError
from core.security import hash_password
from domain.auth import LoginInput
from domain.user import Gender, Location, User
from services.auth import AuthService

PASSWORD = "Passw0rd!"
LOGIN_LOCATION = Location(lon=13.4, lat=52.5)


@pytest.fixture(scope="module")
def stored_user() -> User:
    return User(
        id=5,
        email="alex@example.com",
        password=hash_password(PASSWORD, rounds=4),
        name="Alex",
        gender=Gender.FEMALE,
        age=25,
    )


@pytest.fixture
def authorizer() -> Authorizer:
    return Authorizer(
        secret="unit-test-secret-that-is-long-enough-for-hs256",
        domain_name="swipe-match.test",
        duration=timedelta(hours=1),
    )


@pytest.fixture
def repository(stored_user) -> AsyncMock:
    repo = AsyncMock()
    repo.user_by_email.return_value = stored_user
    return repo


class TestLogin:
    """Test the login flow."""

    @pytest.mark.asyncio
    async def test_login_returns_token_for_user(self, repository, authorizer):
        service = AuthService(repository, authorizer)

        token = await service.login(LoginInput(email="alex@example.com", password=PASSWORD, location=LOGIN_LOCATION))

        assert authorizer.authorize(token) == 5
        repository.update_user_location.assert_awaited_once_with(5, LOGIN_LOCATION)

    @pytest.mark.asyncio
    async def test_wrong_password(self, repository, authorizer):
        service = AuthService(repository, authorizer)

        with pytest.raises(UnauthorizedError, match="incorrect credentials"):
            await service.login(LoginInput(email="alex@example.com", password="Wr0ng!pass"))

        repository.update_user_location.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_email_fails_like_wrong_password(self, repository, authorizer, monkeypatch):
        burned = []
        monkeypatch.setattr("services.auth.burn_password_check", burned.append)
        repository.user_by_email.side_effect = NoResultsError()
        service = AuthService(repository, authorizer)

        with pytest.raises(UnauthorizedError, match="incorrect credentials"):
            await service.login(LoginInput(email="nobody@example.com", password=PASSWORD))

        assert burned == [PASSWORD]

    @pytest.mark.asyncio
    async def test_missing_password_is_bad_input(self, repository, authorizer):
        service = AuthService(repository, authorizer)

        with pytest.raises(BadInputError, match="password is a required field"):
            await service.login(LoginInput(email="alex@example.com", password=""))

        repository.user_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_lookup_failure_is_internal(self, repository, authorizer):
        repository.user_by_email.side_effect = ConnectionError("database is down")
        service = AuthService(repository, authorizer)

        with pytest.raises(InternalError, match="getting user"):
            await service.login(LoginInput(email="alex@example.com", password=PASSWORD))

    @pytest.mark.asyncio
    async def test_location_update_failure_is_internal(self, repository, authorizer):
        repository.update_user_location.side_effect = ConnectionError("database is down")
        service = AuthService(repository, authorizer)

        with pytest.raises(InternalError, match="updating user location"):
            await service.login(LoginInput(email="alex@example.com", password=PASSWORD))
