"""Unit tests for MatchService."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from core.errors import BadInputError, InternalError
from domain.swipe import CreateSwipeInput, Match
from services.match import MatchService


def _integrity_error(constraint: str) -> IntegrityError:
    return IntegrityError("INSERT", {}, Exception(f'violates constraint "{constraint}"'))


@pytest.fixture
def repository() -> AsyncMock:
    repo = AsyncMock()
    repo.create_swipe.return_value = Match()
    return repo


class TestSwipe:
    """Test swipe handling and error mapping."""

    @pytest.mark.asyncio
    async def test_swipe_without_match(self, repository):
        service = MatchService(repository)

        match = await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2, preference=True))

        assert match == Match()
        repository.create_swipe.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_swipe_with_match(self, repository):
        repository.create_swipe.return_value = Match(matched=True, id=11, matched_user_id=2)
        service = MatchService(repository)

        match = await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2, preference=True))

        assert match.matched is True
        assert match.id == 11

    @pytest.mark.asyncio
    async def test_self_swipe_is_rejected_before_storage(self, repository):
        service = MatchService(repository)

        with pytest.raises(BadInputError, match="user id and swiped user id cannot be the same value"):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=1, preference=True))

        repository.create_swipe.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_swiped_user(self, repository):
        service = MatchService(repository)

        with pytest.raises(BadInputError, match="swiped user id is a required field"):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=0, preference=False))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("constraint", "message"),
        [
            ("unique_swiped_user_per_user", "user has already been swiped"),
            ("no_matching_user_ids", "user id and swiped user id cannot be the same value"),
            ("swipe_swiped_user_id_fkey", "swiped user does not exist"),
        ],
    )
    async def test_constraint_violations_are_bad_input(self, repository, constraint, message):
        repository.create_swipe.side_effect = _integrity_error(constraint)
        service = MatchService(repository)

        with pytest.raises(BadInputError, match=message):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2, preference=True))

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_internal(self, repository):
        repository.create_swipe.side_effect = _integrity_error("swipe_user_id_fkey")
        service = MatchService(repository)

        with pytest.raises(InternalError, match="creating swipe"):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2, preference=True))

    @pytest.mark.asyncio
    async def test_storage_failure_is_internal(self, repository):
        repository.create_swipe.side_effect = ConnectionError("database is down")
        service = MatchService(repository)

        with pytest.raises(InternalError, match="creating swipe"):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2, preference=False))

    @pytest.mark.asyncio
    async def test_id_outside_column_range_is_bad_input(self, repository):
        service = MatchService(repository)

        with pytest.raises(BadInputError, match="swiped user id is out of range"):
            await service.swipe(CreateSwipeInput(user_id=1, swiped_user_id=2**40, preference=True))

        repository.create_swipe.assert_not_called()
