"""Swipes and matches."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError

from core.errors import BadInputError, InternalError
from core.metrics import matches_created_total, swipes_total
from domain.swipe import CreateSwipeInput, Match
from repositories.match import NO_SELF_SWIPE_CONSTRAINT, UNIQUE_SWIPE_CONSTRAINT
from repositories.utils import violates_constraint

logger = logging.getLogger(__name__)

SWIPED_USER_FOREIGN_KEY = "swipe_swiped_user_id_fkey"


class SwipeStore(Protocol):
    """Storage operations the match service depends on."""

    async def create_swipe(self, data: CreateSwipeInput) -> Match: ...


class MatchService:
    """Handles swipe requests and the matches they produce."""

    def __init__(self, repository: SwipeStore) -> None:
        self.repository = repository

    async def swipe(self, data: CreateSwipeInput) -> Match:
        """
        Record a swipe against another user.

        There are four possible outcomes:
        - a pass never creates a match;
        - a like on a user who already passed never creates a match;
        - a like on a user who has not swiped yet creates no match for now;
        - a like on a user who already liked back creates two match rows, one for
          each user, and the caller's row is returned.

        Returns:
            Match with matched=False and id=0 when no match was made

        Raises:
            BadInputError: If validation fails, the swipe was already made or the
                swiped user does not exist
            InternalError: On any other storage failure
        """
        logger.debug(f"MatchService swipe: {data}")

        try:
            data.validate()
        except ValueError as e:
            logger.error(f"Validating create swipe input failed: {e}")
            raise BadInputError(str(e)) from e

        try:
            match = await self.repository.create_swipe(data)
        except IntegrityError as e:
            raise _swipe_integrity_error(e) from e
        except ValueError as e:
            raise BadInputError(str(e)) from e
        except Exception as e:
            logger.error(f"Creating swipe failed: {e}")
            raise InternalError("creating swipe") from e

        swipes_total.labels(preference="like" if data.preference else "pass").inc()
        if match.matched:
            matches_created_total.inc()
            logger.info(f"Match made: user_id={data.user_id}, matched_user_id={data.swiped_user_id}, id={match.id}")

        return match


def _swipe_integrity_error(error: IntegrityError) -> Exception:
    if violates_constraint(error, UNIQUE_SWIPE_CONSTRAINT):
        return BadInputError("user has already been swiped")
    if violates_constraint(error, NO_SELF_SWIPE_CONSTRAINT):
        return BadInputError("user id and swiped user id cannot be the same value")
    if violates_constraint(error, SWIPED_USER_FOREIGN_KEY):
        return BadInputError("swiped user does not exist")
    logger.error(f"Creating swipe failed: {error}")
    return InternalError("creating swipe")
