"""Swipe and match persistence."""

import logging

from sqlalchemy import func, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from domain.swipe import CreateMatchInput, CreateSwipeInput, Match
from models.match import Match as MatchModel
from models.swipe import Swipe

logger = logging.getLogger(__name__)

UNIQUE_SWIPE_CONSTRAINT = "unique_swiped_user_per_user"
NO_SELF_SWIPE_CONSTRAINT = "no_matching_user_ids"
UNIQUE_MATCH_CONSTRAINT = "unique_matched_user_per_user"


class MatchRepository:
    """Writes swipes and the matches they complete."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_swipe(self, data: CreateSwipeInput) -> Match:
        """
        Record a swipe and, if it completes a mutual like, the pair of match rows.

        Runs as one transaction. The swipe is inserted first; a like is then checked
        against the swiped user's swipe on the caller. When both are likes, two match
        rows are written, (caller, swiped) and (swiped, caller), and the id of the
        caller's row is returned. Any failure rolls back the swipe as well.

        Swipes on the same pair of users are serialised with a transaction-scoped
        advisory lock so two users liking each other at once always produce the
        match. Match rows that already exist are kept, only the missing ones are
        written, and the caller's row id is returned either way.

        Args:
            data: Validated swipe input

        Returns:
            Match with matched=False and id=0 when no match was made

        Raises:
            IntegrityError: On a duplicate swipe, a self swipe or an unknown user
        """
        async with self.session.begin():
            await self._lock_pair(data.user_id, data.swiped_user_id)

            swipe = await self._insert_swipe(data)
            if not swipe.preference:
                return Match()

            reciprocal = await self._get_swipe(swipe.swiped_user_id, swipe.user_id)
            if reciprocal is None or not reciprocal.preference:
                return Match()

            match_id = await self._create_matches(
                [
                    CreateMatchInput(user_id=swipe.user_id, matched_user_id=swipe.swiped_user_id),
                    CreateMatchInput(user_id=reciprocal.user_id, matched_user_id=reciprocal.swiped_user_id),
                ]
            )

            return Match(matched=True, id=match_id, matched_user_id=swipe.swiped_user_id)

    async def _lock_pair(self, user_id: int, other_user_id: int) -> None:
        low, high = sorted((user_id, other_user_id))
        await self.session.execute(select(func.pg_advisory_xact_lock(low, high)))

    async def _insert_swipe(self, data: CreateSwipeInput):  # type: ignore[no-untyped-def]
        result = await self.session.execute(
            insert(Swipe)
            .values(user_id=data.user_id, swiped_user_id=data.swiped_user_id, preference=data.preference)
            .returning(Swipe.id, Swipe.user_id, Swipe.swiped_user_id, Swipe.preference)
        )
        return result.one()

    async def _get_swipe(self, user_id: int, swiped_user_id: int):  # type: ignore[no-untyped-def]
        result = await self.session.execute(
            select(Swipe.id, Swipe.user_id, Swipe.swiped_user_id, Swipe.preference).where(
                Swipe.user_id == user_id, Swipe.swiped_user_id == swiped_user_id
            )
        )
        return result.one_or_none()

    async def _create_matches(self, matches: list[CreateMatchInput]) -> int:
        """Insert the mirrored match rows, keeping existing ones, and return the first row's id."""
        for match in matches:
            match.validate()

        result = await self.session.execute(
            pg_insert(MatchModel)
            .values([{"user_id": m.user_id, "matched_user_id": m.matched_user_id} for m in matches])
            .on_conflict_do_nothing(constraint=UNIQUE_MATCH_CONSTRAINT)
            .returning(MatchModel.id)
        )
        inserted = len(result.all())

        first = matches[0]
        if inserted < len(matches):
            logger.info(f"Match already existed: user_id={first.user_id}, matched_user_id={first.matched_user_id}")

        return await self._get_match_id(first.user_id, first.matched_user_id)

    async def _get_match_id(self, user_id: int, matched_user_id: int) -> int:
        result = await self.session.execute(
            select(MatchModel.id).where(MatchModel.user_id == user_id, MatchModel.matched_user_id == matched_user_id)
        )
        return int(result.scalar_one())
