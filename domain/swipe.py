"""Swipe and match domain types."""

from dataclasses import dataclass

from domain.user import MAXIMUM_ID


@dataclass
class CreateSwipeInput:
    """A swipe action from ``user_id`` against ``swiped_user_id``."""

    user_id: int
    swiped_user_id: int
    preference: bool

    def validate(self) -> None:
        if self.user_id == 0:
            raise ValueError("user id is a required field")
        if self.swiped_user_id == 0:
            raise ValueError("swiped user id is a required field")
        if not 0 < self.user_id <= MAXIMUM_ID:
            raise ValueError("user id is out of range")
        if not 0 < self.swiped_user_id <= MAXIMUM_ID:
            raise ValueError("swiped user id is out of range")
        if self.user_id == self.swiped_user_id:
            raise ValueError("user id and swiped user id cannot be the same value")


@dataclass
class CreateMatchInput:
    user_id: int
    matched_user_id: int

    def validate(self) -> None:
        if self.user_id == 0:
            raise ValueError("user id is a required field")
        if self.matched_user_id == 0:
            raise ValueError("matched user id is a required field")
        if self.user_id == self.matched_user_id:
            raise ValueError("user id and matched user id cannot be the same value")


@dataclass
class Match:
    """
    Outcome of a swipe.

    ``id`` is the id of the (swiper, swiped) match row and 0 when there was no match.
    """

    matched: bool = False
    id: int = 0
    matched_user_id: int = 0
