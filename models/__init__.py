"""Database models."""

from models.match import Match
from models.swipe import Swipe
from models.user import Geography, User

__all__ = [
    "User",
    "Geography",
    "Swipe",
    "Match",
]
