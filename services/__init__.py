"""Application services."""

from services.auth import AuthService
from services.match import MatchService, SwipeStore
from services.user import UserService, UserStore

__all__ = ["AuthService", "MatchService", "SwipeStore", "UserService", "UserStore"]
