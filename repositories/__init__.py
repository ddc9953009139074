"""Postgres repositories."""

from repositories.match import MatchRepository
from repositories.user import DISCOVER_LIMIT, UserRepository
from repositories.utils import violates_constraint

__all__ = ["MatchRepository", "UserRepository", "DISCOVER_LIMIT", "violates_constraint"]
