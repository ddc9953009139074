"""Domain types shared by services, repositories and the API."""

from domain.auth import LoginInput
from domain.swipe import CreateMatchInput, CreateSwipeInput, Match
from domain.user import (
    CreateUserInput,
    Gender,
    GetUsersInput,
    Location,
    SortType,
    User,
    UserDetails,
    UserFilters,
)

__all__ = [
    "LoginInput",
    "CreateMatchInput",
    "CreateSwipeInput",
    "Match",
    "CreateUserInput",
    "Gender",
    "GetUsersInput",
    "Location",
    "SortType",
    "User",
    "UserDetails",
    "UserFilters",
]
