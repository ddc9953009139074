"""Discover endpoint."""

import logging

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from apps.api.deps import caller_location, get_user_service
from core.auth import user_from_request
from core.config import settings
from core.errors import BadInputError
from domain.user import GetUsersInput, Location, SortType, UserFilters
from services import UserService

router = APIRouter()
logger = logging.getLogger(__name__)


class UserDetailsOut(BaseModel):
    """Public details of a candidate user."""

    id: int
    name: str
    gender: str
    age: int
    distanceFromMe: float


class DiscoverResponse(BaseModel):
    results: list[UserDetailsOut]


@router.get("")
async def discover(
    request: Request,
    max_age: str | None = Query(None, alias="maxAge"),
    min_age: str | None = Query(None, alias="minAge"),
    genders: str | None = Query(None),
    sort: str | None = Query(None),
    location: Location = Depends(caller_location),
    service: UserService = Depends(get_user_service),
) -> DiscoverResponse:
    """
    List users the caller has not swiped yet.

    Query parameters:
    - maxAge, minAge: age bounds, unbounded when omitted
    - genders: comma separated list, e.g. ``female,male``
    - sort: ``distance`` (default) or ``attractiveness``
    """
    try:
        filters = UserFilters.from_params(max_age, min_age, genders)
        sort_type = SortType.parse(sort)
    except ValueError as e:
        logger.error(f"Getting filters from query params failed: {e}")
        raise BadInputError(str(e)) from e

    users = await service.discover(
        GetUsersInput(user_id=user_from_request(request), location=location, sort_type=sort_type, filters=filters)
    )

    response = DiscoverResponse(
        results=[
            UserDetailsOut(
                id=u.id,
                name=u.name,
                gender=u.gender.value,
                age=u.age,
                distanceFromMe=u.distance_from_me,
            )
            for u in users
        ]
    )
    if settings.debug_enabled:
        logger.debug(f"Discover response: {response.model_dump_json()}")
    return response
