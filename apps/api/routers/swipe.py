"""Swipe endpoint."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from apps.api.deps import get_match_service
from core.auth import user_from_request
from core.config import settings
from domain.swipe import CreateSwipeInput
from services import MatchService

router = APIRouter()
logger = logging.getLogger(__name__)


class SwipeRequest(BaseModel):
    """Request to swipe on a user."""

    userID: int = 0
    preference: bool = False


class MatchOut(BaseModel):
    """Swipe outcome. ``matchID`` is omitted when there was no match."""

    matched: bool
    matchID: int | None = None


class SwipeResponse(BaseModel):
    result: MatchOut


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SwipeResponse)
async def swipe(
    request: Request,
    body: SwipeRequest,
    service: MatchService = Depends(get_match_service),
) -> JSONResponse:
    """
    Like or pass on another user.

    When both users have liked each other the response carries the match id.
    """
    match = await service.swipe(
        CreateSwipeInput(user_id=user_from_request(request), swiped_user_id=body.userID, preference=body.preference)
    )

    result = MatchOut(matched=match.matched, matchID=match.id if match.matched else None)
    content = SwipeResponse(result=result).model_dump(exclude_none=True)
    if settings.debug_enabled:
        logger.debug(f"Swipe response: {content}")
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=content)
