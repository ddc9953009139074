"""Login endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from apps.api.deps import caller_location, get_auth_service
from domain.auth import LoginInput
from domain.user import Location
from services import AuthService

router = APIRouter()


class LoginRequest(BaseModel):
    """Request to log in."""

    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    token: str


@router.post("/login")
async def login(
    body: LoginRequest,
    location: Location = Depends(caller_location),
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Log in with email and password.

    The caller's location is resolved from their IP and stored against the user.
    """
    token = await service.login(LoginInput(email=body.email, password=body.password, location=location))
    return LoginResponse(token=token)
