"""User endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from apps.api.deps import get_user_service
from domain.user import CreateUserInput, Location, User
from services import UserService

router = APIRouter()


class LocationIn(BaseModel):
    """Geographic coordinates."""

    latitude: float = 0.0
    longitude: float = 0.0


class CreateUserRequest(BaseModel):
    """Request to create a user."""

    email: str = ""
    password: str = ""
    name: str = ""
    gender: str = ""
    age: int = 0
    location: LocationIn = Field(default_factory=LocationIn)


class UserOut(BaseModel):
    """A stored user. The password hash is never returned."""

    id: int
    email: str
    name: str
    gender: str
    age: int
    location: LocationIn

    @classmethod
    def from_domain(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            gender=user.gender.value,
            age=user.age,
            location=LocationIn(latitude=user.location.lat, longitude=user.location.lon),
        )


class UserResponse(BaseModel):
    result: UserOut


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_user(body: CreateUserRequest, service: UserService = Depends(get_user_service)) -> UserResponse:
    """Create a user."""
    user = await service.create(
        CreateUserInput(
            email=body.email,
            password=body.password,
            name=body.name,
            gender=body.gender,
            age=body.age,
            location=Location(lon=body.location.longitude, lat=body.location.latitude),
        )
    )
    return UserResponse(result=UserOut.from_domain(user))
