"""User persistence and the discover query."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NoResultsError
from domain.user import CreateUserInput, Gender, GetUsersInput, Location, SortType, User, UserDetails, UserFilters
from models.swipe import Swipe
from models.user import User as UserModel

logger = logging.getLogger(__name__)

# Upper bound on discover results, there is no pagination
DISCOVER_LIMIT = 100

METRES_PER_KILOMETRE = 1000.0


def _gender(value: str, user_id: int) -> Gender:
    gender = Gender.parse(value)
    if gender is Gender.UNDEFINED:
        logger.warning(f"Unsupported gender retrieved from database: user_id={user_id}, gender={value}")
    return gender


def _to_domain(row: UserModel) -> User:
    return User(
        id=row.id,
        email=row.email,
        password=row.password,
        name=row.name,
        gender=_gender(row.gender, row.id),
        age=row.age,
        location=row.location,
    )


class UserRepository:
    """Reads and writes rows of the user table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_user(self, data: CreateUserInput, password_hash: str) -> User:
        """
        Insert a new user.

        Args:
            data: Validated user details
            password_hash: bcrypt hash stored in place of the plain password

        Raises:
            IntegrityError: If the email is already registered
        """
        user = UserModel(
            email=data.email,
            password=password_hash,
            name=data.name,
            gender=Gender.parse(data.gender).value,
            age=data.age,
            location=data.location,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        return _to_domain(user)

    async def user_by_email(self, email: str) -> User:
        """Get a user by email, raising NoResultsError when none exists."""
        result = await self.session.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            raise NoResultsError()
        return _to_domain(user)

    async def update_user_location(self, user_id: int, location: Location) -> None:
        await self.session.execute(update(UserModel).where(UserModel.id == user_id).values(location=location))
        await self.session.commit()

    async def get_users(self, data: GetUsersInput) -> list[UserDetails]:
        """
        Get the users the caller may still swipe on.

        Excludes the caller and every user they have already swiped, applies the
        filters and orders by distance or attractiveness. Distances are geodesic
        and reported in kilometres.

        Raises:
            NoResultsError: If no user matched
        """
        origin = func.ST_GeogFromText(data.location.to_wkt())
        distance = (func.ST_Distance(UserModel.location, origin) / METRES_PER_KILOMETRE).label("distance")

        already_swiped = select(Swipe.swiped_user_id).where(Swipe.user_id == data.user_id)

        query = select(UserModel.id, UserModel.name, UserModel.gender, UserModel.age, distance).where(
            UserModel.id != data.user_id,
            UserModel.id.not_in(already_swiped),
        )
        query = _apply_filters(query, data.filters)

        if data.sort_type is SortType.ATTRACTIVENESS:
            # Number of users who liked the candidate
            likes = (
                select(func.count(Swipe.id))
                .where(Swipe.swiped_user_id == UserModel.id, Swipe.preference.is_(True))
                .correlate(UserModel)
                .scalar_subquery()
            )
            query = query.order_by(likes.desc(), distance.asc(), UserModel.id.asc())
        else:
            query = query.order_by(distance.asc(), UserModel.id.asc())

        result = await self.session.execute(query.limit(DISCOVER_LIMIT))
        users = [
            UserDetails(
                id=row.id,
                name=row.name,
                gender=_gender(row.gender, row.id),
                age=row.age,
                distance_from_me=float(row.distance),
            )
            for row in result.all()
        ]

        if not users:
            raise NoResultsError()

        return users


def _apply_filters(query, filters: UserFilters | None):  # type: ignore[no-untyped-def]
    if filters is None:
        return query

    if filters.min_age != 0:
        query = query.where(UserModel.age >= filters.min_age)

    if filters.max_age != 0:
        query = query.where(UserModel.age <= filters.max_age)

    if filters.genders:
        query = query.where(UserModel.gender.in_([g.value for g in filters.genders]))

    return query
