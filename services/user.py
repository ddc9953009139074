"""User creation and discovery."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool

from core.errors import BadInputError, InternalError, NoResultsError, NotFoundError
from core.metrics import discover_results, users_created_total
from core.security import hash_password
from domain.user import CreateUserInput, GetUsersInput, Location, User, UserDetails
from repositories.utils import violates_constraint

logger = logging.getLogger(__name__)

UNIQUE_EMAIL_CONSTRAINT = "ix_user_email"


class UserStore(Protocol):
    """Storage operations the user and auth services depend on."""

    async def create_user(self, data: CreateUserInput, password_hash: str) -> User: ...

    async def user_by_email(self, email: str) -> User: ...

    async def get_users(self, data: GetUsersInput) -> list[UserDetails]: ...

    async def update_user_location(self, user_id: int, location: Location) -> None: ...


class UserService:
    """Validates user input and coordinates creation and discovery."""

    def __init__(self, repository: UserStore) -> None:
        self.repository = repository

    async def create(self, data: CreateUserInput) -> User:
        """
        Create a new user.

        The password is validated, then stored as a bcrypt hash.

        Raises:
            BadInputError: If validation fails or the email is taken
            InternalError: On any storage failure
        """
        logger.debug(f"UserService create: email={data.email}, name={data.name}")

        try:
            data.validate()
        except ValueError as e:
            logger.error(f"Validating create user input failed: {e}")
            raise BadInputError(str(e)) from e

        password_hash = await run_in_threadpool(hash_password, data.password)

        try:
            user = await self.repository.create_user(data, password_hash)
        except IntegrityError as e:
            if violates_constraint(e, UNIQUE_EMAIL_CONSTRAINT):
                raise BadInputError("a user with this email already exists") from e
            logger.error(f"Creating user in database failed: {e}")
            raise InternalError("creating user") from e
        except Exception as e:
            logger.error(f"Creating user in database failed: {e}")
            raise InternalError("creating user") from e

        users_created_total.inc()
        logger.info(f"User created: id={user.id}")
        return user

    async def discover(self, data: GetUsersInput) -> list[UserDetails]:
        """
        Find users the caller has not swiped yet.

        Raises:
            BadInputError: If validation fails
            NotFoundError: If no user matched
            InternalError: On any storage failure
        """
        logger.debug(f"UserService discover: {data}")

        try:
            data.validate()
        except ValueError as e:
            logger.error(f"Validating get users input failed: {e}")
            raise BadInputError(str(e)) from e

        try:
            users = await self.repository.get_users(data)
        except NoResultsError as e:
            discover_results.observe(0)
            raise NotFoundError(str(e)) from e
        except Exception as e:
            logger.error(f"Getting users from database failed: {e}")
            raise InternalError("getting users") from e

        discover_results.observe(len(users))
        return users
