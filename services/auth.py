"""Login."""

import logging

from starlette.concurrency import run_in_threadpool

from core.auth import Authorizer
from core.errors import AppError, BadInputError, InternalError, NoResultsError, incorrect_credentials
from core.metrics import logins_total
from core.security import burn_password_check, verify_password
from domain.auth import LoginInput
from services.user import UserStore

logger = logging.getLogger(__name__)


class AuthService:
    """Checks credentials and issues tokens."""

    def __init__(self, repository: UserStore, authorizer: Authorizer) -> None:
        self.repository = repository
        self.authorizer = authorizer

    async def login(self, data: LoginInput) -> str:
        """
        Log a user in and return a signed JWT.

        An unknown email and a wrong password fail the same way. On success the
        user's stored location is replaced with the login location.

        Raises:
            BadInputError: If the email or password is missing
            UnauthorizedError: If the credentials are incorrect
            InternalError: On any storage failure
        """
        logger.debug(f"AuthService login: email={data.email}")

        try:
            data.validate()
        except ValueError as e:
            logger.error(f"Validating login input failed: {e}")
            raise BadInputError(str(e)) from e

        try:
            user = await self.repository.user_by_email(data.email)
        except NoResultsError:
            await run_in_threadpool(burn_password_check, data.password)
            logins_total.labels(status="rejected").inc()
            raise incorrect_credentials() from None
        except Exception as e:
            logger.error(f"Getting user from database failed: {e}")
            raise InternalError("getting user") from e

        if not await run_in_threadpool(verify_password, data.password, user.password):
            logins_total.labels(status="rejected").inc()
            raise incorrect_credentials()

        try:
            await self.repository.update_user_location(user.id, data.location)
        except Exception as e:
            logger.error(f"Updating user location failed: {e}")
            raise InternalError("updating user location") from e

        try:
            token = self.authorizer.mint(user.id)
        except AppError:
            logger.error(f"Minting token failed: user_id={user.id}")
            raise

        logins_total.labels(status="accepted").inc()
        return token
