"""JWT authentication and authorization for the API."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Depends, Request

from core.config import settings
from core.errors import InternalError, UnauthorizedError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
USER_ID_CLAIM = "userID"

# Request state attribute holding the authenticated user id
USER_STATE_KEY = "auth_user_id"


class Authorizer:
    """
    Mints and validates HS256 JWTs.

    A token carries ``userID`` plus the registered ``iat``, ``nbf``, ``exp``,
    ``iss`` and ``aud`` claims. Claims are checked against the current
    configuration, so a shortened duration also expires older tokens.
    """

    def __init__(self, secret: str, domain_name: str, duration: timedelta) -> None:
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        self.secret = secret
        self.domain_name = domain_name
        self.duration = duration

    def mint(self, user_id: int, now: datetime | None = None) -> str:
        """Create a signed token for the given user."""
        issued_at = now or datetime.now(tz=timezone.utc)
        payload = {
            USER_ID_CLAIM: user_id,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + self.duration,
            "iss": self.domain_name,
            "aud": [self.domain_name],
        }
        try:
            return jwt.encode(payload, self.secret, algorithm=ALGORITHM)
        except (TypeError, ValueError) as e:
            raise InternalError(f"signing token: {e}") from e

    def authorize(self, token: str) -> int:
        """
        Verify a token and return the user id it was issued to.

        Raises:
            UnauthorizedError: If the signature or any claim is invalid
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                # Claims are validated below, in a fixed order
                options={
                    "verify_exp": False,
                    "verify_nbf": False,
                    "verify_iat": False,
                    "verify_aud": False,
                    "verify_iss": False,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise UnauthorizedError("token signature is invalid") from e
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected malformed token: {e}")
            raise UnauthorizedError("token is malformed") from e

        problem = self._validate_claims(claims)
        if problem:
            raise UnauthorizedError(f"token has invalid claims: {problem}")

        return int(claims[USER_ID_CLAIM])

    def _validate_claims(self, claims: dict[str, Any]) -> str | None:
        user_id = claims.get(USER_ID_CLAIM)
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id == 0:
            return "token has no user associated with it"

        now = datetime.now(tz=timezone.utc).timestamp()

        issued_at = claims.get("iat")
        if not isinstance(issued_at, (int, float)):
            return "token is missing the issued at claim"
        if issued_at + self.duration.total_seconds() < now:
            return "token is expired"

        expires_at = claims.get("exp")
        if isinstance(expires_at, (int, float)) and expires_at < now:
            return "token is expired"

        not_before = claims.get("nbf")
        if isinstance(not_before, (int, float)) and not_before > now:
            return "token is not valid yet"

        if claims.get("iss") != self.domain_name:
            return "token has invalid issuer"

        audience = claims.get("aud")
        if isinstance(audience, str):
            audience = [audience]
        if not isinstance(audience, list) or self.domain_name not in audience:
            return "token has invalid audience"

        return None


authorizer = Authorizer(
    secret=settings.jwt_secret,
    domain_name=settings.domain_name,
    duration=settings.jwt_duration,
)


def get_authorizer() -> Authorizer:
    """Dependency for getting the configured authorizer."""
    return authorizer


def user_on_request(request: Request, user_id: int) -> None:
    """Attach the authenticated user id to the request."""
    setattr(request.state, USER_STATE_KEY, user_id)


def user_from_request(request: Request) -> int:
    """
    Read the authenticated user id from the request.

    Raises:
        UnauthorizedError: If the request was never authenticated
    """
    user_id = getattr(request.state, USER_STATE_KEY, None)
    if user_id is None:
        raise UnauthorizedError("authenticated user not on request")
    return int(user_id)


async def bearer_auth(request: Request, auth: Authorizer = Depends(get_authorizer)) -> int:
    """
    Authenticate requests using an ``Authorization: Bearer <jwt>`` header.

    Returns:
        Authenticated user ID, also stored on the request state

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    header = request.headers.get("Authorization", "")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
        raise UnauthorizedError("no authorization provided")

    user_id = auth.authorize(parts[1])
    user_on_request(request, user_id)
    return user_id
