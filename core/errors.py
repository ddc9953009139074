"""Application errors.

Services raise one of the four ``AppError`` kinds below. The API layer maps
them to HTTP responses using ``status_code``; repositories only ever raise
infrastructure errors or ``NoResultsError``.
"""

from fastapi import status


class NoResultsError(Exception):
    """Raised by repositories when a query returned no rows."""

    def __init__(self, message: str = "no results found in database") -> None:
        super().__init__(message)


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class BadInputError(AppError):
    """Caller supplied data failed validation or broke a client-side constraint."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    """A valid query produced no rows where at least one was expected."""

    status_code = status.HTTP_404_NOT_FOUND


class InternalError(AppError):
    """Unexpected infrastructure failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def incorrect_credentials() -> UnauthorizedError:
    """Error for a failed login, identical for unknown email and wrong password."""
    return UnauthorizedError("incorrect credentials")
