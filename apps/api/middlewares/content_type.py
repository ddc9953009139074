"""Content type enforcement for request bodies."""

from collections.abc import Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from apps.api.errors import error_response

ALLOWED_CONTENT_TYPE = "application/json"


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Reject requests carrying a body that is not JSON."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        has_body = request.headers.get("content-length", "0") != "0" or "transfer-encoding" in request.headers
        if has_body:
            content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
            if content_type != ALLOWED_CONTENT_TYPE:
                return error_response(
                    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                    f"content type must be {ALLOWED_CONTENT_TYPE}",
                )

        return await call_next(request)
