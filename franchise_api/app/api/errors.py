"""
Error responses for the API.

Every error leaves the API as a JSON object ``{"message": ..., "error": ...}``;
``error`` carries the underlying detail and is omitted when there is
none (for example on 404).  Endpoints raise ``APIError`` and the
handlers below, registered by ``create_app``, render it.  Request
bodies that cannot be parsed become 400 responses and anything else
that escapes an endpoint becomes a logged 500.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """HTTP error with a user facing message and an optional detail."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.error = error

    def to_content(self) -> dict:
        content = {"message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request body", "error": details},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "error": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
