"""
Failure kinds and the single top-level translator that maps them to HTTP.

- ``NotFoundError``      — a referenced listing/article/comment id does not
  exist (404).  Raised explicitly by the services, including the parent
  existence check that runs before a comment is created.
- ``InvalidInputError``  — the request is malformed (400).  Request-body
  validation failures from Pydantic are reported the same way.
- anything else          — logged with traceback and reported as a
  generic 500.  Nothing is retried.
"""
import logging
from typing import Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for failures that carry their own HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(APIError):
    def __init__(self, resource: str, resource_id: Union[int, str]):
        super().__init__(
            message=f"{resource} not found: {resource_id}",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class InvalidInputError(APIError):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


def _error_body(message: str, kind: str, details=None) -> dict:
    body = {"error": message, "type": kind}
    if details:
        body["details"] = details
    return body


def setup_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on *app*."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        log = logger.warning if exc.status_code < 500 else logger.error
        log("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        kind = {404: "NotFound", 400: "InvalidInput"}.get(exc.status_code, "Unexpected")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, kind, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        errors = [
            {
                "loc": list(error.get("loc", [])),
                "msg": str(error.get("msg", "")),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Request validation failed", "InvalidInput", errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown routes and methods.
        kind = "NotFound" if exc.status_code == 404 else "InvalidInput"
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), kind),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(NoResultFound)
    async def no_result_handler(request: Request, exc: NoResultFound):
        # The datastore's own "record to update/delete does not exist" signal.
        logger.warning("No row found for %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body("Resource not found", "NotFound"),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unexpected error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("An unexpected error occurred", "Unexpected"),
        )
