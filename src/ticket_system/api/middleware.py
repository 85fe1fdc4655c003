"""RFC 9457 problem-details error rendering for the HTTP API."""

from http import HTTPStatus
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.exceptions import (
    InvalidOperationError,
    NotFoundError,
    ReferentialIntegrityError,
    TicketSystemError,
    ValidationError,
)
from ..utils.logging_config import get_logger, log_exception

logger = get_logger("api")

PROBLEM_MEDIA_TYPE = "application/problem+json"

# Checked in order; ReferentialIntegrityError must precede its base class.
_DOMAIN_ERRORS = (
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (ReferentialIntegrityError, status.HTTP_409_CONFLICT, "Referential Integrity Violation"),
    (InvalidOperationError, status.HTTP_409_CONFLICT, "Invalid Operation"),
)


def _default_title(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "HTTP Error"


class ProblemDetailsException(HTTPException):
    """Raised by routers that need a specific title or extra problem members."""

    def __init__(
        self,
        status_code: int,
        title: str,
        detail: Optional[str] = None,
        type_uri: Optional[str] = None,
        instance: Optional[str] = None,
        **extra_fields,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.title = title
        self.type_uri = type_uri
        self.instance = instance
        self.extra_fields = extra_fields

    def to_response(self, request: Request) -> JSONResponse:
        return problem_response(
            self.status_code,
            self.title,
            detail=self.detail,
            type_uri=self.type_uri,
            instance=self.instance or str(request.url),
            **self.extra_fields,
        )


def problem_response(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    type_uri: Optional[str] = None,
    instance: Optional[str] = None,
    **extra_fields,
) -> JSONResponse:
    """Render a problem document; empty ``detail`` and ``instance`` are omitted."""
    body: Dict[str, Any] = {
        "type": type_uri or f"https://httpstatuses.com/{status_code}",
        "title": title,
        "status": status_code,
    }
    optional = {"detail": detail, "instance": instance}
    body.update({key: value for key, value in optional.items() if value})
    body.update(extra_fields)
    return JSONResponse(
        status_code=status_code, content=jsonable_encoder(body), media_type=PROBLEM_MEDIA_TYPE
    )


def _status_for(exc: TicketSystemError):
    for error_type, status_code, title in _DOMAIN_ERRORS:
        if isinstance(exc, error_type):
            return status_code, title
    return status.HTTP_400_BAD_REQUEST, _default_title(status.HTTP_400_BAD_REQUEST)


async def ticket_system_error_handler(request: Request, exc: TicketSystemError) -> JSONResponse:
    status_code, title = _status_for(exc)
    logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    extra = {"field": exc.field} if exc.field else {}
    return problem_response(
        status_code, title, detail=exc.message, instance=str(request.url), **extra
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ProblemDetailsException):
        return exc.to_response(request)
    return problem_response(
        exc.status_code,
        _default_title(exc.status_code),
        detail=exc.detail if isinstance(exc.detail, str) else None,
        instance=str(request.url),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return problem_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation Error",
        detail="Request validation failed",
        instance=str(request.url),
        errors=exc.errors(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TicketSystemError, ticket_system_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


class ProblemDetailsMiddleware(BaseHTTPMiddleware):
    """Last line: anything no handler claimed becomes a logged 500 problem."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            log_exception("api", exc, {"method": request.method, "path": request.url.path})
            return problem_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal Server Error",
                detail="An unexpected error occurred",
                instance=str(request.url),
            )
