import logging
import uuid

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class InvalidCredentials(Exception):
    """Unknown login, wrong password or no password set. Deliberately one type."""


class TokenInvalid(Exception):
    pass


class StoreUnavailable(Exception):
    """The database could not be reached or failed mid-query."""


class ConfigurationMissing(RuntimeError):
    pass


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(
    request: Request,
    *,
    code: str,
    message: str,
    status_code: int,
    details=None,
) -> JSONResponse:
    payload = {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "request_id": get_request_id(request),
            "details": details,
        },
    }
    return JSONResponse(status_code=status_code, content=payload)


async def invalid_credentials_handler(request: Request, exc: InvalidCredentials):
    return error_response(
        request,
        code="invalid_credentials",
        message="Invalid credentials",
        status_code=401,
    )


async def token_invalid_handler(request: Request, exc: TokenInvalid):
    return error_response(
        request,
        code="invalid_token",
        message=str(exc) or "Invalid token",
        status_code=401,
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Store unavailable | request_id=%s | %s", get_request_id(request), exc)
    return error_response(
        request,
        code="store_unavailable",
        message="Database unavailable",
        status_code=503,
    )


async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    logger.error("Configuration missing | request_id=%s | %s", get_request_id(request), exc)
    return error_response(
        request,
        code="configuration_error",
        message="Server configuration error",
        status_code=500,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return error_response(
        request,
        code="http_error",
        message=str(exc.detail),
        status_code=exc.status_code,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(
        request,
        code="validation_error",
        message="Request validation failed",
        status_code=422,
        details=jsonable_errors(exc),
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception instances that JSONResponse cannot encode
    out = []
    for err in exc.errors():
        item = {k: v for k, v in err.items() if k != "ctx"}
        out.append(item)
    return out


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception | request_id=%s", get_request_id(request), exc_info=exc)
    return error_response(
        request,
        code="internal_error",
        message="Internal server error",
        status_code=500,
    )


async def request_id_middleware(request: Request, call_next):
    incoming = request.headers.get("x-request-id")
    request.state.request_id = incoming or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["x-request-id"] = request.state.request_id
    return response
