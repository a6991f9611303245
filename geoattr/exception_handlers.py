from http import HTTPStatus

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from geoattr.errors import (
    AddressNotFoundError,
    ArityError,
    DatabaseOpenError,
    FieldNotPresentError,
    GeoAttributeError,
    InvalidAddressError,
    UnsupportedAttributeError,
    UnsupportedSchemaError,
)
from geoattr.logger import logger
from geoattr.models.response_models import ErrorDetail

# Checked in order; the first matching class wins.
ERROR_MAP: list[tuple[type[GeoAttributeError], int, str]] = [
    (ArityError, HTTPStatus.BAD_REQUEST, "invalid_arguments"),
    (InvalidAddressError, HTTPStatus.BAD_REQUEST, "invalid_ip"),
    (UnsupportedAttributeError, HTTPStatus.BAD_REQUEST, "unsupported_attribute"),
    (AddressNotFoundError, HTTPStatus.NOT_FOUND, "ip_not_found"),
    (FieldNotPresentError, HTTPStatus.NOT_FOUND, "field_not_present"),
    (DatabaseOpenError, HTTPStatus.UNPROCESSABLE_ENTITY, "database_error"),
    (UnsupportedSchemaError, HTTPStatus.UNPROCESSABLE_ENTITY, "unsupported_schema"),
]


def describe_error(exc: GeoAttributeError) -> tuple[int, ErrorDetail]:
    """Map a lookup error to its HTTP status and outward-facing error detail."""
    for error_cls, status_code, code in ERROR_MAP:
        if isinstance(exc, error_cls):
            return status_code, ErrorDetail(code=code, message=str(exc))
    return HTTPStatus.BAD_REQUEST, ErrorDetail(code="lookup_error", message=str(exc))


def error_response(status_code: int, detail: ErrorDetail) -> JSONResponse:
    """Every error leaves the service as {"detail": {"code": ..., "message": ...}}."""
    return JSONResponse(status_code=status_code, content={"detail": detail.model_dump()})


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """Report missing or malformed request parameters by name."""
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error.get("loc")})
    logger.info(f"Invalid request path={request.url.path} method={request.method} fields={fields}")
    message = "Invalid request parameters"
    if fields:
        message = f"{message}: {', '.join(fields)}"
    return error_response(HTTPStatus.BAD_REQUEST, ErrorDetail(code="invalid_request", message=message))


async def geo_attribute_exception_handler(request: Request, exc: GeoAttributeError) -> JSONResponse:
    """Turn lookup errors that escape a route into a structured error response."""
    status_code, detail = describe_error(exc)
    logger.info(
        f"Lookup failed path={request.url.path} method={request.method} code={detail.code} error={exc}"
    )
    return error_response(status_code, detail)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures with a traceback and hide their details from the caller."""
    logger.exception(f"Unexpected error during lookup path={request.url.path} method={request.method}")
    return error_response(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        ErrorDetail(code="internal_error", message="An unexpected error occurred while resolving the attribute."),
    )
