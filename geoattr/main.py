from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from geoattr.config import Settings
from geoattr.errors import GeoAttributeError
from geoattr.exception_handlers import (
    describe_error,
    geo_attribute_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from geoattr.extractors import supported_attributes
from geoattr.logger import logger
from geoattr.models.request_models import LookupRequest
from geoattr.models.response_models import (
    AttributeResponse,
    BatchLookupRequest,
    BatchLookupResponse,
    BatchRowResult,
    HealthResponse,
    SchemaAttributesResponse,
)
from geoattr.models.schema import DatabaseSchema
from geoattr.resolver import GeoAttributeResolver


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_resolver() -> GeoAttributeResolver:
    """Dependency providing the process-wide resolver, configured from the environment."""
    settings = get_settings()
    logger.info(
        "Configured resolver "
        f"reader_cache={settings.reader_cache} strict_fields={settings.strict_fields} "
        f"database_dir={settings.database_dir}"
    )
    return GeoAttributeResolver.from_settings(settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Started GeoIP Attribute Service")
    yield
    if get_resolver.cache_info().currsize:
        get_resolver().close()


app = FastAPI(
    title="GeoIP Attribute Service",
    version="0.1.0",
    description="Resolves a single attribute of an IP address from a GeoIP2 database file.",
    lifespan=lifespan,
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(GeoAttributeError, geo_attribute_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/geoip/schemas",
    response_model=SchemaAttributesResponse,
    tags=["geoip"],
    summary="List the attributes supported for each database type.",
)
async def list_schemas() -> SchemaAttributesResponse:
    return SchemaAttributesResponse(schemas={schema.value: supported_attributes(schema) for schema in DatabaseSchema})


@app.get(
    "/v1/geoip/attribute",
    response_model=AttributeResponse,
    status_code=status.HTTP_200_OK,
    tags=["geoip"],
    summary="Look up one attribute of an IP address.",
)
def lookup_attribute(
    query: Annotated[LookupRequest, Depends()],
    resolver: Annotated[GeoAttributeResolver, Depends(get_resolver)],
) -> AttributeResponse:
    """Resolve `attribute` for `ip` from the database file at `database`.

    Declared as a plain function so database reads run in the threadpool.
    Lookup errors are rendered by `geo_attribute_exception_handler`.
    """
    logger.info(f"Performing attribute lookup ip={query.ip} attribute={query.attribute} database={query.database}")
    result = resolver.resolve(query)
    return AttributeResponse(
        ip=query.ip,
        attribute=query.attribute,
        database=query.database,
        database_type=result.database_type,
        value=result.value,
    )


@app.post(
    "/v1/geoip/attribute/batch",
    response_model=BatchLookupResponse,
    status_code=status.HTTP_200_OK,
    tags=["geoip"],
    summary="Look up attributes for many rows of (ip, attribute, database).",
)
def lookup_attribute_batch(
    body: BatchLookupRequest,
    resolver: Annotated[GeoAttributeResolver, Depends(get_resolver)],
) -> BatchLookupResponse:
    """Evaluate each row independently.

    A failed row carries an error detail and leaves the other rows untouched;
    the caller decides whether to drop, null or abort on failed rows.
    """
    results: list[BatchRowResult] = []
    failed = 0
    for row in body.rows:
        try:
            results.append(BatchRowResult(value=resolver.evaluate(row)))
        except GeoAttributeError as exc:
            failed += 1
            _, detail = describe_error(exc)
            results.append(BatchRowResult(error=detail))
    logger.info(f"Performed batch lookup rows={len(body.rows)} failed={failed}")
    return BatchLookupResponse(results=results)
