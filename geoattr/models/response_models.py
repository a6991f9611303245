from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class AttributeResponse(BaseModel):
    """Response model for a single attribute lookup."""

    ip: str
    attribute: str
    database: str
    database_type: str
    value: str


class ErrorDetail(BaseModel):
    code: str
    message: str


class BatchLookupRequest(BaseModel):
    """Rows of (ip, attribute, database) arguments, evaluated independently."""

    rows: list[list[str | None]] = Field(
        description="Each row holds exactly three values: ip, attribute and database path.",
        examples=[[["8.8.8.8", "COUNTRY_CODE", "./GeoIP2-Country.mmdb"]]],
    )


class BatchRowResult(BaseModel):
    """Either `value` or `error` is set for each row."""

    value: str | None = None
    error: ErrorDetail | None = None


class BatchLookupResponse(BaseModel):
    results: list[BatchRowResult]


class SchemaAttributesResponse(BaseModel):
    """Attribute tokens accepted for each supported database type."""

    schemas: dict[str, list[str]]
