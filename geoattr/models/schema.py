from enum import Enum

from geoattr.errors import UnsupportedSchemaError


class DatabaseSchema(str, Enum):
    """Database types the resolver knows how to read.

    Values are the exact `database_type` tags reported in the database metadata.
    """

    country = "GeoIP2-Country"
    city = "GeoIP2-City"
    anonymous_ip = "GeoIP2-Anonymous-IP"
    connection_type = "GeoIP2-Connection-Type"
    domain = "GeoIP2-Domain"
    isp = "GeoIP2-ISP"


class Attribute(str, Enum):
    """Attribute tokens accepted by the extractors. Matching is case-sensitive."""

    COUNTRY_CODE = "COUNTRY_CODE"
    COUNTRY_NAME = "COUNTRY_NAME"
    SUBDIVISION_CODE = "SUBDIVISION_CODE"
    SUBDIVISION_NAME = "SUBDIVISION_NAME"
    CITY = "CITY"
    POSTAL_CODE = "POSTAL_CODE"
    LATITUDE = "LATITUDE"
    LONGITUDE = "LONGITUDE"
    ASN = "ASN"
    ASN_ORG = "ASN_ORG"
    ISP = "ISP"
    ORG = "ORG"
    IS_ANONYMOUS = "IS_ANONYMOUS"
    IS_ANONYMOUS_VPN = "IS_ANONYMOUS_VPN"
    IS_ISP = "IS_ISP"
    IS_PUBLIC_PROXY = "IS_PUBLIC_PROXY"
    IS_TOR_EXIT_NODE = "IS_TOR_EXIT_NODE"
    DOMAIN = "DOMAIN"
    CONNECTION = "CONNECTION"


_SCHEMAS_BY_TAG: dict[str, DatabaseSchema] = {schema.value: schema for schema in DatabaseSchema}


def route(database_type: str | None) -> DatabaseSchema:
    """Map a reader's database type tag to its schema.

    Exact match only: "geoip2-country" or "GeoLite2-City" are rejected.
    """
    if not isinstance(database_type, str) or database_type not in _SCHEMAS_BY_TAG:
        raise UnsupportedSchemaError(database_type)
    return _SCHEMAS_BY_TAG[database_type]
