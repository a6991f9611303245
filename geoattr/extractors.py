"""Per-schema attribute projections.

Each database schema has a mapping from attribute token to a projection over
that schema's record. A token missing from the mapping is not defined for the
schema, even when another schema accepts it.
"""

from collections.abc import Callable, Mapping
from typing import Any

from geoattr.errors import FieldNotPresentError, UnsupportedAttributeError
from geoattr.models.records import (
    AnonymousIpRecord,
    CityRecord,
    ConnectionTypeRecord,
    CountryRecord,
    DomainRecord,
    GeoRecord,
    IspRecord,
)
from geoattr.models.schema import Attribute, DatabaseSchema

Projection = Callable[[Any], Any]

COUNTRY_ATTRIBUTES: Mapping[str, Callable[[CountryRecord], Any]] = {
    Attribute.COUNTRY_CODE: lambda r: r.country.iso_code,
    Attribute.COUNTRY_NAME: lambda r: r.country.name,
}

CITY_ATTRIBUTES: Mapping[str, Callable[[CityRecord], Any]] = {
    **COUNTRY_ATTRIBUTES,
    Attribute.SUBDIVISION_CODE: lambda r: r.subdivision.iso_code,
    Attribute.SUBDIVISION_NAME: lambda r: r.subdivision.name,
    Attribute.CITY: lambda r: r.city.name,
    Attribute.POSTAL_CODE: lambda r: r.postal.code,
    Attribute.LATITUDE: lambda r: r.location.latitude,
    Attribute.LONGITUDE: lambda r: r.location.longitude,
}

ISP_ATTRIBUTES: Mapping[str, Callable[[IspRecord], Any]] = {
    Attribute.ASN: lambda r: r.autonomous_system_number,
    Attribute.ASN_ORG: lambda r: r.autonomous_system_organization,
    Attribute.ISP: lambda r: r.isp,
    Attribute.ORG: lambda r: r.organization,
}

ANONYMOUS_IP_ATTRIBUTES: Mapping[str, Callable[[AnonymousIpRecord], Any]] = {
    Attribute.IS_ANONYMOUS: lambda r: r.is_anonymous,
    Attribute.IS_ANONYMOUS_VPN: lambda r: r.is_anonymous_vpn,
    # IS_ISP reports the hosting provider flag.
    Attribute.IS_ISP: lambda r: r.is_hosting_provider,
    Attribute.IS_PUBLIC_PROXY: lambda r: r.is_public_proxy,
    Attribute.IS_TOR_EXIT_NODE: lambda r: r.is_tor_exit_node,
}

DOMAIN_ATTRIBUTES: Mapping[str, Callable[[DomainRecord], Any]] = {
    Attribute.DOMAIN: lambda r: r.domain,
}

CONNECTION_TYPE_ATTRIBUTES: Mapping[str, Callable[[ConnectionTypeRecord], Any]] = {
    Attribute.CONNECTION: lambda r: r.connection_type,
}

EXTRACTORS: dict[DatabaseSchema, Mapping[str, Projection]] = {
    DatabaseSchema.country: COUNTRY_ATTRIBUTES,
    DatabaseSchema.city: CITY_ATTRIBUTES,
    DatabaseSchema.isp: ISP_ATTRIBUTES,
    DatabaseSchema.anonymous_ip: ANONYMOUS_IP_ATTRIBUTES,
    DatabaseSchema.domain: DOMAIN_ATTRIBUTES,
    DatabaseSchema.connection_type: CONNECTION_TYPE_ATTRIBUTES,
}


def supported_attributes(schema: DatabaseSchema) -> list[str]:
    """Attribute tokens defined for a schema, in declaration order."""
    return [token.value for token in EXTRACTORS[schema]]


def to_string(value: Any) -> str:
    """Render a projected value the way callers receive it.

    Booleans are exactly "true"/"false"; numbers use their default decimal form.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def extract(record: GeoRecord, attribute: str, *, strict: bool = False) -> str:
    """Project `attribute` out of `record` and normalize it to a string.

    Absent values come back as "" unless `strict` is set, in which case
    FieldNotPresentError is raised.
    """
    schema = record.database_schema
    projections = EXTRACTORS[schema]
    try:
        projection = projections.get(Attribute(attribute))
    except ValueError:
        projection = None
    if projection is None:
        raise UnsupportedAttributeError(str(attribute), schema.value)

    value = projection(record)
    if value is None:
        if strict:
            raise FieldNotPresentError(attribute, schema.value)
        return ""
    return to_string(value)
