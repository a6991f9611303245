from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict

from geoattr.models.schema import DatabaseSchema


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class CountryInfo(_Record):
    iso_code: str | None = None
    name: str | None = None


class SubdivisionInfo(_Record):
    iso_code: str | None = None
    name: str | None = None


class CityInfo(_Record):
    name: str | None = None


class PostalInfo(_Record):
    code: str | None = None


class LocationInfo(_Record):
    latitude: float | None = None
    longitude: float | None = None


class CountryRecord(_Record):
    """Response of a Country database lookup."""

    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.country

    country: CountryInfo = CountryInfo()


class CityRecord(CountryRecord):
    """Response of a City database lookup.

    `subdivision` holds the most specific subdivision reported for the address.
    Every nested field may be None when the database has no value for it.
    """

    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.city

    subdivision: SubdivisionInfo = SubdivisionInfo()
    city: CityInfo = CityInfo()
    postal: PostalInfo = PostalInfo()
    location: LocationInfo = LocationInfo()


class IspRecord(_Record):
    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.isp

    autonomous_system_number: int | None = None
    autonomous_system_organization: str | None = None
    isp: str | None = None
    organization: str | None = None


class AnonymousIpRecord(_Record):
    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.anonymous_ip

    is_anonymous: bool = False
    is_anonymous_vpn: bool = False
    is_hosting_provider: bool = False
    is_public_proxy: bool = False
    is_tor_exit_node: bool = False


class DomainRecord(_Record):
    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.domain

    domain: str | None = None


class ConnectionTypeRecord(_Record):
    """Response of a Connection-Type lookup, e.g. "Cable/DSL" or "Cellular"."""

    database_schema: ClassVar[DatabaseSchema] = DatabaseSchema.connection_type

    connection_type: str | None = None


GeoRecord = Union[CountryRecord, CityRecord, IspRecord, AnonymousIpRecord, DomainRecord, ConnectionTypeRecord]
