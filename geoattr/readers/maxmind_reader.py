from collections.abc import Callable
from typing import Any

import geoip2.database
import geoip2.errors
import maxminddb

from geoattr.errors import AddressNotFoundError, DatabaseOpenError, InvalidAddressError
from geoattr.models.records import (
    AnonymousIpRecord,
    CityInfo,
    CityRecord,
    ConnectionTypeRecord,
    CountryInfo,
    CountryRecord,
    DomainRecord,
    GeoRecord,
    IspRecord,
    LocationInfo,
    PostalInfo,
    SubdivisionInfo,
)
from geoattr.models.schema import DatabaseSchema
from geoattr.readers.base import BaseGeoReader


class MaxMindReader(BaseGeoReader):
    """Reader for MaxMind GeoIP2 (.mmdb) databases backed by the geoip2 library.

    geoip2 models are mapped into our own record variants so the rest of the
    application does not depend on the third-party response classes. Record
    attributes geoip2 leaves as None stay None here.
    """

    def __init__(self, database_path: str, locales: list[str] | None = None) -> None:
        self._database_path = database_path
        try:
            self._reader = geoip2.database.Reader(database_path, locales=locales or ["en"])
        except FileNotFoundError as exc:
            raise DatabaseOpenError(f"Database file not found: {database_path}") from exc
        except (OSError, maxminddb.InvalidDatabaseError, ValueError) as exc:
            raise DatabaseOpenError(f"Unable to open database {database_path}: {exc}") from exc

    @property
    def database_type(self) -> str:
        return self._reader.metadata().database_type

    def lookup(self, ip: str, schema: DatabaseSchema) -> GeoRecord:
        """Query the database for the address literal `ip` using the geoip2 method matching `schema`."""
        method_name, normalize = _LOOKUPS[schema]
        try:
            response = getattr(self._reader, method_name)(ip)
        except geoip2.errors.AddressNotFoundError as exc:
            raise AddressNotFoundError(f"The address {ip} is not in the database {self._database_path}") from exc
        except ValueError as exc:
            raise InvalidAddressError(str(exc)) from exc
        except (geoip2.errors.GeoIP2Error, maxminddb.InvalidDatabaseError, TypeError) as exc:
            # geoip2 raises TypeError when the database does not hold the requested schema.
            raise DatabaseOpenError(f"Unable to read database {self._database_path}: {exc}") from exc

        return normalize(response)

    def close(self) -> None:
        self._reader.close()


def _country_info(response: Any) -> CountryInfo:
    return CountryInfo(iso_code=response.country.iso_code, name=response.country.name)


def _country(response: Any) -> CountryRecord:
    return CountryRecord(country=_country_info(response))


def _city(response: Any) -> CityRecord:
    subdivision = response.subdivisions.most_specific
    return CityRecord(
        country=_country_info(response),
        subdivision=SubdivisionInfo(iso_code=subdivision.iso_code, name=subdivision.name),
        city=CityInfo(name=response.city.name),
        postal=PostalInfo(code=response.postal.code),
        location=LocationInfo(latitude=response.location.latitude, longitude=response.location.longitude),
    )


def _isp(response: Any) -> IspRecord:
    return IspRecord(
        autonomous_system_number=response.autonomous_system_number,
        autonomous_system_organization=response.autonomous_system_organization,
        isp=response.isp,
        organization=response.organization,
    )


def _anonymous_ip(response: Any) -> AnonymousIpRecord:
    return AnonymousIpRecord(
        is_anonymous=response.is_anonymous,
        is_anonymous_vpn=response.is_anonymous_vpn,
        is_hosting_provider=response.is_hosting_provider,
        is_public_proxy=response.is_public_proxy,
        is_tor_exit_node=response.is_tor_exit_node,
    )


def _domain(response: Any) -> DomainRecord:
    return DomainRecord(domain=response.domain)


def _connection_type(response: Any) -> ConnectionTypeRecord:
    return ConnectionTypeRecord(connection_type=response.connection_type)


# geoip2.database.Reader method and normalizer for each schema.
_LOOKUPS: dict[DatabaseSchema, tuple[str, Callable[[Any], GeoRecord]]] = {
    DatabaseSchema.country: ("country", _country),
    DatabaseSchema.city: ("city", _city),
    DatabaseSchema.isp: ("isp", _isp),
    DatabaseSchema.anonymous_ip: ("anonymous_ip", _anonymous_ip),
    DatabaseSchema.domain: ("domain", _domain),
    DatabaseSchema.connection_type: ("connection_type", _connection_type),
}
