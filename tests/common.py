import socket

from geoattr.errors import AddressNotFoundError, DatabaseOpenError
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

US = CountryInfo(iso_code="US", name="United States")

SAMPLE_RECORDS: dict[DatabaseSchema, GeoRecord] = {
    DatabaseSchema.country: CountryRecord(country=US),
    DatabaseSchema.city: CityRecord(
        country=US,
        subdivision=SubdivisionInfo(iso_code="CA", name="California"),
        city=CityInfo(name="Mountain View"),
        postal=PostalInfo(code="94035"),
        location=LocationInfo(latitude=37.386, longitude=-122.0838),
    ),
    DatabaseSchema.isp: IspRecord(
        autonomous_system_number=15169,
        autonomous_system_organization="GOOGLE",
        isp="Google",
        organization="Google LLC",
    ),
    DatabaseSchema.anonymous_ip: AnonymousIpRecord(is_anonymous=True, is_public_proxy=True),
    DatabaseSchema.domain: DomainRecord(domain="google.com"),
    DatabaseSchema.connection_type: ConnectionTypeRecord(connection_type="Corporate"),
}


class FakeReader(BaseGeoReader):
    """In-memory reader answering lookups from a fixed ip -> record table."""

    def __init__(self, database_type: str, records: dict[str, GeoRecord]) -> None:
        self._database_type = database_type
        self._records = records
        self.closed = False
        self.lookups: list[tuple[str, DatabaseSchema]] = []

    @property
    def database_type(self) -> str:
        return self._database_type

    def lookup(self, ip: str, schema: DatabaseSchema) -> GeoRecord:
        self.lookups.append((ip, schema))
        if ip not in self._records:
            raise AddressNotFoundError(f"The address {ip} is not in the database")
        return self._records[ip]

    def close(self) -> None:
        self.closed = True


class FakeReaderFactory:
    """Opens FakeReaders by path and remembers every reader it handed out."""

    def __init__(self, databases: dict[str, tuple[str, dict[str, GeoRecord]]]) -> None:
        self._databases = databases
        self.opened: list[FakeReader] = []

    def __call__(self, database_path: str) -> FakeReader:
        if database_path not in self._databases:
            raise DatabaseOpenError(f"Database file not found: {database_path}")
        database_type, records = self._databases[database_path]
        reader = FakeReader(database_type, records)
        self.opened.append(reader)
        return reader


def sample_databases() -> dict[str, tuple[str, dict[str, GeoRecord]]]:
    """One fake database per schema, e.g. "GeoIP2-City.mmdb", each knowing 8.8.8.8."""
    return {f"{schema.value}.mmdb": (schema.value, {"8.8.8.8": record}) for schema, record in SAMPLE_RECORDS.items()}


HOSTS: dict[str, tuple[socket.AddressFamily, str]] = {
    "localhost": (socket.AF_INET, "127.0.0.1"),
    "dns.google": (socket.AF_INET, "8.8.8.8"),
    "ipv6.google": (socket.AF_INET6, "2001:4860:4860::8888"),
}


def fake_getaddrinfo(host: str, port, *args, **kwargs) -> list[tuple]:
    """Stand-in for socket.getaddrinfo answering only from HOSTS."""
    if host not in HOSTS:
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    family, address = HOSTS[host]
    sockaddr = (address, 0) if family == socket.AF_INET else (address, 0, 0, 0)
    return [(family, socket.SOCK_STREAM, socket.IPPROTO_TCP, "", sockaddr)]
