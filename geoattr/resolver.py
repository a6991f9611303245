"""Resolve a single attribute of an IP address from a GeoIP2 database.

A call opens the database (or borrows a cached reader), parses the address,
resolving host names, routes the declared database type to a schema, looks
the address up and projects the attribute into a string. Identical inputs
against an unchanged database file always produce identical output. Failures are raised as `GeoAttributeError`
subclasses and never retried or replaced with a default value.
"""

import os
from collections.abc import Callable, Sequence
from typing import NamedTuple

from pydantic import ValidationError

from geoattr.config import Settings
from geoattr.errors import ArityError, DatabaseOpenError
from geoattr.extractors import extract
from geoattr.logger import logger
from geoattr.models.request_models import LookupRequest
from geoattr.models.schema import route
from geoattr.readers.address import resolve_address
from geoattr.readers.base import BaseGeoReader
from geoattr.readers.cache import ReaderCache
from geoattr.readers.maxmind_reader import MaxMindReader

ARGUMENT_COUNT = 3


class LookupResult(NamedTuple):
    database_type: str
    value: str


class GeoAttributeResolver:
    """Evaluates lookups against geo databases.

    Holds configuration only: which reader to open, whether readers are shared
    through a `ReaderCache`, and how absent fields are reported. Instances can
    be called from many threads at once.
    """

    def __init__(
        self,
        reader_factory: Callable[[str], BaseGeoReader] = MaxMindReader,
        *,
        cache: ReaderCache | None = None,
        strict: bool = False,
        database_dir: str | None = None,
    ) -> None:
        self._reader_factory = reader_factory
        self._cache = cache
        self._strict = strict
        self._database_dir = database_dir

    @classmethod
    def from_settings(
        cls, settings: Settings, reader_factory: Callable[[str], BaseGeoReader] = MaxMindReader
    ) -> "GeoAttributeResolver":
        cache = None
        if settings.reader_cache:
            cache = ReaderCache(reader_factory, max_readers=settings.reader_cache_size)
        return cls(
            reader_factory,
            cache=cache,
            strict=settings.strict_fields,
            database_dir=settings.database_dir,
        )

    def resolve(self, request: LookupRequest) -> LookupResult:
        database_path = self._database_path(request.database)
        logger.debug(
            f"Resolving attribute ip={request.ip} attribute={request.attribute} database={database_path}"
        )

        if self._cache is not None:
            with self._cache.borrow(database_path) as reader:
                return self._resolve_with(reader, request)

        with self._reader_factory(database_path) as reader:
            return self._resolve_with(reader, request)

    def resolve_attribute(self, ip: str, attribute: str, database: str) -> str:
        """Return `attribute` of `ip` from the database at `database` as a string."""
        return self.resolve(LookupRequest(ip=ip, attribute=attribute, database=database)).value

    def evaluate(self, arguments: Sequence[str | None]) -> str:
        """Host-style entry point taking the raw (ip, attribute, database) arguments.

        Rejects anything but exactly three non-null string arguments with ArityError.
        """
        if len(arguments) != ARGUMENT_COUNT:
            raise ArityError(f"Expected {ARGUMENT_COUNT} arguments (ip, attribute, database), {len(arguments)} found.")
        for position, argument in enumerate(arguments, start=1):
            if argument is None:
                raise ArityError(f"Argument {position} is null.")

        ip, attribute, database = arguments
        try:
            request = LookupRequest(ip=ip, attribute=attribute, database=database)
        except ValidationError as exc:
            raise ArityError(f"Arguments must be strings: {exc.error_count()} invalid.") from exc
        return self.resolve(request).value

    def close(self) -> None:
        """Close any cached readers. Per-call readers are already closed."""
        if self._cache is not None:
            self._cache.clear()

    def _resolve_with(self, reader: BaseGeoReader, request: LookupRequest) -> LookupResult:
        database_type = reader.database_type
        address = resolve_address(request.ip)
        schema = route(database_type)
        record = reader.lookup(address, schema)
        value = extract(record, request.attribute, strict=self._strict)
        return LookupResult(database_type=database_type, value=value)

    def _database_path(self, database: str) -> str:
        """Place `database` under `database_dir` when one is configured; paths escaping it are rejected."""
        if not self._database_dir:
            return database
        base = os.path.realpath(self._database_dir)
        path = os.path.realpath(os.path.join(base, database))
        if os.path.commonpath([base, path]) != base:
            raise DatabaseOpenError(f"Database {database} is outside the database directory")
        return path


# Opens a fresh reader per call, with no shared state between calls.
_default_resolver = GeoAttributeResolver()


def resolve_attribute(ip: str, attribute: str, database: str) -> str:
    """Resolve `attribute` of `ip` using the database file at `database`.

    Usage:
        >>> resolve_attribute("8.8.8.8", "COUNTRY_CODE", "./GeoIP2-Country.mmdb")
        'US'
    """
    return _default_resolver.resolve_attribute(ip, attribute, database)
