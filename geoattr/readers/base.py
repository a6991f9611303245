from abc import ABC, abstractmethod

from geoattr.models.records import GeoRecord
from geoattr.models.schema import DatabaseSchema


class BaseGeoReader(ABC):
    """Abstract base for geo database readers.

    Concrete implementations (e.g. MaxMind mmdb files) open one database,
    report its declared type and map lookups into the normalized record
    variants in `geoattr.models.records`.
    """

    @property
    @abstractmethod
    def database_type(self) -> str:
        """The database type tag declared in the database metadata."""
        raise NotImplementedError

    @abstractmethod
    def lookup(self, ip: str, schema: DatabaseSchema) -> GeoRecord:
        """Look up the address literal `ip` and return the record shape of `schema`."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the underlying database handle."""
        raise NotImplementedError

    def __enter__(self) -> "BaseGeoReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
