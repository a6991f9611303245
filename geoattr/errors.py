class GeoAttributeError(Exception):
    """Base error for a failed attribute lookup."""


class ArityError(GeoAttributeError):
    """Raised when a call does not receive exactly three non-null arguments."""


class DatabaseOpenError(GeoAttributeError):
    """Raised when the database file cannot be opened or read."""


class InvalidAddressError(GeoAttributeError):
    """Raised when the supplied IP address is not a valid IPv4 or IPv6 literal."""


class AddressNotFoundError(GeoAttributeError):
    """Raised when the address has no entry in the database."""


class UnsupportedSchemaError(GeoAttributeError):
    """Raised when the database type tag does not match any known schema."""

    def __init__(self, database_type: str | None) -> None:
        self.database_type = database_type
        super().__init__(f"Unknown database type {database_type}")


class UnsupportedAttributeError(GeoAttributeError):
    """Raised when the attribute is not defined for the resolved schema."""

    def __init__(self, attribute: str, database_type: str) -> None:
        self.attribute = attribute
        self.database_type = database_type
        super().__init__(f"Unable to get {attribute} for database type {database_type}")


class FieldNotPresentError(GeoAttributeError):
    """Raised in strict mode when the database has no value for the attribute."""

    def __init__(self, attribute: str, database_type: str) -> None:
        self.attribute = attribute
        self.database_type = database_type
        super().__init__(f"No value for {attribute} in database type {database_type}")
