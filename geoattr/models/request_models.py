from pydantic import BaseModel, ConfigDict, Field, field_validator


class LookupRequest(BaseModel):
    """One attribute lookup: which IP, which attribute, which database file.

    `attribute` is kept verbatim since attribute tokens are case-sensitive.
    IP syntax is checked by the reader so that an unparseable address is
    reported as an invalid address rather than a malformed request.
    """

    model_config = ConfigDict(frozen=True)

    ip: str = Field(
        description="IPv4 or IPv6 address to look up.",
        examples=["8.8.8.8", "2001:4860:4860::8888"],
    )
    attribute: str = Field(
        description="Attribute token, e.g. COUNTRY_CODE, CITY, ASN or IS_TOR_EXIT_NODE.",
        examples=["COUNTRY_CODE"],
    )
    database: str = Field(
        description="Path to the GeoIP2 database file.",
        examples=["./GeoIP2-Country.mmdb"],
    )

    @field_validator("ip", "database", mode="before")
    @classmethod
    def _strip(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value
