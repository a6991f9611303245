from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the attribute service.

    Environment Variables:
        LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)
        GEOIP_DATABASE_DIR: Directory relative database paths are resolved in.
            When set, database paths outside it are rejected.
        GEOIP_READER_CACHE: Share open database readers between calls (default: false)
        GEOIP_READER_CACHE_SIZE: Idle readers kept by the cache (default: 8)
        GEOIP_STRICT_FIELDS: Fail instead of returning "" for absent fields (default: false)
        APP_HOST, APP_PORT, APP_RELOAD: uvicorn options used by run_app.py
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    database_dir: str | None = Field(default=None, alias="GEOIP_DATABASE_DIR")
    reader_cache: bool = Field(default=False, alias="GEOIP_READER_CACHE")
    reader_cache_size: int = Field(default=8, alias="GEOIP_READER_CACHE_SIZE")
    strict_fields: bool = Field(default=False, alias="GEOIP_STRICT_FIELDS")
    host: str = Field(default="127.0.0.1", alias="APP_HOST")
    port: int = Field(default=8000, alias="APP_PORT")
    reload: bool = Field(default=False, alias="APP_RELOAD")
