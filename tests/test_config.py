import pytest

from geoattr.config import Settings

ENV_NAMES = (
    "LOG_LEVEL",
    "GEOIP_DATABASE_DIR",
    "GEOIP_READER_CACHE",
    "GEOIP_READER_CACHE_SIZE",
    "GEOIP_STRICT_FIELDS",
    "APP_HOST",
    "APP_PORT",
    "APP_RELOAD",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.database_dir is None
    assert settings.reader_cache is False
    assert settings.reader_cache_size == 8
    assert settings.strict_fields is False
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.reload is False


def test_settings_read_from_environment(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    clean_env.setenv("GEOIP_DATABASE_DIR", "/srv/geoip")
    clean_env.setenv("GEOIP_READER_CACHE", "true")
    clean_env.setenv("GEOIP_READER_CACHE_SIZE", "2")
    clean_env.setenv("GEOIP_STRICT_FIELDS", "1")
    clean_env.setenv("APP_HOST", "0.0.0.0")
    clean_env.setenv("APP_PORT", "9000")
    clean_env.setenv("APP_RELOAD", "no")

    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.database_dir == "/srv/geoip"
    assert settings.reader_cache is True
    assert settings.reader_cache_size == 2
    assert settings.strict_fields is True
    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.reload is False


def test_settings_accept_field_names(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings(_env_file=None, reader_cache=True, strict_fields=True)

    assert settings.reader_cache is True
    assert settings.strict_fields is True


def test_invalid_flag_is_rejected(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GEOIP_READER_CACHE", "sometimes")

    with pytest.raises(ValueError):
        Settings(_env_file=None)
