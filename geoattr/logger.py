from logging import config, getLogger
from typing import Any

from geoattr.config import Settings

LOGGER_NAME = "geoattr"


def build_log_config(level: str) -> dict[str, Any]:
    """dictConfig for the package logger, formatted like uvicorn's own output.

    uvicorn's access and error loggers keep the configuration uvicorn gives them.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "geoattr": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "geoattr": {
                "class": "logging.StreamHandler",
                "formatter": "geoattr",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["geoattr"], "level": level.upper(), "propagate": False},
        },
    }


config.dictConfig(build_log_config(Settings().log_level))

logger = getLogger(LOGGER_NAME)
