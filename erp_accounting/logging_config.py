"""
Logging configuration.

Console output only. The level comes from LOG_LEVEL
(see config.Settings); services log through module-level
loggers obtained with logging.getLogger(__name__).
"""

import logging
import logging.config

from erp_accounting.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logging_config(level: str) -> dict:
    """Build a dictConfig for the given level."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "erp_accounting": {
                "handlers": ["console"],
                "level": level,
                "propagate": True,
            },
            # Engine echo is noisy; only surface problems
            "sqlalchemy.engine": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def setup_logging(level: str | None = None) -> None:
    """Install the console handler. Safe to call more than once."""
    level = level or get_settings().LOG_LEVEL
    logging.config.dictConfig(get_logging_config(level))
