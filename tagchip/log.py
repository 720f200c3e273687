"""Logging setup for the API process and management scripts"""

import logging
import logging.config
from os import environ

from yaml import safe_load

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_FORMAT = "%(asctime)s   %(name)-28s %(levelname)-8s %(message)s"


def configure_logging() -> None:
    """Configure logging from environment variables.

    ``TAGCHIP_LOG_CONFIG`` points to a YAML file in ``logging.config.dictConfig``
    format and wins over everything else. Without it, ``TAGCHIP_LOG_LEVEL``,
    ``TAGCHIP_LOG_FORMAT`` and ``TAGCHIP_LOG_FILE`` drive ``basicConfig``, and
    ``TAGCHIP_LOG_SQL=1`` turns on SQLAlchemy statement logging.
    """
    config_path = environ.get("TAGCHIP_LOG_CONFIG")
    if config_path:
        with open(config_path, "r") as f:
            logging.config.dictConfig(safe_load(f.read()))
        return

    level = environ.get("TAGCHIP_LOG_LEVEL", "INFO").upper()
    if level not in LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = environ.get("TAGCHIP_LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format=environ.get("TAGCHIP_LOG_FORMAT", DEFAULT_FORMAT),
        handlers=handlers,
    )
    if environ.get("TAGCHIP_LOG_SQL") == "1":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
