"""Logging setup for OncoMerge.

Every module logs through a child of the "oncomerge" logger, which writes to
stderr and does not propagate to the root logger. The level comes from, in
order: the CLI --log-level flag, $ONCOMERGE_LOG_LEVEL, then INFO.

    from oncomerge.config.debug import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys

LOG_LEVEL_ENV_VAR = "ONCOMERGE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
PACKAGE_LOGGER = "oncomerge"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_configured = False


def parse_log_level(level: str) -> int:
    """Translate a level name (any case; WARN is accepted) to a logging level.

    Raises:
        ValueError: If the level is not recognised
    """
    try:
        return _LEVEL_MAP[level.upper()]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {level}. Must be one of: DEBUG, INFO, WARN, ERROR"
        ) from None


def _package_logger() -> logging.Logger:
    """The "oncomerge" logger, given its stderr handler on first use."""
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured:
        return logger

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR, "")
    level = _LEVEL_MAP.get(env_level.upper(), _LEVEL_MAP[DEFAULT_LOG_LEVEL])

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    # Replace rather than stack handlers across reconfiguration
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    _configured = True
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for a module, nested under the "oncomerge" logger.

    Names outside the package get the "oncomerge." prefix so they share its
    handler and level.
    """
    package_logger = _package_logger()
    if name is None or name == PACKAGE_LOGGER:
        return package_logger
    if not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """Set the level for all OncoMerge loggers.

    The level is also exported to $ONCOMERGE_LOG_LEVEL for child processes.

    Raises:
        ValueError: If the level is not recognised
    """
    numeric_level = parse_log_level(level)
    _package_logger().setLevel(numeric_level)
    os.environ[LOG_LEVEL_ENV_VAR] = level.upper()


def reset_logger() -> None:
    """Drop the handler so the next get_logger() re-reads the environment."""
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    _configured = False
