# ./utils/logger.py

import logging
from typing import Optional
from memtier.settings.logging_settings import LoggingSettings

# Instantiate logging settings
settings = LoggingSettings()

PACKAGE_LOGGER = "memtier"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _package_logger() -> logging.Logger:
    """
    Return the package logger, attaching its console handler on first use.

    Every logger handed out by `setup_logger` sits below it and propagates to it,
    so the package emits through a single handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if logger.handlers:
        return logger

    logger.setLevel(_level(settings.level))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=settings.format, datefmt=settings.datefmt))
    logger.addHandler(handler)

    # Keep package output out of the root logger
    logger.propagate = False
    return logger


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Returns a logger named under the `memtier` package logger.

    Args:
        name (str): The name of the logger. Typically `__name__`; names outside the
            package are nested under it, e.g. "tools.load" becomes "memtier.tools.load".
        level (str): Overrides the level inherited from the package logger, which
            defaults to LoggingSettings.level.

    Returns:
        logging.Logger: The configured logger.

    Usage Example:
    --------------
    logger = setup_logger(__name__)

    logger.info("Registered policy.memtier.")
    """
    package = _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    if name == PACKAGE_LOGGER:
        logger = package
    else:
        logger = logging.getLogger(name)
    if level:
        logger.setLevel(_level(level))
    return logger
