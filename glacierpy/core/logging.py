"""Logging utilities for glacierpy modules."""

import logging
from typing import Dict

VERBOSE = 15
SILLY = 5

# Level names accepted by the command line
LOG_LEVELS: Dict[str, int] = {
    'error': logging.ERROR,
    'warn': logging.WARNING,
    'info': logging.INFO,
    'verbose': VERBOSE,
    'debug': logging.DEBUG,
    'silly': SILLY,
}

logging.addLevelName(VERBOSE, 'VERBOSE')
logging.addLevelName(SILLY, 'SILLY')


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Logger name (typically 'glacierpy.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def resolve_level(name: str) -> int:
    """
    Translate a level name ('info', 'verbose', ...) to a logging level.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return LOG_LEVELS[name.lower()]
    except KeyError:
        choices = ', '.join(LOG_LEVELS)
        raise ValueError(f"Unknown log level '{name}' (choose from {choices})") from None
