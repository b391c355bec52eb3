"""Centralized lazy-loading logger access for Fretwise."""
import logging
from typing import Dict

from .logging_config import MODULE_LOG_LEVELS

# Module-level cache for loggers
_logger_cache: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a lazily initialized logger with the given name.

    Modules listed in MODULE_LOG_LEVELS get their configured level up front,
    so DEBUG chatter from the engine stays quiet until setup_logging raises it.

    Args:
        name: The full module name (e.g., 'fretwise.identifier')

    Returns:
        A logger instance
    """
    if name not in _logger_cache:
        logger = logging.getLogger(name)
        if name in MODULE_LOG_LEVELS:
            logger.setLevel(MODULE_LOG_LEVELS[name])
        _logger_cache[name] = logger
    return _logger_cache[name]
