"""Centralized logging configuration for Fretwise.

This module provides a consistent way to configure logging across the engine
and the command line tool.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "fretwise": logging.INFO,
    "fretwise.pitch": logging.INFO,
    "fretwise.scales": logging.INFO,
    "fretwise.chords": logging.INFO,
    "fretwise.fretboard": logging.INFO,
    "fretwise.identifier": logging.INFO,  # Set to DEBUG for per-candidate scoring
    "fretwise.notation": logging.INFO,
    "fretwise.playback": logging.INFO,
    "fretwise.core.config": logging.INFO,
    "fretwise.cli.main": logging.WARNING,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'fretwise' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("fretwise"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Only the package root and the root logger get the handler; module
    # loggers propagate up to "fretwise"
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name)
        logger.setLevel(module_level)
        if module_name in ("", "fretwise") and _console_handler not in logger.handlers:
            logger.addHandler(_console_handler)
    logging.getLogger("fretwise").propagate = False

    logging.getLogger("fretwise").debug("Logging configuration complete")
