"""Minimal logging utilities for Marcado.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from marcado.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "marcado." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'marcado.mymodule'
    """
    if not (name == "marcado" or name.startswith("marcado.")):
        name = f"marcado.{name}"
    return logging.getLogger(name)
