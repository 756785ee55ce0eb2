"""Utility modules for Marcado.

Provides:
- text: whitespace helpers (detab, trim, collapse, trim_lines)
- escape: encode, encode_attribute, normalize_uri
- logger: get_logger for logging
"""

from marcado.utils.escape import encode, encode_attribute, normalize_uri
from marcado.utils.logger import get_logger
from marcado.utils.text import collapse, detab, trim, trim_left, trim_lines

__all__ = [
    "collapse",
    "detab",
    "encode",
    "encode_attribute",
    "get_logger",
    "normalize_uri",
    "trim",
    "trim_left",
    "trim_lines",
]
