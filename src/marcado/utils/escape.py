"""Character escaping and URI normalization.

Three encoder modes control how characters outside ASCII are written:

- ``"escape"``: only the HTML special characters are escaped
- ``"numbers"``: non-ASCII characters become hexadecimal references
- ``"true"``: named references where HTML defines one, hexadecimal otherwise

Example:
    >>> from marcado.utils.escape import encode
    >>> encode("café & co", "true")
    'caf&eacute; &amp; co'
"""

from __future__ import annotations

import html
import re
from html.entities import codepoint2name
from typing import Literal, TypeAlias
from urllib.parse import quote as url_quote

EntityMode: TypeAlias = Literal["true", "numbers", "escape"]

ENTITY_MODES: frozenset[str] = frozenset(("true", "numbers", "escape"))

_NON_ASCII = re.compile(r"[^\x00-\x7f]")

# RFC 3986 reserved + unreserved characters, plus "%" so existing escapes survive
_URI_SAFE = "/:?#[]@!$&'()*+,;=-_.~%"


def html_escape(s: str) -> str:
    """Escape HTML special characters for text content.

    Escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


def attribute_escape(s: str) -> str:
    """Escape HTML special characters for a double-quoted attribute value.

    Examples:
        >>> attribute_escape("a \\"b\\" 'c'")
        'a &quot;b&quot; &#x27;c&#x27;'
    """
    return html.escape(s, quote=True)


def _numeric(match: re.Match[str]) -> str:
    return f"&#x{ord(match.group(0)):X};"


def _named(match: re.Match[str]) -> str:
    codepoint = ord(match.group(0))
    name = codepoint2name.get(codepoint)
    if name is not None:
        return f"&{name};"
    return f"&#x{codepoint:X};"


def encode_non_ascii(s: str, mode: EntityMode) -> str:
    """Write non-ASCII characters as character references according to ``mode``."""
    if mode == "escape":
        return s
    return _NON_ASCII.sub(_numeric if mode == "numbers" else _named, s)


def encode(s: str, mode: EntityMode = "escape") -> str:
    """Escape ``s`` for safe inclusion as HTML text."""
    return encode_non_ascii(html_escape(s), mode)


def encode_attribute(s: str, mode: EntityMode = "escape") -> str:
    """Escape ``s`` for safe inclusion as a double-quoted attribute value."""
    return encode_non_ascii(attribute_escape(s), mode)


def normalize_uri(url: str) -> str:
    """Normalize a raw URI for use in ``href`` or ``src``.

    Decodes HTML entities (e.g., ``&auml;`` -> ``ä``), then percent-encodes
    spaces, backslashes, and non-ASCII characters. Characters that are
    meaningful in URIs and already-encoded sequences are kept as-is.

    The result still needs attribute escaping.

    Examples:
        >>> normalize_uri("http://example.com/a b")
        'http://example.com/a%20b'
        >>> normalize_uri("/caf%C3%A9")
        '/caf%C3%A9'
    """
    return url_quote(html.unescape(url), safe=_URI_SAFE)
