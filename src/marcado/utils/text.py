"""Whitespace utilities used by the compilers.

All functions are pure string transforms.

Example:
    >>> from marcado.utils.text import detab, trim_lines
    >>> detab("a\\tb")
    'a   b'
    >>> trim_lines("foo  \\n  bar")
    'foo\\nbar'
"""

from __future__ import annotations

import re

TAB_SIZE = 4

_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_BOUNDARY = re.compile(r"[ \t]*(?:\r\n|\r|\n)+[ \t]*")
_FIRST_WORD = re.compile(r"^[^ \t]+(?=[ \t]|$)")


def detab(value: str, size: int = TAB_SIZE) -> str:
    """Expand tabs to spaces, aligning to ``size``-wide tab stops per line.

    Examples:
        >>> detab("\\tx")
        '    x'
        >>> detab("ab\\tx")
        'ab  x'
    """
    return value.expandtabs(size)


def trim(value: str) -> str:
    """Strip leading and trailing whitespace."""
    return value.strip()


def trim_left(value: str) -> str:
    """Strip leading whitespace only."""
    return value.lstrip()


def collapse(value: str) -> str:
    """Replace every whitespace run (newlines included) with a single space.

    Leading and trailing runs are collapsed too, not removed.

    Examples:
        >>> collapse("  a \\n\\t b ")
        ' a b '
    """
    return _WHITESPACE_RUN.sub(" ", value)


def trim_lines(value: str) -> str:
    """Fold each run of line endings, and the spaces and tabs around it, into one "\\n".

    Interior runs that do not touch a line ending are left alone, and so
    are the very first and last characters of the value.

    Examples:
        >>> trim_lines(" a  \\n\\n   b ")
        ' a\\nb '
    """
    return _LINE_BOUNDARY.sub("\n", value)


def first_word(value: str | None) -> str | None:
    """Return the first space- or tab-delimited token of ``value``.

    Examples:
        >>> first_word("js highlight-lines")
        'js'
        >>> first_word(" js") is None
        True
    """
    if not value:
        return None
    match = _FIRST_WORD.match(value)
    return match.group(0) if match else None
