"""
C string literal helpers.
"""

from typing import Any

from .buffer import coerce_fragment

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\x1b": "\\033",
}


def escape_c_string(text: str) -> str:
    """
    Escape text for use between double quotes in C source.

    Remaining control characters are written as three-digit octal escapes,
    which unlike ``\\x`` escapes cannot swallow a following hex digit.
    Non-ASCII characters are kept as they are.
    """
    parts = []
    for char in text:
        escaped = _SIMPLE_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\{ord(char):03o}")
        else:
            parts.append(char)
    return "".join(parts)


def c_string_literal(value: Any) -> str:
    """Return ``value`` as a quoted C string literal."""
    return f'"{escape_c_string(coerce_fragment(value))}"'
