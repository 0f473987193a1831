"""
Text buffer engine.

Accumulates generated source text, tracks the indentation depth and
normalizes multi-line fragments before they are appended: surrounding
blank lines and the common leading whitespace are removed, two-space
nesting is converted to the configured indent unit and the current
indentation is prepended to every line.
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Callable, Iterator, List, TypeVar

from ..logging_config import get_logger
from .errors import InvalidFragmentError

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_INDENT_STRING = "\t"

# Characters treated as whitespace by the unindent transform
WHITESPACE = " \t\r\n\f\v"


def coerce_fragment(value: Any) -> str:
    """
    Convert a caller-supplied value to fragment text.

    Strings pass through unchanged and plain numbers are converted with
    ``str()``. Everything else, including ``None`` and booleans, is rejected.

    Raises:
        InvalidFragmentError: If the value is not text or a number
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        logger.error("Rejected fragment of type %s", type(value).__name__)
        raise InvalidFragmentError(value)
    return str(value)


def check_indent_string(value: Any) -> str:
    """Return ``value`` if it is a string, else raise InvalidFragmentError."""
    if not isinstance(value, str):
        logger.error("Rejected indent unit of type %s", type(value).__name__)
        raise InvalidFragmentError(value)
    return value


def _is_blank(line: str) -> bool:
    return not line.strip(WHITESPACE)


def _leading_width(line: str) -> int:
    return len(line) - len(line.lstrip(WHITESPACE))


def unindent(text: str) -> str:
    """
    Remove surrounding blank lines and the common leading whitespace.

    Relative indentation between lines is preserved. Blank lines inside the
    block are kept as empty lines and do not constrain the common width.

    Args:
        text: Multi-line fragment

    Returns:
        Normalized block without a trailing newline
    """
    lines = text.split("\n")

    while lines and _is_blank(lines[0]):
        lines.pop(0)
    while lines and _is_blank(lines[-1]):
        lines.pop()
    if not lines:
        return ""
    lines[-1] = lines[-1].rstrip(WHITESPACE)

    widths = [_leading_width(line) for line in lines if not _is_blank(line)]
    width = min(widths) if widths else 0

    return "\n".join("" if _is_blank(line) else line[width:] for line in lines)


def convert_leading_spaces(line: str, indent_string: str) -> str:
    """Replace an even-width run of leading spaces by indent units, one per two spaces."""
    stripped = line.lstrip(" ")
    width = len(line) - len(stripped)
    if width == 0 or width % 2:
        return line
    return indent_string * (width // 2) + stripped


def prefix_lines(text: str, prefix: str) -> str:
    """Prepend ``prefix`` to every line and strip trailing whitespace per line."""
    return "\n".join((prefix + line).rstrip() for line in text.split("\n"))


def reindent_code(text: str, prefix: str, indent_string: str) -> str:
    """
    Re-express an unindented code block at a given indentation.

    Args:
        text: Output of ``unindent``
        prefix: Indentation of the current depth
        indent_string: Unit that replaces each two-space nesting level

    Returns:
        Indented block without a trailing newline
    """
    converted = "\n".join(
        convert_leading_spaces(line, indent_string) for line in text.split("\n")
    )
    return prefix_lines(converted, prefix)


class OutputBuffer:
    """
    Growing output text with an indentation depth.

    All emitted text funnels through this class. Nested scopes must be
    entered and left in strict stack order; an instance is not meant to be
    shared between threads.
    """

    def __init__(self, indent_string: str = DEFAULT_INDENT_STRING):
        """
        Initialize an empty buffer.

        Args:
            indent_string: String rendering one indentation level
        """
        self._chunks: List[str] = []
        self._depth = 0
        self._indent_string = check_indent_string(indent_string)

    @property
    def depth(self) -> int:
        """Current indentation depth."""
        return self._depth

    @property
    def indent_string(self) -> str:
        """String used for one indentation level."""
        return self._indent_string

    @indent_string.setter
    def indent_string(self, value: str):
        self.set_indent_string(value)

    @property
    def indentation(self) -> str:
        """Prefix for lines emitted at the current depth."""
        return self._indent_string * self._depth

    @property
    def at_line_start(self) -> bool:
        """True when the next character would start a new line."""
        for chunk in reversed(self._chunks):
            if chunk:
                return chunk.endswith("\n")
        return True

    def set_indent_string(self, indent_string: str):
        """
        Change the indentation unit.

        Text that was already emitted keeps its indentation.
        """
        indent_string = check_indent_string(indent_string)
        if self._chunks and indent_string != self._indent_string:
            logger.warning(
                "Indent string changed to %r after output was written; "
                "existing lines keep their indentation",
                indent_string,
            )
        self._indent_string = indent_string

    def emit(self, fragment: Any, newline: bool = True):
        """
        Append a normalized, indented fragment.

        Args:
            fragment: Code text; numbers are accepted
            newline: Append a trailing newline
        """
        text = unindent(coerce_fragment(fragment))
        self._chunks.append(reindent_code(text, self.indentation, self._indent_string))
        if newline:
            self.newline()

    def emit_raw(self, text: Any):
        """Append text verbatim, without indentation or newline."""
        self._chunks.append(coerce_fragment(text))

    def emit_comment(self, text: Any):
        """
        Append a ``/* ... */`` block comment.

        Comment lines are unindented but two-space runs are kept as spaces.
        """
        body = unindent(coerce_fragment(text))
        self.emit("/*")
        self._chunks.append(prefix_lines(body, self.indentation + " * "))
        self.newline()
        self._chunks.append(self.indentation + " */")
        self.newline()

    def newline(self):
        """Append a single newline with no indentation."""
        self._chunks.append("\n")

    def strip_trailing_newlines(self):
        """Remove newlines at the end of the buffer."""
        text = self.snapshot()
        stripped = text.rstrip("\n")
        if stripped != text:
            self._chunks = [stripped]

    @contextmanager
    def indented(self) -> Iterator["OutputBuffer"]:
        """
        Increase the depth for the body of a ``with`` block.

        The previous depth is restored on every exit path.
        """
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    def with_indent(self, block: Callable[["OutputBuffer"], T]) -> T:
        """Run ``block(self)`` one level deeper and return its result."""
        with self.indented():
            return block(self)

    def snapshot(self) -> str:
        """Return the accumulated text without modifying the buffer."""
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def __str__(self) -> str:
        return self.snapshot()
