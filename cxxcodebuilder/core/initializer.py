"""
Nested array and struct initializer lists.

An initializer is a small tree: leaves hold verbatim code fragments and
composites hold an ordered list of children between a pair of delimiters.
The tree is built first and then rendered once, depth first, through an
OutputBuffer with one extra indentation level per nesting depth.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from ..logging_config import get_logger
from .buffer import OutputBuffer, coerce_fragment
from .errors import InitializerStateError
from .literals import c_string_literal

logger = get_logger(__name__)

ARRAY_DELIMITERS = ("[", "]")
STRUCT_DELIMITERS = ("{", "}")


@dataclass
class Leaf:
    """Terminal element: a verbatim code fragment."""

    text: str


@dataclass
class Composite:
    """Bracketed group of elements."""

    start: str
    end: str
    children: List["InitializerNode"] = field(default_factory=list)


InitializerNode = Union[Leaf, Composite]


def render_initializer(node: Composite, buffer: OutputBuffer):
    """
    Write a composite and its children to ``buffer``.

    The opening delimiter is indented when the buffer is at the start of a
    line and appended directly otherwise (e.g. after ``int x[] = ``). The
    closing delimiter is written at the outer indentation without a
    trailing newline.
    """
    if buffer.at_line_start:
        buffer.emit(node.start)
    else:
        buffer.emit_raw(node.start)
        buffer.newline()

    last = len(node.children) - 1
    with buffer.indented():
        for index, child in enumerate(node.children):
            if isinstance(child, Composite):
                render_initializer(child, buffer)
            else:
                buffer.emit(child.text, newline=False)
            if index != last:
                buffer.emit_raw(",")
            buffer.newline()

    buffer.emit(node.end, newline=False)


class InitializerBuilder:
    """Builds one composite of an initializer tree."""

    def __init__(
        self,
        buffer: OutputBuffer,
        start: str,
        end: str,
        root: Optional["InitializerBuilder"] = None,
    ):
        """
        Initialize builder for a composite.

        Args:
            buffer: Buffer the finished tree is rendered into
            start: Opening delimiter
            end: Closing delimiter
            root: Builder of the outermost composite, None for the root itself
        """
        self._buffer = buffer
        self._node = Composite(start, end)
        self._root = root if root is not None else self
        self._rendered = False

    @classmethod
    def array(cls, buffer: OutputBuffer) -> "InitializerBuilder":
        """Create a ``[ ... ]`` initializer."""
        return cls(buffer, *ARRAY_DELIMITERS)

    @classmethod
    def struct(cls, buffer: OutputBuffer) -> "InitializerBuilder":
        """Create a ``{ ... }`` initializer."""
        return cls(buffer, *STRUCT_DELIMITERS)

    @property
    def node(self) -> Composite:
        """The composite being built."""
        return self._node

    @property
    def is_root(self) -> bool:
        return self._root is self

    def _check_open(self):
        if self._root._rendered:
            raise InitializerStateError("Initializer has already been rendered")

    def element(self, code: Any) -> "InitializerBuilder":
        """Append a verbatim code fragment."""
        self._check_open()
        self._node.children.append(Leaf(coerce_fragment(code)))
        return self

    def string_element(self, text: Any) -> "InitializerBuilder":
        """Append ``text`` as an escaped, quoted string literal."""
        return self.element(c_string_literal(text))

    def _nested(
        self,
        delimiters: tuple,
        block: Optional[Callable[["InitializerBuilder"], Any]],
    ) -> "InitializerBuilder":
        self._check_open()
        child = InitializerBuilder(self._buffer, *delimiters, root=self._root)
        if block is None:
            self._node.children.append(child.node)
            return child
        block(child)
        self._node.children.append(child.node)
        return child

    def array_element(
        self, block: Optional[Callable[["InitializerBuilder"], Any]] = None
    ) -> "InitializerBuilder":
        """
        Append a nested ``[ ... ]`` initializer.

        Args:
            block: Called with the nested builder before it is appended.
                Without a block the nested builder is appended right away
                and returned for the caller to fill.

        Returns:
            The nested builder
        """
        return self._nested(ARRAY_DELIMITERS, block)

    def struct_element(
        self, block: Optional[Callable[["InitializerBuilder"], Any]] = None
    ) -> "InitializerBuilder":
        """Append a nested ``{ ... }`` initializer. See ``array_element``."""
        return self._nested(STRUCT_DELIMITERS, block)

    array_initializer = array_element
    struct_initializer = struct_element

    def render(self):
        """
        Render the tree into the buffer.

        Raises:
            InitializerStateError: If called on a nested builder or twice
        """
        if not self.is_root:
            raise InitializerStateError(
                "Nested initializers are rendered by their outermost initializer"
            )
        self._check_open()
        self._rendered = True
        logger.debug(
            "Rendering %s%s initializer with %d element(s)",
            self._node.start,
            self._node.end,
            len(self._node.children),
        )
        render_initializer(self._node, self._buffer)

    @property
    def element_count(self) -> int:
        """Number of direct elements added so far."""
        return len(self._node.children)
