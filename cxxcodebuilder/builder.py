"""
Fluent builder for C and C++ source files.

Every method is a thin layer over OutputBuffer: it composes a line or two
of C syntax and lets the buffer normalize and indent it. Scoped
constructs (indentation, structs, header guards) are context managers;
function bodies and initializer contents may also be given as callables
that receive the builder or initializer they should write to.

Example:
    >>> b = CxxBuilder(indent_string="    ")
    >>> b.include("<stdio.h>")
    >>> with b.struct("Point"):
    ...     b.member("int x")
    ...     b.member("int y")
    >>> print(b, end="")
    #include <stdio.h>
    struct Point {
        int x;
        int y;
    };
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping, Optional, TypeVar, Union

from .core.buffer import OutputBuffer, coerce_fragment, reindent_code, unindent
from .core.config import BuilderConfig
from .core.declarations import split_declaration
from .core.initializer import InitializerBuilder
from .core.literals import c_string_literal
from .core.templates import TemplateEngine
from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Body = Union[str, Callable[["CxxBuilder"], Any], None]
InitializerBlock = Callable[[InitializerBuilder], Any]


class CxxBuilder:
    """Builds C/C++ source text."""

    def __init__(
        self,
        config: Optional[BuilderConfig] = None,
        indent_string: Optional[str] = None,
    ):
        """
        Initialize an empty builder.

        Args:
            config: Builder configuration, defaults to tabs
            indent_string: Overrides the configured indentation unit
        """
        self.config = config or BuilderConfig()
        if indent_string is None:
            indent_string = self.config.resolved_indent_string()
        self._buffer = OutputBuffer(indent_string)
        self._template_engine: Optional[TemplateEngine] = None
        logger.debug("CxxBuilder created with indent string %r", indent_string)

    @property
    def buffer(self) -> OutputBuffer:
        """Underlying text buffer."""
        return self._buffer

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine for the configured template directory, created lazily."""
        if self._template_engine is None:
            self._template_engine = TemplateEngine(self.config.template_dir)
        return self._template_engine

    # Low level text

    def add_code(self, code: Any):
        """Add a normalized, indented fragment followed by a newline."""
        self._buffer.emit(code)

    def add_code_without_newline(self, code: Any):
        self._buffer.emit(code, newline=False)

    def add_raw_code(self, code: Any):
        """Add text verbatim."""
        self._buffer.emit_raw(code)

    def newline(self):
        self._buffer.newline()

    def separator(self):
        """Add an empty line."""
        self.add_code("")

    @contextmanager
    def indented(self) -> Iterator["CxxBuilder"]:
        """Indent everything added inside the ``with`` block by one level."""
        with self._buffer.indented():
            yield self

    # Short name, mirrors ``with builder.indent():``
    indent = indented

    def with_indent(self, block: Callable[["CxxBuilder"], T]) -> T:
        """Call ``block(self)`` one level deeper and return its result."""
        with self.indented():
            return block(self)

    def set_indent_string(self, indent_string: str):
        """Change the indentation unit for subsequently added code."""
        self._buffer.set_indent_string(indent_string)

    # Preprocessor

    def include(self, header_name: str):
        """Add ``#include``; pass the name with its ``<>`` or quotes."""
        self.add_code(f"#include {coerce_fragment(header_name)}")

    def define(self, definition: str):
        """Add ``#define`` followed by name and optional value."""
        self.add_code(f"#define {coerce_fragment(definition)}")

    def define_string(self, name: str, value: Any):
        """Add a ``#define`` whose value is a string literal."""
        self.define(f"{coerce_fragment(name)} {c_string_literal(value)}")

    @contextmanager
    def guard_macros(self, name: str) -> Iterator["CxxBuilder"]:
        """Wrap the ``with`` block in ``#ifndef`` / ``#define`` / ``#endif``."""
        name = coerce_fragment(name)
        self.add_code(f"#ifndef {name}")
        self.define(name)
        self.separator()
        yield self
        self.separator()
        self.add_code(f"#endif /* {name} */")

    # Declarations

    def comment(self, text: Any):
        """Add a ``/* ... */`` block comment."""
        self._buffer.emit_comment(text)

    @contextmanager
    def struct(self, name: str) -> Iterator["CxxBuilder"]:
        """Add ``struct name { ... };`` around the ``with`` block."""
        self.add_code(f"struct {coerce_fragment(name)} {{")
        with self.indented():
            yield self
        self.add_code("};")

    @contextmanager
    def typedef_struct(self, name: str) -> Iterator["CxxBuilder"]:
        """Add ``typedef struct { ... } name;`` around the ``with`` block."""
        self.add_code("typedef struct {")
        with self.indented():
            yield self
        self.add_code(f"}} {coerce_fragment(name)};")

    def _add_body(self, body: Body):
        with self.indented():
            if callable(body):
                body(self)
            else:
                self.add_code("" if body is None else body)

    def function(self, declaration: str, body: Body = None):
        """
        Add a function definition.

        The return type goes on its own line, followed by the signature and
        the indented body, then an empty line.

        Args:
            declaration: e.g. ``"static int modify_limit(int diff)"``
            body: Code fragment, or a callable that receives this builder

        Raises:
            MalformedDeclarationError: If the declaration has no ``name(``
        """
        parts = split_declaration(declaration)
        if parts.return_type:
            self.add_code(parts.return_type)
        self.add_code(f"{parts.signature} {{")
        self._add_body(body)
        self.add_code("}")
        self.separator()

    def constructor(
        self,
        declaration: str,
        initializers: Optional[Mapping[str, Any]] = None,
        body: Body = None,
    ):
        """
        Add a C++ constructor with a member initializer list.

        Args:
            declaration: e.g. ``"Foo::Foo(int size)"``
            initializers: Member name to initial value, in order. Multi-line
                values are unindented and their continuation lines re-indented
            body: Code fragment, or a callable that receives this builder
        """
        parts = split_declaration(declaration)
        if parts.return_type:
            self.add_code(parts.return_type)
        self.add_code(parts.signature)

        items = list((initializers or {}).items())
        with self.indented():
            # Written verbatim: the two-space continuation must not become an indent unit
            for index, (member, value) in enumerate(items):
                lead = ": " if index == 0 else "  "
                trail = "," if index != len(items) - 1 else ""
                self.add_raw_code(
                    f"{self._buffer.indentation}{lead}"
                    f"{coerce_fragment(member)}({self._initializer_value(value)}){trail}"
                )
                self.newline()

        self.add_code("{")
        self._add_body(body)
        self.add_code("}")
        self.separator()

    def _initializer_value(self, value: Any) -> str:
        # Continuation lines keep their nesting relative to the member line
        first, _, rest = unindent(coerce_fragment(value)).partition("\n")
        if not rest:
            return first
        indentation = self._buffer.indentation
        return first + "\n" + reindent_code(rest, indentation, self._buffer.indent_string)

    def field(self, declaration: str, value: Any = None):
        """
        Add a variable or member declaration.

        Args:
            declaration: e.g. ``"static int count"``
            value: None for a plain declaration, a code fragment, an
                InitializerBuilder from ``begin_array``/``begin_struct``, or
                a callable that writes the value through this builder
        """
        declaration = coerce_fragment(declaration)
        if value is None:
            self.add_code(f"{declaration};")
        elif isinstance(value, InitializerBuilder) or callable(value):
            self.add_code_without_newline(f"{declaration} =")
            self.add_raw_code(" ")
            if isinstance(value, InitializerBuilder):
                value.render()
            else:
                value(self)
            self._buffer.strip_trailing_newlines()
            self.add_raw_code(";")
            self.newline()
        else:
            self.add_code(f"{declaration} = {coerce_fragment(value)};")

    variable = field
    member = field

    # Initializers

    def begin_array(self) -> InitializerBuilder:
        """Start a ``[ ... ]`` initializer; call ``render()`` or pass it to ``field``."""
        return InitializerBuilder.array(self._buffer)

    def begin_struct(self) -> InitializerBuilder:
        """Start a ``{ ... }`` initializer; call ``render()`` or pass it to ``field``."""
        return InitializerBuilder.struct(self._buffer)

    def array_initializer(self, block: InitializerBlock):
        """Build an array initializer with ``block`` and render it without a trailing newline."""
        initializer = self.begin_array()
        block(initializer)
        initializer.render()

    def struct_initializer(self, block: InitializerBlock):
        """Build a struct initializer with ``block`` and render it without a trailing newline."""
        initializer = self.begin_struct()
        block(initializer)
        initializer.render()

    @staticmethod
    def str_val(value: Any) -> str:
        """Return ``value`` as a C string literal."""
        return c_string_literal(value)

    # Templates

    def add_template(self, source: str, **context: Any):
        """Render a Jinja2 template string and add the result as code."""
        self.add_code(self.template_engine.render_string(source, context))

    def add_template_file(self, template_name: Union[str, Path], **context: Any):
        """Render a template from the configured template directory and add it as code."""
        self.add_code(self.template_engine.render_template(str(template_name), context))

    # Output

    def snapshot(self) -> str:
        """Return the generated text so far."""
        return self._buffer.snapshot()

    def to_s(self) -> str:
        return self.snapshot()

    def __str__(self) -> str:
        return self.snapshot()
