"""
Exception hierarchy shared by the formatting core.

Configuration and template errors live next to their modules and derive
from CodeBuilderError as well.
"""

from typing import Any


class CodeBuilderError(Exception):
    """Base exception for code building errors."""

    pass


class InvalidFragmentError(CodeBuilderError, TypeError):
    """Raised when a value that is not text is passed where a fragment is required."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Expected a text fragment, got {type(value).__name__}: {value!r}"
        )


class MalformedDeclarationError(CodeBuilderError, ValueError):
    """Raised when a function declaration has no ``name(`` part."""

    def __init__(self, declaration: str):
        self.declaration = declaration
        super().__init__(
            f"Cannot find a function name followed by '(' in declaration: "
            f"{declaration!r}"
        )


class InitializerStateError(CodeBuilderError):
    """Raised when an initializer is modified or rendered after rendering."""

    pass
