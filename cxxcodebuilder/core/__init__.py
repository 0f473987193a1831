"""
Core formatting components.

Provides the text buffer engine, initializer trees and the helpers the
builder layer is made of.
"""

from .buffer import (
    DEFAULT_INDENT_STRING,
    OutputBuffer,
    coerce_fragment,
    reindent_code,
    unindent,
)
from .errors import (
    CodeBuilderError,
    InitializerStateError,
    InvalidFragmentError,
    MalformedDeclarationError,
)
from .initializer import (
    Composite,
    InitializerBuilder,
    InitializerNode,
    Leaf,
    render_initializer,
)
from .literals import c_string_literal, escape_c_string
from .declarations import FunctionDeclaration, split_declaration
from .config import BuilderConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Text buffer engine
    "DEFAULT_INDENT_STRING",
    "OutputBuffer",
    "coerce_fragment",
    "reindent_code",
    "unindent",
    # Errors
    "CodeBuilderError",
    "InitializerStateError",
    "InvalidFragmentError",
    "MalformedDeclarationError",
    # Initializer trees
    "Composite",
    "InitializerBuilder",
    "InitializerNode",
    "Leaf",
    "render_initializer",
    # Literals and declarations
    "c_string_literal",
    "escape_c_string",
    "FunctionDeclaration",
    "split_declaration",
    # Configuration system
    "BuilderConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
