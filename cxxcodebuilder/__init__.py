"""
cxxcodebuilder

Builds readable, correctly indented C and C++ source text from Python.
"""

from .builder import CxxBuilder
from .core import (
    BuilderConfig,
    CodeBuilderError,
    ConfigError,
    InitializerBuilder,
    InitializerStateError,
    InvalidFragmentError,
    MalformedDeclarationError,
    OutputBuffer,
    TemplateEngine,
    TemplateError,
    c_string_literal,
    load_config,
    split_declaration,
    unindent,
)

# Version info
__version__ = "0.1.0"

__all__ = [
    "CxxBuilder",
    "BuilderConfig",
    "CodeBuilderError",
    "ConfigError",
    "InitializerBuilder",
    "InitializerStateError",
    "InvalidFragmentError",
    "MalformedDeclarationError",
    "OutputBuffer",
    "TemplateEngine",
    "TemplateError",
    "c_string_literal",
    "load_config",
    "split_declaration",
    "unindent",
]
