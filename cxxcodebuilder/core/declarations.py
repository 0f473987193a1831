"""
Splitting of function declarations into return type and signature.

This is a best-effort heuristic, not a C++ grammar: the name is the first
identifier-like token (letters, digits, ``_``, ``:`` and ``~``) that is
followed by optional whitespace and an opening parenthesis. Everything
before it is the return type with its attributes, everything from the name
on is the signature, including trailing qualifiers such as ``const``.
"""

import re
from dataclasses import dataclass
from typing import Any

from ..logging_config import get_logger
from .buffer import coerce_fragment
from .errors import MalformedDeclarationError

logger = get_logger(__name__)

_DECLARATION_PATTERN = re.compile(r"(.*?)([a-z0-9_:~]+)\s*\((.*)", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class FunctionDeclaration:
    """A declaration split at its name."""

    return_type: str
    name: str
    signature: str


def split_declaration(declaration: Any) -> FunctionDeclaration:
    """
    Split a declaration such as ``static int modify_limit(int diff)``.

    Args:
        declaration: Declaration text

    Returns:
        FunctionDeclaration(return_type="static int", name="modify_limit",
        signature="modify_limit(int diff)")

    Raises:
        MalformedDeclarationError: If no ``name(`` part exists
    """
    declaration = coerce_fragment(declaration)
    match = _DECLARATION_PATTERN.match(declaration)
    if match is None:
        logger.error("Malformed declaration: %r", declaration)
        raise MalformedDeclarationError(declaration)

    return_type, name, rest = match.groups()
    return FunctionDeclaration(
        return_type=return_type.strip(),
        name=name,
        signature=f"{name}({rest}".strip(),
    )
