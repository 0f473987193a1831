"""
Template engine wrapper for code building.

Provides a simple interface for Jinja2 template rendering with filters
for C source generation. Rendered text is an ordinary fragment and is
normalized by the builder like any other code.
"""

import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
)
from jinja2 import TemplateError as Jinja2TemplateError

from ..logging_config import get_logger
from .errors import CodeBuilderError
from .literals import c_string_literal

logger = get_logger(__name__)


class TemplateError(CodeBuilderError):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with C generation utilities."""

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = Path(template_dir) if template_dir else None
        self._memory_templates: Dict[str, str] = {}
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation filters."""
        # In-memory templates shadow files of the same name
        loaders = [DictLoader(self._memory_templates)]
        if self.template_dir and self.template_dir.is_dir():
            loaders.append(FileSystemLoader(str(self.template_dir)))
        elif self.template_dir:
            logger.warning("Template directory not found: %s", self.template_dir)
        loader = ChoiceLoader(loaders)

        # C source is not markup: no autoescaping
        self._env = Environment(
            loader=loader,
            autoescape=False,
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=StrictUndefined,
        )

        self._env.filters["c_string"] = c_string_literal
        self._env.filters["snake_case"] = snake_case
        self._env.filters["pascal_case"] = pascal_case
        self._env.filters["macro_case"] = macro_case

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            rendered = template.render(**context)
        except Jinja2TemplateError as e:
            logger.error("Failed to render template %s: %s", template_name, e)
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e
        logger.debug("Rendered template %s", template_name)
        return rendered

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Jinja2TemplateError as e:
            logger.error("Failed to render template string: %s", e)
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._memory_templates[name] = content
        if self._env.cache is not None:
            self._env.cache.clear()
        logger.debug("Added in-memory template %s", name)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return template_name in self._env.list_templates()


# Template filters

def snake_case(value: Any) -> str:
    """Convert string to snake_case."""
    s1 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", str(value))
    s2 = re.sub(r"[-\s.]+", "_", s1)
    return s2.lower()


def pascal_case(value: Any) -> str:
    """Convert string to PascalCase."""
    return "".join(p.capitalize() for p in snake_case(value).split("_") if p)


def macro_case(value: Any) -> str:
    """Convert string to a macro name, e.g. ``my-header.h`` -> ``MY_HEADER_H``."""
    name = re.sub(r"[^0-9A-Za-z]+", "_", snake_case(value)).strip("_")
    return name.upper()


def create_template_engine(
    template_dir: Optional[Union[str, Path]] = None,
) -> TemplateEngine:
    """Create a template engine, optionally backed by a directory."""
    return TemplateEngine(template_dir)
