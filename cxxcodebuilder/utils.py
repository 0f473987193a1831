"""Utility functions for reading template context and writing generated sources.

This module provides functions for loading JSON context files and writing
generated code to disk with proper error handling.
"""

import json
from pathlib import Path
from typing import Any

from .core.errors import CodeBuilderError
from .logging_config import get_logger

logger = get_logger(__name__)


class ContextLoadError(CodeBuilderError):
    """Custom exception for template context loading errors."""

    pass


class SourceWriteError(CodeBuilderError):
    """Custom exception for errors writing generated sources."""

    pass


def load_context(file_path: str | Path) -> dict[str, Any]:
    """Load template variables from a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON object.

    Raises:
        ContextLoadError: If the file is missing, unreadable, invalid JSON,
            or does not contain an object.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load context from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise ContextLoadError(f"Context file not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise ContextLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise ContextLoadError(f"Error reading file {file_path}: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"Context file does not contain a JSON object: {file_path}")
        raise ContextLoadError(
            f"Context file must contain a JSON object: {file_path}"
        )

    logger.info(f"Loaded template context from {file_path}")
    return data


def write_source(file_path: str | Path, text: str, line_ending: str = "\n") -> bool:
    """Write generated source text, skipping the write if nothing changed.

    Leaving unchanged files untouched keeps their timestamps, so build
    systems do not recompile them.

    Args:
        file_path: Destination file; parent directories are created.
        text: Generated text with ``\\n`` line endings.
        line_ending: Line ending used in the written file.

    Returns:
        True if the file was written, False if it was already up to date.

    Raises:
        SourceWriteError: If the file cannot be read or written.
    """
    file_path = Path(file_path)
    if line_ending != "\n":
        text = text.replace("\n", line_ending)
    data = text.encode("utf-8")

    try:
        if file_path.exists() and file_path.read_bytes() == data:
            logger.debug(f"Generated file is up to date: {file_path}")
            return False
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(data)
    except OSError as e:
        logger.error(f"Error writing file {file_path}: {e}")
        raise SourceWriteError(f"Error writing file {file_path}: {e}") from e

    logger.info(f"Wrote generated source to {file_path}")
    return True
