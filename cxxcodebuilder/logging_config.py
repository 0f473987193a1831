"""Logging setup for cxxcodebuilder.

Library modules only ask for a logger; handlers are installed by
``configure_logging``, which the command line entry point calls.
"""

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "cxxcodebuilder"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = "WARNING", rich_output: bool = True) -> None:
    """Install a handler on the package logger.

    Calling it again only updates the level.

    Args:
        level: Logging level name or number.
        rich_output: Use rich's handler instead of a plain stream handler.
    """
    global _configured

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if _configured:
        return

    if rich_output:
        handler: logging.Handler = RichHandler(
            show_path=False, rich_tracebacks=True, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    logger.addHandler(handler)
    _configured = True
