"""Tests for logger naming and handler setup."""

import logging

from rich.logging import RichHandler

from cxxcodebuilder import logging_config
from cxxcodebuilder.logging_config import ROOT_LOGGER_NAME, configure_logging, get_logger


def test_get_logger_namespaces_names() -> None:
    assert get_logger("cxxcodebuilder.core.buffer").name == "cxxcodebuilder.core.buffer"
    assert get_logger("plugin").name == "cxxcodebuilder.plugin"
    assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


def test_configure_logging_installs_one_rich_handler(monkeypatch) -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    monkeypatch.setattr(logging_config, "_configured", False)
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "level", logger.level)

    configure_logging("debug")
    configure_logging("info")

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)
    assert logger.level == logging.INFO
