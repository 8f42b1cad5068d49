#!/usr/bin/env python3
"""Tests for launcher logging configuration."""

import io
import logging

from munchausen.core.config import SimpleConfigLoader
from munchausen.core.logging_setup import LAUNCHER_LOGGER, setup_logging


def test_default_level_keeps_the_launcher_quiet():
    stream = io.StringIO()

    logger = setup_logging(SimpleConfigLoader(), stream=stream)
    logging.getLogger("munchausen.core.bootstrap").info("launching")

    assert logger.name == LAUNCHER_LOGGER
    assert stream.getvalue() == ""


def test_configured_level_reaches_the_console():
    stream = io.StringIO()
    config = SimpleConfigLoader(overrides={"logging.level": "info"})

    setup_logging(config, stream=stream)
    logging.getLogger("munchausen.core.bootstrap").info("launching")

    assert "launching" in stream.getvalue()


def test_command_level_overrides_configuration():
    stream = io.StringIO()
    config = SimpleConfigLoader(overrides={"logging.level": "ERROR"})

    setup_logging(config, cmd_log_level="debug", stream=stream)
    logging.getLogger("munchausen.core.invoker").debug("details")

    assert "munchausen.core.invoker" in stream.getvalue()


def test_launcher_logging_leaves_the_root_logger_alone():
    root_handlers = list(logging.getLogger().handlers)

    logger = setup_logging(SimpleConfigLoader(), stream=io.StringIO())

    assert logger.propagate is False
    assert logging.getLogger().handlers == root_handlers


def test_repeated_setup_replaces_handlers():
    setup_logging(SimpleConfigLoader(), stream=io.StringIO())
    logger = setup_logging(SimpleConfigLoader(), stream=io.StringIO())

    assert len(logger.handlers) == 1


def test_log_file(tmp_path):
    log_file = tmp_path / "logs" / "launcher.log"
    config = SimpleConfigLoader(overrides={"logging.level": "INFO", "logging.file": str(log_file)})

    logger = setup_logging(config, stream=io.StringIO())
    logging.getLogger("munchausen.core.bootstrap").info("written to file")
    for handler in logger.handlers:
        handler.flush()

    assert "written to file" in log_file.read_text(encoding="utf-8")
    setup_logging(SimpleConfigLoader(), stream=io.StringIO())
