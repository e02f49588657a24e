from __future__ import annotations

import io
import logging

from ledger_import.logging_setup import configure_logging, get_logger


def test_get_logger_is_silent_until_configured():
    get_logger("ledger_import.test")

    handlers = logging.getLogger("ledger_import").handlers
    assert handlers and all(isinstance(h, logging.NullHandler) for h in handlers)


def test_configure_logging_attaches_single_stream_handler():
    stream = io.StringIO()

    configure_logging("DEBUG", fmt="%(levelname)s %(message)s", stream=stream)
    configure_logging("ERROR", stream=io.StringIO())  # ignored: already configured
    get_logger("ledger_import.test").debug("hello %s", "there")

    pkg = logging.getLogger("ledger_import")
    assert len(pkg.handlers) == 1
    assert pkg.propagate is False
    assert stream.getvalue() == "DEBUG hello there\n"


def test_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("LEDGER_IMPORT_LOG_LEVEL", "warning")

    configure_logging(stream=io.StringIO())

    assert logging.getLogger("ledger_import").level == logging.WARNING


def test_invalid_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("LEDGER_IMPORT_LOG_LEVEL", "chatty")

    configure_logging(stream=io.StringIO())

    assert logging.getLogger("ledger_import").level == logging.INFO
