"""Tests for log formatting."""
import logging
import sys
from unittest.mock import patch
from datamapper.core.config import Settings
from datamapper.core.logging import ContextFormatter, configure_logging

FORMAT = "%(levelname)s %(name)s [class=%(entity_class)s] - %(message)s"


def _record(**extra):
    record = logging.LogRecord("datamapper.metadata.parser", logging.INFO, __file__, 1, "Parsed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_fills_missing_entity_class():
    line = ContextFormatter(FORMAT).format(_record())
    assert line == "INFO datamapper.metadata.parser [class=-] - Parsed"


def test_formatter_uses_entity_class():
    line = ContextFormatter(FORMAT).format(_record(entity_class="app.models.Post"))
    assert line == "INFO datamapper.metadata.parser [class=app.models.Post] - Parsed"


class TestConfigureLogging:
    """Test root logger setup."""

    def test_stdout_handler_with_context_formatter(self):
        with patch.object(logging, "basicConfig") as basic_config:
            configure_logging("debug")

        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == "DEBUG"
        (handler,) = kwargs["handlers"]
        assert handler.stream is sys.stdout
        assert isinstance(handler.formatter, ContextFormatter)
        assert "[class=%(entity_class)s]" in handler.formatter._fmt

    def test_level_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr("datamapper.core.logging.settings", Settings(log_level="warning"))
        with patch.object(logging, "basicConfig") as basic_config:
            configure_logging()

        assert basic_config.call_args.kwargs["level"] == "WARNING"
