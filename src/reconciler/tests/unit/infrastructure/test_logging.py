"""Unit tests for structlog configuration."""

import logging

import structlog

from infrastructure.logging import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_renderer_without_tty(self, monkeypatch):
        """Should render JSON when not attached to a terminal."""
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setattr("sys.stdout.isatty", lambda: False)

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_when_forced(self, monkeypatch):
        """Should render to the console when FORCE_COLOR is set."""
        monkeypatch.setenv("FORCE_COLOR", "1")

        configure_logging()

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_filters_below_level(self, monkeypatch):
        """Should drop events below the configured level."""
        monkeypatch.delenv("FORCE_COLOR", raising=False)

        configure_logging("WARNING")

        assert structlog.get_config()["wrapper_class"] is (
            structlog.make_filtering_bound_logger(logging.WARNING)
        )
