"""Unit tests for logging configuration and version lookup."""

import logging
from pathlib import Path

import pytest
import structlog

from infrastructure.logging import configure_logging, resolve_level
from infrastructure.version import UNKNOWN_VERSION, get_version


@pytest.fixture(autouse=True)
def restore_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("nope", logging.INFO)],
    )
    def test_resolve_level(self, name, expected):
        assert resolve_level(name) == expected

    def test_json_format_renders_json(self):
        configure_logging("INFO", log_format="json")

        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_renders_console(self):
        configure_logging("INFO", log_format="console")

        processors = structlog.get_config()["processors"]

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_service_is_bound_to_every_event(self):
        configure_logging("INFO", log_format="json", service="Bwadl API")

        assert structlog.contextvars.get_contextvars() == {"service": "Bwadl API"}


class TestGetVersion:
    def test_falls_back_to_pyproject(self, tmp_path: Path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\nversion = "9.9.9"\n')

        assert get_version("not-an-installed-distribution", pyproject) == "9.9.9"

    def test_unknown_when_nothing_is_available(self, tmp_path: Path):
        missing = tmp_path / "pyproject.toml"

        assert get_version("not-an-installed-distribution", missing) == UNKNOWN_VERSION
