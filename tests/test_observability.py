import logging

import pytest
import structlog

from portwire.config import WiringSettings
from portwire.observability import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_format_renders_json():
    configure_logging(WiringSettings(log_format="json"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_console_format_renders_for_humans():
    configure_logging(WiringSettings(log_format="console"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


def test_configured_from_environment_by_default(monkeypatch):
    monkeypatch.setenv("PORTWIRE_LOG_FORMAT", "json")

    configure_logging()

    assert structlog.is_configured()
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_log_level_selects_filtering_logger():
    configure_logging(WiringSettings(log_level="warning"))

    wrapper_class = structlog.get_config()["wrapper_class"]
    assert wrapper_class is structlog.make_filtering_bound_logger(logging.WARNING)
