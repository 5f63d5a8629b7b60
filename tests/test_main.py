import logging

import pytest

pytest.importorskip("PySide6.QtWidgets")

import main  # noqa: E402
from core.logging_config import setup_logging  # noqa: E402


def test_default_settings():
    settings = main.parse_settings([])

    assert settings.sound_enabled is True
    assert settings.notification_enabled is True
    assert settings.poll_interval_ms == 1000
    assert settings.log_level == "WARNING"


def test_settings_from_options():
    settings = main.parse_settings([
        "--no-sound", "--no-notifications", "--poll-interval", "500",
        "--log-level", "info", "-platform", "offscreen",
    ])

    assert settings.sound_enabled is False
    assert settings.notification_enabled is False
    assert settings.poll_interval_ms == 500
    assert settings.log_level == "INFO"


def test_debug_overrides_log_level():
    assert main.parse_settings(["--log-level", "ERROR", "--debug"]).log_level == "DEBUG"


def test_setup_logging_replaces_handlers():
    root = setup_logging("info")
    setup_logging(logging.DEBUG)

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("chatty")
