from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from permission_store.logging_config import LOGGER_NAME, setup_logging
from permission_store.settings import Settings


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@db/permissions")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.database_url == "postgresql+psycopg://u:p@db/permissions"
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_setup_logging_is_idempotent():
    original_level = logging.getLogger(LOGGER_NAME).level
    try:
        first = setup_logging("WARNING")
        second = setup_logging("DEBUG")

        assert first is second is logging.getLogger(LOGGER_NAME)
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG
    finally:
        logging.getLogger(LOGGER_NAME).setLevel(original_level)
