"""Test settings and logging configuration"""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from splitt.config import Settings, get_settings
from splitt.core.logging import build_logging_config, setup_logging


class TestSettings:
    """Test settings loading and validation"""

    def test_defaults(self, settings):
        assert settings.title_limit == 50
        assert settings.note_limit == 250
        assert settings.min_expense_amount == 1
        assert settings.log_level == "INFO"

    def test_fields(self):
        """Every setting is read by the engine"""
        assert set(Settings.model_fields) == {
            "log_level",
            "title_limit",
            "note_limit",
            "default_emoji",
            "min_expense_amount",
            "max_amount",
        }

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SPLITT_TITLE_LIMIT", "20")
        monkeypatch.setenv("SPLITT_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.title_limit == 20
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("field", ["title_limit", "note_limit", "min_expense_amount", "max_amount"])
    def test_limits_must_be_positive(self, field):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Test logging configuration"""

    def test_build_logging_config(self):
        config = build_logging_config(Settings(_env_file=None, log_level="WARNING"))

        assert config["loggers"]["splitt"]["level"] == "WARNING"
        assert config["loggers"]["splitt"]["handlers"] == ["console"]
        assert config["handlers"]["console"]["formatter"] == "verbose"

    def test_setup_logging(self):
        setup_logging(Settings(_env_file=None, log_level="ERROR"))
        assert logging.getLogger("splitt").level == logging.ERROR
        assert logging.getLogger("splitt.models.paid_by").getEffectiveLevel() == logging.ERROR

    def test_ledger_logs_refused_removal(self, ledger, caplog, monkeypatch):
        """Refused removals are reported as warnings"""
        monkeypatch.setattr(logging.getLogger("splitt"), "propagate", True)
        with caplog.at_level(logging.WARNING, logger="splitt"):
            result = ledger.remove_entry(ledger.default_entry_id, 0)

        assert not result.is_removed
        assert "Unable to remove entry" in caplog.text
