"""
Tests for configuration validation and logging setup.
"""

import logging
from unittest.mock import patch

import pytest

from pulse.config import config
from pulse.logging_util import LOG_FORMAT, set_level, setup_logger
from tests.test_config import CONFIG, MESSAGES


class TestValidateConfig:

    def test_defaults_are_valid(self):
        with patch.object(config, "APP_ENV", CONFIG["environments"]["development"]):
            assert config.validate_config() == []

    def test_production_requires_cron_secret(self):
        with patch.object(config, "APP_ENV", CONFIG["environments"]["production"]), \
             patch.object(config, "CRON_SECRET", ""):
            errors = config.validate_config()
        assert any(MESSAGES["config_errors"]["cron_secret"] in e for e in errors)

    def test_production_with_cron_secret(self):
        with patch.object(config, "APP_ENV", CONFIG["environments"]["production"]), \
             patch.object(config, "CRON_SECRET", CONFIG["cron_secret"]):
            assert config.validate_config() == []

    @pytest.mark.parametrize("name,value", [
        ("REQUEST_TIMEOUT", 0),
        ("FETCH_MAX_WORKERS", 0),
        ("RSS_MAX_FEEDS", 0),
        ("RSS_MAX_ARTICLES", 0),
        ("HN_CACHE_TTL", -1),
        ("ANALYSIS_CACHE_MAX_ENTRIES", -5),
        ("ANALYSIS_FAILURE_TTL", -1.0),
    ])
    def test_out_of_range_values(self, name, value):
        with patch.object(config, "APP_ENV", "development"), patch.object(config, name, value):
            errors = config.validate_config()
        assert any(name in e for e in errors)

    def test_environment_helper(self):
        with patch.object(config, "APP_ENV", "production"):
            assert config.is_production()
        with patch.object(config, "APP_ENV", "development"):
            assert not config.is_production()

    def test_summary_masks_secrets(self, capsys):
        with patch.object(config, "OPENROUTER_API_KEY", "super-secret-key"), \
             patch.object(config, "CRON_SECRET", "another-secret"):
            config.print_config_summary()
        out = capsys.readouterr().out
        assert "super-secret-key" not in out
        assert "another-secret" not in out
        assert "OPENROUTER_API_KEY: ***" in out


class TestOptionalFloat:

    def test_unset_is_none(self, monkeypatch):
        monkeypatch.delenv("PULSE_TEST_FLOAT", raising=False)
        assert config._optional_float("PULSE_TEST_FLOAT") is None

    def test_blank_is_none(self, monkeypatch):
        monkeypatch.setenv("PULSE_TEST_FLOAT", "  ")
        assert config._optional_float("PULSE_TEST_FLOAT") is None

    def test_number(self, monkeypatch):
        monkeypatch.setenv("PULSE_TEST_FLOAT", "90")
        assert config._optional_float("PULSE_TEST_FLOAT") == 90.0


class TestLogging:

    def test_single_stdout_handler(self):
        logger = setup_logger("pulse.tests.handlers")
        setup_logger("pulse.tests.handlers")
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt == LOG_FORMAT

    def test_explicit_level(self):
        assert setup_logger("pulse.tests.level", logging.WARNING).level == logging.WARNING

    def test_set_level_applies_to_pulse_loggers(self):
        inside = setup_logger("pulse.tests.inside", logging.INFO)
        outside = setup_logger("elsewhere.tests", logging.INFO)

        set_level(logging.DEBUG)
        try:
            assert inside.level == logging.DEBUG
            assert outside.level == logging.INFO
        finally:
            set_level(logging.INFO)
