"""Tests for common.config and common.logging."""

import json
import logging

import pytest

from ckey_engine.common.config import CkeySettings, get_settings
from ckey_engine.common.logging import JSONFormatter, get_logger, setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CKEY_MAX_BATCH_SIZE", raising=False)
        settings = CkeySettings()
        assert settings.environment == "development"
        assert settings.max_batch_size == 100
        assert settings.require_api_key_for_generate is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CKEY_MAX_BATCH_SIZE", "7")
        monkeypatch.setenv("CKEY_REQUIRE_API_KEY_FOR_GENERATE", "false")
        settings = CkeySettings()
        assert settings.max_batch_size == 7
        assert settings.require_api_key_for_generate is False

    def test_production_rejects_default_key(self, monkeypatch):
        monkeypatch.delenv("CKEY_API_KEY", raising=False)
        settings = CkeySettings(environment="production")
        with pytest.raises(RuntimeError, match="CKEY_API_KEY"):
            settings.validate_for_production()

    def test_development_warns_on_default_key(self, monkeypatch):
        monkeypatch.delenv("CKEY_API_KEY", raising=False)
        settings = CkeySettings()
        with pytest.warns(UserWarning):
            settings.validate_for_production()

    def test_production_with_real_key(self):
        settings = CkeySettings(environment="production", api_key="s3cret-value")
        settings.validate_for_production()

    def test_get_settings_cached(self, monkeypatch):
        monkeypatch.setenv("CKEY_API_KEY", "cached-key")
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestLogging:
    def test_json_formatter(self):
        record = logging.LogRecord(
            "ckey_engine.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
        )
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "ckey_engine.test"

    def test_json_formatter_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord(
                "ckey_engine.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError" in entry["exception"]

    def test_get_logger_scoped(self):
        assert get_logger("keygen").name == "ckey_engine.keygen"

    def test_setup_logging_idempotent(self):
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        root = logging.getLogger("ckey_engine")
        handlers = [h for h in root.handlers if isinstance(h.formatter, JSONFormatter)]
        assert len(handlers) == 1
        assert root.level == logging.DEBUG
