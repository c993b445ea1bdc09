"""Tests for Settings validation and logging setup."""

import json
import logging

import pytest

from doclib.core.config import ConfigurationError, Environment, Settings
from doclib.core.logging_config import _JsonFormatter, _SecretFilter, request_id_var


class TestSettings:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite://"
        assert settings.get_cors_origins() == ["http://localhost:5000", "http://localhost:5173"]

    def test_wildcard_cors_refused(self):
        with pytest.raises(ValueError):
            Settings(cors_allowed_origins="*").get_cors_origins()

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_format(self):
        with pytest.raises(ValueError):
            Settings(log_format="xml")

    def test_production_refuses_localhost_cors(self):
        settings = Settings(environment=Environment.PRODUCTION)
        with pytest.raises(ConfigurationError):
            settings.validate_production_config()

    def test_production_with_real_origin(self):
        settings = Settings(environment="production", cors_allowed_origins="https://thuvien.example.vn")
        settings.validate_production_config()

    def test_development_tolerates_localhost(self):
        Settings(environment="development").validate_production_config()


class TestLogging:

    def _record(self, msg: str, **extra) -> logging.LogRecord:
        record = logging.LogRecord("doclib.test", logging.INFO, __file__, 1, msg, None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter_includes_request_id_and_extra(self):
        token = request_id_var.set("req-42")
        try:
            line = _JsonFormatter().format(self._record("Tài liệu", doc_id=7))
        finally:
            request_id_var.reset(token)
        data = json.loads(line)
        assert data["message"] == "Tài liệu"
        assert data["request_id"] == "req-42"
        assert data["doc_id"] == 7

    def test_secret_filter_redacts_database_password(self):
        record = self._record("connecting to postgresql://lib:hunter2@db/library")
        _SecretFilter().filter(record)
        assert "hunter2" not in record.getMessage()
