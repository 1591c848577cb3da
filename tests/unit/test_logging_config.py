"""Unit tests for logging configuration"""

import json
import logging

from src.logging_config import JsonFormatter, get_logging_config


class TestJsonFormatter:
    def _record(self, **extra):
        record = logging.LogRecord(
            name="src.app.use_cases.ledger.resolve_balance",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Balance resolved",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_extra_fields_are_nested(self):
        record = self._record(customer_id="c1", path_taken="ledger", latency_ms=1.5)

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "Balance resolved"
        assert payload["level"] == "INFO"
        assert payload["extra"] == {"customer_id": "c1", "path_taken": "ledger", "latency_ms": 1.5}

    def test_no_extra_key_without_extras(self):
        payload = json.loads(JsonFormatter().format(self._record()))

        assert "extra" not in payload


class TestLoggingConfig:
    def test_json_format_uses_json_formatter(self):
        config = get_logging_config("debug", "json")

        assert config["formatters"]["default"] == {"()": JsonFormatter}
        assert config["root"]["level"] == "DEBUG"

    def test_console_format(self):
        config = get_logging_config()

        assert "format" in config["formatters"]["default"]
        assert config["root"]["level"] == "INFO"
