"""
Structured logging configuration.

Two output formats, selected by ApplicationConfig.LOG_FORMAT:
- console: human-readable lines for development
- json: one JSON object per line, with any `extra=` fields passed to the
  logger (customer_id, company_id, path_taken, latency_ms, ...)
"""
import json
import logging
import logging.config
from datetime import datetime

_STANDARD_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "lineno", "funcName", "created",
    "msecs", "relativeCreated", "thread", "threadName", "taskName",
    "processName", "process", "exc_info", "exc_text", "stack_info",
    "message", "asctime",
}


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs JSON lines with consistent fields:
    - timestamp: ISO 8601 timestamp
    - level: Log level name
    - logger: Logger name
    - message: Log message
    - extra: Any extra fields passed to the logger
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        }
        if extras:
            log_entry["extra"] = extras

        return json.dumps(log_entry, default=str)


def get_logging_config(level: str = "INFO", log_format: str = "console") -> dict:
    """
    Build a logging.config.dictConfig dictionary.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR)
        log_format: "json" or "console"
    """
    if log_format == "json":
        formatter = {"()": JsonFormatter}
    else:
        formatter = {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["console"], "level": level.upper()},
        "loggers": {
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: str = "INFO", log_format: str = "console") -> None:
    logging.config.dictConfig(get_logging_config(level, log_format))
