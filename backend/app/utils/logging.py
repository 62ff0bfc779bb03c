"""Logging setup and structured storage logging."""

import json
import logging
from logging.config import dictConfig
from typing import Any

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, including any ``structured`` extra."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        structured = getattr(record, "structured", None)
        if structured:
            payload["data"] = structured

        if record.exc_info:
            payload["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "stack": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Install root logging configuration.

    Args:
        level: Root log level name
        json_output: Emit JSON lines instead of plain text
    """
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_output else "plain",
                },
            },
            "root": {"handlers": ["console"], "level": level.upper()},
        }
    )


class StructuredStorageLogger:
    """Structured logger for storage operations."""

    def log_operation(
        self,
        operation: str,
        user_id: str,
        outcome: str,
        latency_ms: float,
        item_id: str | None = None,
        error_reason: str | None = None,
    ) -> None:
        """Log a storage operation with structured data."""
        log_data: dict[str, Any] = {
            "operation": operation,
            "user_id": user_id,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if item_id:
            log_data["item_id"] = item_id
        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Storage operation: {operation} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
