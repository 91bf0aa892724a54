"""Structured logging configuration."""

import logging
import sys

from carecompanion.core.config import settings


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        if hasattr(record, "session_id"):
            log_data["session_id"] = record.session_id
        if hasattr(record, "event"):
            log_data["event"] = record.event

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Simple key=value format for readability
        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class SafetyLogger:
    """Logger for safety-relevant assessment events.

    Records that a crisis answer occurred, never what was answered.
    """

    def __init__(self) -> None:
        self.logger = get_logger("safety")

    def crisis_flagged(self, session_id: str, audience: str) -> None:
        """Log that a completed assessment raised the crisis flag."""
        self.logger.warning(
            f"SAFETY: event=crisis_flagged session={session_id} audience={audience}",
            extra={"session_id": session_id, "event": "crisis_flagged"},
        )


safety_logger = SafetyLogger()
