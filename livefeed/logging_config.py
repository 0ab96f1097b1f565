"""Structured logging configuration for better log analysis."""

import json
import logging
import logging.handlers
from datetime import UTC, datetime
from pathlib import Path

EXTRA_FIELDS = ("source", "query", "url")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as JSON for easier parsing with tools like jq, grep,
    or log aggregators. Pipeline code attaches ``source``, ``query`` and
    ``url`` through ``extra=`` so a fetch cycle can be followed per source.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format.

        Returns:
            JSON-formatted log string.
        """
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        return json.dumps(log_data)


def configure_logging(
    level: str = "INFO", log_file: Path | str | None = None
) -> None:
    """Configure root logging for the command line entry point.

    Console output is human-readable. When ``log_file`` is given, records
    are also written there as JSON, rotated at 10MB.

    Args:
        level: Log level name.
        log_file: Optional path for the JSON log file.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_file),
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(StructuredFormatter())
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
