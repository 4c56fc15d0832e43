"""Structured logging configuration for the feed site builder."""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else arrived through ``extra``
RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """Renders each record as one JSON object per line.

    The fixed keys describe where the record came from; every value passed
    through ``extra`` is appended after them under its own name.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in RESERVED_ATTRS and key not in entry
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ExecutionLogger:
    """Component logger that stamps every line with the build's execution id."""

    def __init__(self, execution_id: str, component: str = "main"):
        self.execution_id = execution_id
        self.component = component
        self.logger = logging.getLogger(f"feed_site.{component}")
        self.start_time: datetime | None = None

    def _log(self, level: int, message: str, **context: Any) -> None:
        extra = {"execution_id": self.execution_id, "component": self.component}
        extra.update(context)
        self.logger.log(level, message, extra=extra)

    def info(self, message: str, **context: Any) -> None:
        self._log(logging.INFO, message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._log(logging.ERROR, message, **context)

    def log_execution_start(self, **context: Any) -> None:
        """Record the start time and log it."""
        self.start_time = datetime.now(UTC)
        self.info(
            f"Starting {self.component} execution",
            execution_start=self.start_time.isoformat(),
            **context,
        )

    def log_execution_end(self, success: bool = True, **context: Any) -> None:
        """Log the end time, the outcome and the time since the start."""
        end_time = datetime.now(UTC)
        duration = None
        if self.start_time is not None:
            duration = (end_time - self.start_time).total_seconds()

        self.info(
            f"Completed {self.component} execution",
            execution_end=end_time.isoformat(),
            execution_duration_seconds=duration,
            execution_success=success,
            **context,
        )

    def log_page_written(self, path: str, slug: str | None = None) -> None:
        self.info(f"Generated: {path}", path=path, slug=slug)

    def log_metrics(self, metrics: dict[str, Any]) -> None:
        self.info("Execution metrics", metrics=metrics)


def resolve_level(log_level: str) -> int:
    """Map a level name such as ``debug`` or ``INFO`` to its number.

    Raises:
        ValueError: If the name is not a logging level
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_structured_logging(log_level: str = "INFO") -> None:
    """Send JSON log lines to stderr at the given level.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)

    Raises:
        ValueError: If the level name is unknown. Existing handlers are left
            in place in that case.
    """
    level = resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(console_handler)

    package_logger = logging.getLogger("feed_site")
    package_logger.setLevel(level)
    package_logger.propagate = True


def create_execution_logger(
    component: str, execution_id: str | None = None
) -> ExecutionLogger:
    """Create a component logger, generating an execution id if none is given."""
    if not execution_id:
        execution_id = f"build_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    return ExecutionLogger(execution_id, component)
