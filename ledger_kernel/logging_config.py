"""
Structured JSON logging for the ledger kernel.

Every record under the ``ledger_kernel`` logger is written as one JSON line:
timestamp, level, logger name and message, then the fields bound with
``LogContext.bind`` (operation, profile_id, job_id), then the record's
``extra`` fields.  Records logged with ``exc_info`` also carry the
exception's type, message and public attributes, so a rejected payment
logs its ids and amounts without parsing the message.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
]

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

LOGGER_NAME = "ledger_kernel"

CONTEXT_FIELDS = ("operation", "profile_id", "job_id")

_bound: ContextVar[dict[str, str]] = ContextVar("ledger_log_context", default={})


class LogContext:
    """Per-thread, per-task fields merged into every record."""

    @staticmethod
    @contextmanager
    def bind(**fields: object) -> Iterator[None]:
        """
        Bind context fields for the duration of the block.

        Values are stored as strings; None leaves a field as it was.  Nested
        binds layer over the outer ones and the outer values come back on
        exit.
        """
        unknown = set(fields) - set(CONTEXT_FIELDS)
        if unknown:
            raise TypeError(f"Unknown log context fields: {sorted(unknown)}")

        merged = dict(_bound.get())
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        token = _bound.set(merged)
        try:
            yield
        finally:
            _bound.reset(token)

    @staticmethod
    def current() -> dict[str, str]:
        return dict(_bound.get())


_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    # Decimal, enums and anything else readable as text
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    for name, value in vars(exc).items():
        if not name.startswith("_") and name != "code":
            fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_bound.get(),
        }
        for key, val in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, val)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_to_json)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ledger_kernel namespace."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach a JSON handler to the ``ledger_kernel`` logger.

    Idempotent: once a handler with a StructuredFormatter is attached,
    later calls change nothing.  Records do not propagate to the root
    logger.
    """
    kernel_logger = logging.getLogger(LOGGER_NAME)
    if any(isinstance(h.formatter, StructuredFormatter) for h in kernel_logger.handlers):
        return

    kernel_logger.setLevel(level)
    kernel_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    kernel_logger.addHandler(h)
