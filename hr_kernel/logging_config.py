"""
Structured JSON logging for the HR reporting kernel.

Every record under the ``hr_kernel`` logger renders as one JSON object per
line.  Report fields bound with ``LogContext.bind()`` (the organization filter
and the report being built) ride along on every record emitted inside the
block, so ``dashboard_generated`` and ``export_rendered`` lines can be joined
on ``organization_id`` and ``report_type`` without threading them through
every call.
"""

__all__ = [
    "CONTEXT_FIELDS",
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

LOGGER_NAMESPACE = "hr_kernel"

CONTEXT_FIELDS: tuple[str, ...] = ("organization_id", "report_type")

_bound_fields: ContextVar[Mapping[str, str]] = ContextVar(
    "hr_log_context", default={}
)


class LogContext:
    """Report-scoped fields attached to every record in the current context."""

    @staticmethod
    def current() -> dict[str, str]:
        return dict(_bound_fields.get())

    @staticmethod
    def clear() -> None:
        _bound_fields.set({})

    @staticmethod
    @contextmanager
    def bind(**fields: Any) -> Iterator[None]:
        """
        Bind report fields for the duration of the block.

        None values are skipped so an unfiltered dashboard carries no
        ``organization_id``.  Outer bindings are restored on exit.
        """
        unknown = sorted(set(fields) - set(CONTEXT_FIELDS))
        if unknown:
            raise TypeError(f"Unknown log context field(s): {', '.join(unknown)}")
        merged = dict(_bound_fields.get())
        merged.update({k: str(v) for k, v in fields.items() if v is not None})
        token = _bound_fields.set(merged)
        try:
            yield
        finally:
            _bound_fields.reset(token)


_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    # Decimal and anything else: keep the exact text form
    return str(value)


def _describe_error(exc: BaseException) -> dict[str, Any]:
    error: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    code = getattr(exc, "code", None)
    if code is not None:
        error["code"] = code
    fields = {
        k: v for k, v in vars(exc).items()
        if not k.startswith("_") and k != "code"
    }
    if fields:
        error["fields"] = fields
    return error


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: envelope, bound context, extras, error."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.current(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload["error"] = _describe_error(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the hr_kernel namespace."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def configure_logging(
    *,
    level: int = logging.INFO,
    handler: logging.Handler | None = None,
) -> None:
    """Attach a JSON handler to the hr_kernel logger unless one is present."""
    root = logging.getLogger(LOGGER_NAMESPACE)
    if root.handlers:
        return
    root.setLevel(level)
    root.propagate = False
    handler = handler if handler is not None else logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)


def reset_logging() -> None:
    """Drop hr_kernel handlers. FOR TESTING ONLY."""
    root = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
