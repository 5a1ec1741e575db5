"""
Structured JSON logging for the pizzeria kernel.

Every record under the ``pizzeria_kernel`` logger becomes one JSON line.
Placement-scoped fields (correlation_id, customer_id, attempt, order_id)
are bound by the placement service with ``LogContext.bind`` and stamped on
every record emitted inside that block, including records from the step
services, which never see those fields themselves.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping
from uuid import UUID

# ---------------------------------------------------------------------------
# Placement context
# ---------------------------------------------------------------------------

_EMPTY: Mapping[str, str] = MappingProxyType({})

_placement_fields: ContextVar[Mapping[str, str]] = ContextVar(
    "pizzeria_placement_fields", default=_EMPTY
)


class LogContext:
    """Placement-scoped log fields, isolated per thread and per task."""

    FIELDS = ("correlation_id", "customer_id", "attempt", "order_id")

    @classmethod
    def current(cls) -> Mapping[str, str]:
        """Fields bound by the enclosing ``bind`` blocks (read-only)."""
        return _placement_fields.get()

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[Mapping[str, str]]:
        """
        Layer ``fields`` over the current ones for the duration of the block.

        None values are skipped.  The previous fields are restored on exit,
        whether the block returns, raises or ``return``s from inside.

        Raises:
            ValueError: For a field name outside FIELDS.
        """
        unknown = sorted(set(fields) - set(cls.FIELDS))
        if unknown:
            raise ValueError(f"Unknown log context field(s): {', '.join(unknown)}")

        merged = dict(_placement_fields.get())
        merged.update({key: val for key, val in fields.items() if val is not None})
        token = _placement_fields.set(MappingProxyType(merged))
        try:
            yield _placement_fields.get()
        finally:
            _placement_fields.reset(token)


# ---------------------------------------------------------------------------
# JSON Formatter
# ---------------------------------------------------------------------------

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (UUID, Decimal)):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return str(obj)


class StructuredFormatter(logging.Formatter):
    """
    Formats each log record as a single JSON line.

    Key order: ts, level, logger, message, placement fields, extras.
    For kernel exceptions the machine-readable ``code`` and the structured
    attributes (ingredient_name, needed, available, missing_ids, ...) are
    flattened as ``exc_<name>`` so rejected placements can be grepped by
    reason without parsing tracebacks.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(LogContext.current())

        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            code = getattr(exc, "code", None)
            if code is not None:
                payload["exc_code"] = code
                for key, val in vars(exc).items():
                    if not key.startswith("_"):
                        payload[f"exc_{key}"] = val
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------

_LOGGER_PREFIX = "pizzeria_kernel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the pizzeria_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the pizzeria_kernel logger (idempotent).

    ``handler`` defaults to stderr; the interactive CLI passes a file handler
    so log lines never interleave with the menu.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(sys.stderr)
    h.setFormatter(StructuredFormatter())
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Detach the handler and forget the configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
