"""Telemetry helpers built on telelog.

The package only touches three calls:

``get_logger(name)`` -- fetch (and cache) a telelog logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- time a block and log its outcome

``FIXUP_WHITESPACE_LOGGER`` names the default logger and
``FIXUP_WHITESPACE_LOG_LEVEL`` drops anything below the given level.
"""

from __future__ import annotations

import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional

from telelog import Logger, create_logger  # type: ignore

ENV_PREFIX = "FIXUP_WHITESPACE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "fixup_whitespace")

LEVELS = ("debug", "info", "warning", "error")


def _threshold() -> int:
    raw = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").strip().lower()
    if raw == "warn":
        raw = "warning"
    if raw not in LEVELS:
        raise ValueError(f"Unknown log level '{raw}', expected one of {LEVELS}.")
    return LEVELS.index(raw)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def format_kv(message: str, data: Optional[Dict[str, Any]] = None) -> str:
    """Render ``message | key=value | ...`` the way every line is logged."""

    pairs = [f"{key}={_stringify(value)}" for key, value in (data or {}).items()]
    return " | ".join([message] + pairs)


@lru_cache(maxsize=None)
def get_logger(name: Optional[str] = None) -> Logger:
    """Return a singleton logger for ``name`` (the package logger by default)."""

    return create_logger(name or DEFAULT_LOGGER_NAME)


def log_kv(logger: Logger, level: str, message: str, **kv: Any) -> bool:
    """Emit ``message`` with ``kv`` attached; return ``False`` when filtered."""

    key = level.lower()
    if key not in LEVELS:
        raise ValueError(f"Unsupported log level '{level}'.")
    if LEVELS.index(key) < _threshold():
        return False
    getattr(logger, key)(format_kv(message, kv))
    return True


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line with ``data`` attached."""

    log_kv(get_logger(logger_name), level, f"event::{name}", **(data or {}))


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for metadata updates and outcome lines."""

    logger: Logger
    span_name: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    outcome: str = "ok"

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        self.outcome = "failed"
        log_kv(self.logger, "error", "span::fail", span=self.span_name, reason=reason)

    def warn(self, reason: str) -> None:
        self.outcome = "warned"
        log_kv(self.logger, "warning", "span::warn", span=self.span_name, reason=reason)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a block and log one ``span::end`` line with its metadata.

    ``component=True`` tags the line with ``name`` itself; a string is used
    as-is. Exceptions escaping the block are logged through
    ``SpanHandle.fail`` and re-raised.
    """

    handle = SpanHandle(
        logger=get_logger(logger_name),
        span_name=name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    if component:
        handle.add_metadata("component", name if component is True else component)
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        log_kv(
            handle.logger,
            "debug",
            "span::end",
            span=name,
            outcome=handle.outcome,
            elapsed_ms=f"{elapsed_ms:.3f}",
            **handle.metadata,
        )


__all__ = [
    "LEVELS",
    "SpanHandle",
    "format_kv",
    "get_logger",
    "log_kv",
    "record_event",
    "span",
]
