"""Structured logging helpers and timing spans for menu renders."""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel

__all__ = ["TraceSpan", "trace", "log_event", "safe_json"]


def safe_json(value: Any) -> Any:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, (list, tuple, set)):
        return [safe_json(item) for item in value]

    if isinstance(value, dict):
        return {str(key): safe_json(val) for key, val in value.items()}

    if isinstance(value, BaseModel):
        return safe_json(value.model_dump())

    if callable(getattr(value, "to_dict", None)):
        return safe_json(value.to_dict())

    return repr(value)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    exc_info: bool | BaseException | None = None,
    **fields: Any,
) -> None:
    """Emit one log line holding ``event`` and ``fields`` encoded as JSON."""

    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    payload.update({key: safe_json(value) for key, value in fields.items() if value is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True), exc_info=exc_info)


@dataclass
class TraceSpan:
    """An open trace span; ``result`` fields are attached to the end event."""

    name: str
    logger: logging.Logger
    start_time: float
    result: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.start_time) * 1000, 2)

    def record(self, **fields: Any) -> None:
        self.result.update(fields)


@contextmanager
def trace(name: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[TraceSpan]:
    """Log ``trace.start``/``trace.end`` around a block, or ``trace.error`` on failure."""

    logger = logger or logging.getLogger("webmenu.trace")
    base_fields = {"trace": name, **fields}
    log_event(logger, logging.DEBUG, "trace.start", **base_fields)
    span = TraceSpan(name=name, logger=logger, start_time=time.perf_counter())
    try:
        yield span
    except Exception as exc:
        error_fields = {**base_fields, "duration_ms": span.elapsed_ms, "error": repr(exc)}
        log_event(logger, logging.ERROR, "trace.error", exc_info=True, **error_fields)
        raise
    else:
        end_fields = {**span.result, **base_fields, "duration_ms": span.elapsed_ms}
        log_event(logger, logging.INFO, "trace.end", **end_fields)
