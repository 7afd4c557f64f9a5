"""Structured logging, operation context and metric hooks.

Store operations run inside a ``RequestContext`` carrying the request id and
the KV namespace, so every log record and metric they emit is tagged with
both without passing them around by hand.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
namespace_var: ContextVar[str | None] = ContextVar("namespace", default=None)


class LogLevel(str, Enum):
    """Log levels matching Python's logging module."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def current_context() -> dict[str, str]:
    """Request id and namespace of the running operation, where set."""
    context = {}
    request_id = request_id_var.get()
    if request_id:
        context["request_id"] = request_id
    namespace = namespace_var.get()
    if namespace:
        context["namespace"] = namespace
    return context


class RequestContext:
    """Binds a request id and namespace to everything logged inside it.

    A nested context keeps the enclosing request id unless given its own.

    Example:
        async with RequestContext(request_id="req-123"):
            await store.batch(ops)  # logs carry req-123 and the namespace id
    """

    def __init__(
        self,
        request_id: str | None = None,
        namespace: str | None = None,
    ) -> None:
        self.request_id = request_id or request_id_var.get() or uuid.uuid4().hex
        self.namespace = namespace
        self._tokens: list[tuple[ContextVar, Any]] = []

    def __enter__(self) -> "RequestContext":
        self._tokens.append((request_id_var, request_id_var.set(self.request_id)))
        if self.namespace:
            self._tokens.append((namespace_var, namespace_var.set(self.namespace)))
        return self

    def __exit__(self, *args: Any) -> None:
        while self._tokens:
            var, token = self._tokens.pop()
            var.reset(token)

    async def __aenter__(self) -> "RequestContext":
        return self.__enter__()

    async def __aexit__(self, *args: Any) -> None:
        self.__exit__(*args)


class StructuredFormatter(logging.Formatter):
    """Renders records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger": record.name,
        }

        context = getattr(record, "context", None) or current_context()
        if context:
            data["context"] = context

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            data["error"] = {"type": type(error).__name__, "message": str(error)}

        duration_ms = getattr(record, "duration_ms", None)
        if duration_ms is not None:
            data["duration_ms"] = round(duration_ms, 3)

        return json.dumps(data, default=str)


class StructuredLogger:
    """Logger that attaches operation context, errors and durations to records.

    The context of the enclosing ``RequestContext`` is captured when the
    record is created, so it survives handlers that format later.
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(name)

    def log(
        self,
        level: int,
        message: str,
        context: dict[str, Any] | None = None,
        error: BaseException | None = None,
        duration_ms: float | None = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return

        extra: dict[str, Any] = {"context": {**current_context(), **(context or {})}}
        if duration_ms is not None:
            extra["duration_ms"] = duration_ms
        exc_info = (type(error), error, error.__traceback__) if error else None
        self.logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)


class Timer:
    """Measures the wall time of a block.

    Example:
        with Timer() as t:
            await dispatch()
        logger.info("Dispatched", duration_ms=t.duration_ms)
    """

    def __init__(self) -> None:
        self.start_time: float = 0
        self.end_time: float = 0

    @property
    def duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.end_time = time.perf_counter()


# Receives (name, value, labels)
MetricCallback = Callable[[str, float, dict[str, Any]], None]

_metric_callbacks: list[MetricCallback] = []


def register_metric_callback(callback: MetricCallback) -> None:
    """Register a sink for metric events."""
    _metric_callbacks.append(callback)


def unregister_metric_callback(callback: MetricCallback) -> None:
    """Remove a previously registered sink."""
    if callback in _metric_callbacks:
        _metric_callbacks.remove(callback)


def emit_metric(name: str, value: float, labels: dict[str, Any] | None = None) -> None:
    """Send a metric to every registered sink.

    The current namespace is added as a ``namespace`` label unless the
    caller set one.
    """
    labels = dict(labels or {})
    namespace = namespace_var.get()
    if namespace:
        labels.setdefault("namespace", namespace)

    for callback in _metric_callbacks:
        try:
            callback(name, value, labels)
        except Exception:
            pass  # Don't let metric errors affect main flow


def emit_counter(name: str, labels: dict[str, Any] | None = None) -> None:
    """Emit a counter metric (increment by 1)."""
    emit_metric(name, 1.0, labels)


def emit_timer(name: str, duration_ms: float, labels: dict[str, Any] | None = None) -> None:
    """Emit a timer metric."""
    emit_metric(name, duration_ms, labels)


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format: str = "json",
) -> None:
    """Attach a stdout handler to the clouddown logger hierarchy.

    Args:
        level: Minimum log level
        format: Output format ("json" or "text")
    """
    package_logger = logging.getLogger("clouddown")
    package_logger.setLevel(level.value)
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if format == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
    package_logger.addHandler(handler)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger for a module (typically ``__name__``)."""
    return StructuredLogger(name)
