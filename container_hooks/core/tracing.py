"""Span tracing for hook execution.

The hook layer reports what it does to an injected ``Tracer``: one span per
lifecycle phase (``hooks``) and one per hook execution (``hook``). Tracing
is advisory; a tracer never influences the outcome of a hook.

The span currently open on this thread/task is kept in a context variable so
log formatters can tag records with it.

Usage:
    from container_hooks.core.tracing import RecordingTracer, span

    tracer = RecordingTracer()
    with span(tracer, "hooks", {"subsystem": "pre-start"}):
        with span(tracer, "hook", {"hook-name": "/usr/bin/setup-net"}):
            ...  # run the hook

    for finished in tracer.finished:
        print(finished.name, finished.tags, f"{finished.duration_ms:.2f}ms")
"""

from __future__ import annotations

import contextvars
import logging
import threading
import time
import uuid
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass
class Span:
    """A named, tagged unit of work.

    Attributes:
        name: Span name ("hooks", "hook", ...).
        tags: Key/value tags attached to the span.
        span_id: Short unique identifier (first 12 chars of a UUID).
        parent_id: span_id of the enclosing span, if any.
        start: perf_counter value when the span was opened.
        duration_ms: Set when the span is finished.
    """

    name: str
    tags: dict[str, str] = field(default_factory=dict)
    span_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    parent_id: str | None = None
    start: float = field(default_factory=time.perf_counter)
    duration_ms: float | None = None

    def set_tag(self, key: str, value: str) -> None:
        self.tags[key] = value

    def finish(self) -> None:
        """Record the span duration. Finishing twice keeps the first value."""
        if self.duration_ms is None:
            self.duration_ms = (time.perf_counter() - self.start) * 1000

    @property
    def finished(self) -> bool:
        return self.duration_ms is not None


@runtime_checkable
class Tracer(Protocol):
    """Observability collaborator receiving hook spans."""

    def start_span(self, name: str, tags: Mapping[str, str] | None = None) -> Span:
        """Begin a named span with tags."""
        ...

    def finish_span(self, span: Span) -> None:
        """End a span previously returned by start_span."""
        ...


class NoopTracer:
    """Tracer that discards everything."""

    def start_span(self, name: str, tags: Mapping[str, str] | None = None) -> Span:
        return Span(name=name, tags=dict(tags or {}), parent_id=_parent_id())

    def finish_span(self, span: Span) -> None:
        pass


class RecordingTracer:
    """Tracer that keeps every finished span in memory.

    Thread Safety:
        Spans may be finished from any thread; the list is lock protected.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._finished: list[Span] = []

    def start_span(self, name: str, tags: Mapping[str, str] | None = None) -> Span:
        return Span(name=name, tags=dict(tags or {}), parent_id=_parent_id())

    def finish_span(self, span: Span) -> None:
        span.finish()
        with self._lock:
            self._finished.append(span)

    @property
    def finished(self) -> list[Span]:
        """Finished spans in completion order."""
        with self._lock:
            return list(self._finished)

    def by_name(self, name: str) -> list[Span]:
        return [s for s in self.finished if s.name == name]


class LoggingTracer:
    """Tracer that writes span boundaries to a logger at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def start_span(self, name: str, tags: Mapping[str, str] | None = None) -> Span:
        span = Span(name=name, tags=dict(tags or {}), parent_id=_parent_id())
        self._logger.debug("span start %s[%s] %s", span.name, span.span_id, span.tags)
        return span

    def finish_span(self, span: Span) -> None:
        span.finish()
        self._logger.debug(
            "span finish %s[%s] %.2fms", span.name, span.span_id, span.duration_ms
        )


# Context variable for the innermost open span
_current_span: contextvars.ContextVar[Span | None] = contextvars.ContextVar(
    "current_span", default=None
)


def _parent_id() -> str | None:
    parent = _current_span.get()
    return parent.span_id if parent else None


def get_current_span() -> Span | None:
    """Get the innermost span opened with ``span()`` in this context."""
    return _current_span.get()


@contextmanager
def span(
    tracer: Tracer,
    name: str,
    tags: Mapping[str, str] | None = None,
) -> Generator[Span, None, None]:
    """Open a span on ``tracer`` for the duration of the block.

    The span becomes the current span while the block runs and is finished
    even when the block raises.

    Args:
        tracer: Tracer receiving the span.
        name: Span name.
        tags: Initial tags.

    Yields:
        The open Span, so callers can add tags.
    """
    current = tracer.start_span(name, tags)
    token = _current_span.set(current)
    try:
        yield current
    finally:
        _current_span.reset(token)
        current.finish()
        tracer.finish_span(current)


def format_span_prefix() -> str:
    """Format the current span as a log prefix.

    Returns:
        A string like "[span=hook:abc123def456]" or "" outside any span.
    """
    current = get_current_span()
    if current is None:
        return ""
    return f"[span={current.name}:{current.span_id}]"
