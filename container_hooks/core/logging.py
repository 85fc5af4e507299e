"""Secure structured logging for container hook execution.

Hook failures are logged together with whatever the hook printed, and hook
environments commonly carry credentials, so formatters mask secret-looking
values before a record leaves the process.

Features:
    - Sensitive data masking (passwords, tokens, API keys)
    - JSON structured logging format
    - Span context integration ([span=hook:xxx] prefixes)
    - Hook fields (subsystem, hook_type, error) carried through ``extra``
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

# Patterns to mask in logs
SENSITIVE_PATTERNS = [
    (re.compile(r'api[_-]?key["\']?\s*[:=]\s*["\']?[\w-]+', re.I), "api_key=***MASKED***"),
    (re.compile(r'password["\']?\s*[:=]\s*["\']?[^\s"\',]+', re.I), "password=***MASKED***"),
    (re.compile(r'(\w*token)["\']?\s*[:=]\s*["\']?[^\s"\',]+', re.I), r"\1=***MASKED***"),
    (re.compile(r'(\w*secret)["\']?\s*[:=]\s*["\']?[^\s"\',]+', re.I), r"\1=***MASKED***"),
]

# Record attributes set through ``extra=`` by the hook layer
HOOK_FIELDS = ("subsystem", "hook_type", "hook_name", "error")


def mask_sensitive(text: str) -> str:
    """Replace secret-looking values in ``text``."""
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _get_span_context() -> tuple[str | None, str | None]:
    """Get the current span without importing at module level.

    Returns:
        Tuple of (span_name, span_id) or (None, None) outside any span.
    """
    # Import here to avoid circular imports
    from container_hooks.core.tracing import get_current_span

    current = get_current_span()
    if current:
        return current.name, current.span_id
    return None, None


class SecureFormatter(logging.Formatter):
    """Formatter that masks sensitive data and includes span context."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        include_trace_context: bool = True,
    ) -> None:
        """Initialize the secure formatter.

        Args:
            fmt: Format string for log messages.
            datefmt: Date format string.
            include_trace_context: Whether to include the [span=name:id] prefix.
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.include_trace_context = include_trace_context

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        fields = [
            f"{name}={getattr(record, name)}"
            for name in HOOK_FIELDS
            if getattr(record, name, None) is not None
        ]
        if fields:
            message = f"{message} ({', '.join(fields)})"

        if self.include_trace_context:
            span_name, span_id = _get_span_context()
            if span_id:
                prefix = f"[span={span_name}:{span_id}] "
                # Format: "2024-01-15 10:30:00 - logger - LEVEL - message"
                # Becomes: "2024-01-15 10:30:00 - logger - LEVEL - [span=x:y] message"
                parts = message.split(" - ", 3)
                if len(parts) == 4:
                    message = f"{parts[0]} - {parts[1]} - {parts[2]} - {prefix}{parts[3]}"
                else:
                    message = prefix + message

        return mask_sensitive(message)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging with span context."""

    def __init__(self, include_trace_context: bool = True, mask: bool = True) -> None:
        """Initialize the JSON formatter.

        Args:
            include_trace_context: Whether to include span and span_id fields.
            mask: Whether to mask sensitive data.
        """
        super().__init__()
        self.include_trace_context = include_trace_context
        self.mask = mask

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, str | None] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in HOOK_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = str(value)

        if self.include_trace_context:
            span_name, span_id = _get_span_context()
            if span_id:
                log_data["span"] = span_name
                log_data["span_id"] = span_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        json_str = json.dumps(log_data)
        if self.mask:
            json_str = mask_sensitive(json_str)
        return json_str


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    mask_sensitive: bool = True,
    include_trace_context: bool = True,
) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_format: Use JSON format for structured logging.
        mask_sensitive: Mask sensitive data in logs.
        include_trace_context: Include [span=name:id] in log messages.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Hook output goes to stderr; stdout stays free for callers
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    if json_format:
        formatter: logging.Formatter = JSONFormatter(
            include_trace_context=include_trace_context, mask=mask_sensitive
        )
    elif mask_sensitive:
        formatter = SecureFormatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            include_trace_context=include_trace_context,
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


class HookLoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that tags records with the hook subsystem.

    Per-call ``extra`` values are merged over the adapter's own, so a call
    can add fields such as ``hook_type`` without losing ``subsystem``.
    """

    def process(self, msg, kwargs):  # type: ignore[no-untyped-def]
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def get_hook_logger(logger: logging.Logger | None = None) -> HookLoggerAdapter:
    """Wrap ``logger`` (default ``container_hooks.hooks``) for hook messages."""
    base = logger or logging.getLogger("container_hooks.hooks")
    return HookLoggerAdapter(base, {"subsystem": "hook"})
