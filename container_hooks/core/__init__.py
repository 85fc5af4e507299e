"""Core components for container lifecycle hooks."""

from container_hooks.core.errors import (
    ConfigurationError,
    ContainerHooksError,
    ExecutionError,
    HookError,
    HookTimeoutError,
    LaunchError,
    SerializationError,
    SpecLoadError,
    TerminationError,
)
from container_hooks.core.models import (
    ContainerRuntimeState,
    ContainerSpec,
    HookPhase,
    Hooks,
    HookSpec,
)
from container_hooks.core.tracing import (
    LoggingTracer,
    NoopTracer,
    RecordingTracer,
    Span,
    Tracer,
    span,
)

__all__ = [
    # Errors
    "ContainerHooksError",
    "ConfigurationError",
    "SpecLoadError",
    "HookError",
    "SerializationError",
    "LaunchError",
    "ExecutionError",
    "HookTimeoutError",
    "TerminationError",
    # Models
    "HookPhase",
    "HookSpec",
    "Hooks",
    "ContainerSpec",
    "ContainerRuntimeState",
    # Tracing
    "Tracer",
    "Span",
    "NoopTracer",
    "RecordingTracer",
    "LoggingTracer",
    "span",
]
