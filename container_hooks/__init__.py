"""Container lifecycle hooks - run OCI prestart, poststart and poststop hooks."""

__version__ = "0.1.0"

from container_hooks.config import Settings, get_settings
from container_hooks.core import (
    ConfigurationError,
    ContainerHooksError,
    ContainerRuntimeState,
    ContainerSpec,
    ExecutionError,
    HookError,
    HookPhase,
    Hooks,
    HookSpec,
    HookTimeoutError,
    LaunchError,
    NoopTracer,
    RecordingTracer,
    SerializationError,
    SpecLoadError,
    TerminationError,
    Tracer,
)
from container_hooks.hooks import (
    HookInvoker,
    HookSequenceRunner,
    post_start_hooks,
    post_stop_hooks,
    pre_start_hooks,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
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
    "NoopTracer",
    "RecordingTracer",
    # Hook execution
    "HookInvoker",
    "HookSequenceRunner",
    "pre_start_hooks",
    "post_start_hooks",
    "post_stop_hooks",
]
