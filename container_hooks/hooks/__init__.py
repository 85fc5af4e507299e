"""Hook execution: single invocations, fail-fast sequences, phase entry points."""

from container_hooks.hooks.invoker import HookInvoker
from container_hooks.hooks.lifecycle import (
    post_start_hooks,
    post_stop_hooks,
    pre_start_hooks,
    run_phase_hooks,
)
from container_hooks.hooks.runner import HookSequenceRunner

__all__ = [
    "HookInvoker",
    "HookSequenceRunner",
    "pre_start_hooks",
    "post_start_hooks",
    "post_stop_hooks",
    "run_phase_hooks",
]
