"""Lifecycle entry points: run the hooks configured for a phase.

Each entry point is a no-op when the container specification has no hooks
section or no hooks for the phase. The caller decides what a failure means
for the container.
"""

from __future__ import annotations

import os

from container_hooks.config import get_settings
from container_hooks.core.models import ContainerSpec, HookPhase
from container_hooks.hooks.invoker import HookInvoker
from container_hooks.hooks.runner import HookSequenceRunner


def default_runner() -> HookSequenceRunner:
    """Build a runner configured from the current settings."""
    settings = get_settings()
    return HookSequenceRunner(invoker=HookInvoker(pid_source=settings.state_pid_source))


def run_phase_hooks(
    phase: HookPhase,
    spec: ContainerSpec,
    container_id: str,
    bundle_path: str | os.PathLike[str],
    *,
    runner: HookSequenceRunner | None = None,
) -> None:
    """Run the hook list of ``phase`` from ``spec``.

    Raises:
        HookError: The first failing hook's error.
    """
    # If no hook available, nothing needs to be done.
    if spec.hooks is None:
        return
    hooks = spec.hooks.for_phase(phase)
    if not hooks:
        return

    runner = runner or default_runner()
    runner.run(hooks, container_id, bundle_path, phase)


def pre_start_hooks(
    spec: ContainerSpec,
    container_id: str,
    bundle_path: str | os.PathLike[str],
    *,
    runner: HookSequenceRunner | None = None,
) -> None:
    """Run the hooks before the container process starts."""
    run_phase_hooks(HookPhase.PRESTART, spec, container_id, bundle_path, runner=runner)


def post_start_hooks(
    spec: ContainerSpec,
    container_id: str,
    bundle_path: str | os.PathLike[str],
    *,
    runner: HookSequenceRunner | None = None,
) -> None:
    """Run the hooks just after the container process starts."""
    run_phase_hooks(HookPhase.POSTSTART, spec, container_id, bundle_path, runner=runner)


def post_stop_hooks(
    spec: ContainerSpec,
    container_id: str,
    bundle_path: str | os.PathLike[str],
    *,
    runner: HookSequenceRunner | None = None,
) -> None:
    """Run the hooks after the container stops."""
    run_phase_hooks(HookPhase.POSTSTOP, spec, container_id, bundle_path, runner=runner)
