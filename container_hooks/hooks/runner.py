"""Fail-fast execution of an ordered hook list for one lifecycle phase."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from container_hooks.core.errors import HookError
from container_hooks.core.logging import get_hook_logger
from container_hooks.core.models import HookPhase, HookSpec
from container_hooks.core.tracing import NoopTracer, Tracer, span
from container_hooks.hooks.invoker import HookInvoker


class HookSequenceRunner:
    """Run hooks one after another, stopping at the first failure.

    Hook N+1 is started only after hook N has succeeded. A failure is logged,
    stamped with the phase label and re-raised as the same exception object.

    Example:
        runner = HookSequenceRunner()
        runner.run(spec.hooks.prestart, "c1", "/run/bundles/c1", HookPhase.PRESTART)
    """

    def __init__(
        self,
        invoker: HookInvoker | None = None,
        tracer: Tracer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            invoker: Executes individual hooks. Defaults to a HookInvoker
                sharing this runner's tracer and logger.
            tracer: Receives one "hooks" span per run.
            logger: Base logger for failure records.
        """
        self._tracer = tracer or NoopTracer()
        self._invoker = invoker or HookInvoker(tracer=self._tracer, logger=logger)
        self._logger = get_hook_logger(logger)

    @property
    def invoker(self) -> HookInvoker:
        return self._invoker

    def run(
        self,
        hooks: Sequence[HookSpec] | None,
        container_id: str,
        bundle_path: str | os.PathLike[str],
        phase: HookPhase | str,
    ) -> None:
        """Execute ``hooks`` in order.

        Args:
            hooks: Hooks to run; None or empty is a no-op.
            container_id: Container id passed to every hook.
            bundle_path: Bundle directory passed to every hook.
            phase: Lifecycle phase, used as the diagnostic label.

        Raises:
            HookError: The first failure, with ``phase`` set.
        """
        label = phase.value if isinstance(phase, HookPhase) else phase

        with span(self._tracer, "hooks", {"subsystem": label}):
            for hook in hooks or ():
                try:
                    self._invoker.invoke(hook, container_id, bundle_path)
                except HookError as e:
                    e.phase = label
                    self._logger.error(
                        "hook error",
                        extra={"hook_type": label, "hook_name": hook.path, "error": str(e)},
                    )
                    raise
