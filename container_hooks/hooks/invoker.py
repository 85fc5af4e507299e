"""Execution of a single container lifecycle hook.

A hook is launched as a child process with the container state document on
its standard input. Output is captured for diagnostics only; the exit status
decides success.

Without a timeout the caller blocks on the process directly. With a timeout,
one background thread performs the blocking wait while the caller joins it
against the deadline. If the deadline wins, the process receives SIGKILL
with no grace period and the timeout is reported at once; the daemon wait
thread reaps the process in the background, since children of the hook may
keep its pipes open past the kill.
"""

from __future__ import annotations

import errno
import logging
import os
import signal
import subprocess
import threading
from typing import Literal

from container_hooks.core.errors import (
    ExecutionError,
    HookTimeoutError,
    LaunchError,
    SerializationError,
    TerminationError,
)
from container_hooks.core.logging import get_hook_logger
from container_hooks.core.models import ContainerRuntimeState, HookSpec
from container_hooks.core.tracing import NoopTracer, Tracer, span

PidSource = Literal["thread", "process"]


def _describe_exit(returncode: int) -> str:
    """Describe a non-zero return code the way a shell would."""
    if returncode < 0:
        try:
            return f"signal: {signal.Signals(-returncode).name}"
        except ValueError:
            return f"signal: {-returncode}"
    return f"exit status {returncode}"


def _decode(data: bytes | None) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


class HookInvoker:
    """Run one hook to completion, timeout or failure.

    Example:
        invoker = HookInvoker()
        invoker.invoke(HookSpec(path="/usr/bin/true"), "c1", "/run/bundles/c1")

    Thread Safety:
        An invoker holds no per-call state and may be shared; each call owns
        its process, pipes and wait thread.
    """

    def __init__(
        self,
        tracer: Tracer | None = None,
        logger: logging.Logger | None = None,
        pid_source: PidSource = "thread",
    ) -> None:
        """Initialize the invoker.

        Args:
            tracer: Receives one "hook" span per invocation.
            logger: Base logger; records are tagged subsystem=hook.
            pid_source: "thread" reports the invoking thread's native id as
                the state pid, "process" reports os.getpid().
        """
        self._tracer = tracer or NoopTracer()
        self._logger = get_hook_logger(logger)
        self._pid_source = pid_source

    def invoke(self, hook: HookSpec, container_id: str, bundle_path: str | os.PathLike[str]) -> None:
        """Execute ``hook`` exactly once.

        Args:
            hook: The hook to run.
            container_id: Container id written to the state document.
            bundle_path: Bundle directory written to the state document.

        Raises:
            SerializationError: The state document could not be built.
            LaunchError: The executable could not be started.
            ExecutionError: The hook exited non-zero or could not be waited on.
            HookTimeoutError: The hook outlived its timeout and was killed.
            TerminationError: Killing the timed-out hook failed.
        """
        tags = {
            "subsystem": "runHook",
            "hook-name": hook.path,
            "hook-args": hook.joined_args(),
        }
        with span(self._tracer, "hook", tags):
            state = self._serialize_state(hook, container_id, bundle_path)
            proc = self._launch(hook)

            if hook.timeout is None:
                self._wait(hook, proc, state)
            else:
                self._wait_with_timeout(hook, proc, state, hook.timeout)

    def _state_pid(self) -> int:
        if self._pid_source == "process":
            return os.getpid()
        return threading.get_native_id()

    def _serialize_state(
        self, hook: HookSpec, container_id: str, bundle_path: str | os.PathLike[str]
    ) -> bytes:
        try:
            state = ContainerRuntimeState(
                pid=self._state_pid(),
                bundle_path=os.fspath(bundle_path),
                id=container_id,
            )
            return state.to_json().encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(e, path=hook.path) from e

    def _launch(self, hook: HookSpec) -> subprocess.Popen[bytes]:
        try:
            proc = subprocess.Popen(
                hook.argv(),
                executable=hook.path,
                env=hook.env_mapping(),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise LaunchError(e, path=hook.path) from e

        self._logger.debug(
            "Started hook %s (pid=%d, timeout=%s)",
            hook.path,
            proc.pid,
            hook.timeout,
            extra={"hook_name": hook.path},
        )
        return proc

    def _wait(self, hook: HookSpec, proc: subprocess.Popen[bytes], state: bytes) -> None:
        try:
            stdout, stderr = proc.communicate(input=state)
        except OSError as e:
            raise ExecutionError(e, path=hook.path) from e
        self._check_exit(hook, proc.returncode, stdout, stderr)

    def _wait_with_timeout(
        self,
        hook: HookSpec,
        proc: subprocess.Popen[bytes],
        state: bytes,
        timeout: int,
    ) -> None:
        outcome: dict[str, object] = {}

        def wait_for_exit() -> None:
            try:
                outcome["output"] = proc.communicate(input=state)
            except Exception as e:
                # Handed back to the invoking thread below
                outcome["error"] = e

        waiter = threading.Thread(
            target=wait_for_exit,
            name=f"hook-wait-{proc.pid}",
            daemon=True,
        )
        waiter.start()
        waiter.join(timeout)

        if waiter.is_alive():
            try:
                self._kill(proc)
            except OSError as e:
                raise TerminationError(e, path=hook.path) from e

            self._logger.warning(
                "Hook %s exceeded %ds timeout, killed pid %d",
                hook.path,
                timeout,
                proc.pid,
                extra={"hook_name": hook.path},
            )
            raise HookTimeoutError(timeout, path=hook.path)

        error = outcome.get("error")
        if isinstance(error, BaseException):
            raise ExecutionError(error, path=hook.path) from error

        stdout, stderr = outcome["output"]  # type: ignore[misc]
        self._check_exit(hook, proc.returncode, stdout, stderr)

    def _kill(self, proc: subprocess.Popen[bytes]) -> None:
        """Send SIGKILL to a timed-out hook.

        A hook that exited between the deadline and this call is reported as
        ESRCH rather than signalled, since its pid may already be reused.
        """
        if proc.returncode is not None:
            raise ProcessLookupError(errno.ESRCH, os.strerror(errno.ESRCH))
        os.kill(proc.pid, signal.SIGKILL)

    def _check_exit(
        self,
        hook: HookSpec,
        returncode: int | None,
        stdout: bytes | None,
        stderr: bytes | None,
    ) -> None:
        if returncode == 0:
            return
        cause = _describe_exit(returncode) if returncode is not None else "wait failed"
        raise ExecutionError(
            cause,
            path=hook.path,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
        )
