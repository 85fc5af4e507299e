"""Unit tests for the hook error taxonomy."""

from __future__ import annotations

import pytest

from container_hooks.core.errors import (
    ContainerHooksError,
    ExecutionError,
    HookError,
    HookTimeoutError,
    LaunchError,
    SerializationError,
    TerminationError,
)


@pytest.mark.unit
class TestHookErrors:
    @pytest.mark.parametrize(
        "error",
        [
            SerializationError(ValueError("bad"), path="/h"),
            LaunchError(FileNotFoundError(2, "No such file or directory"), path="/h"),
            ExecutionError("exit status 1", path="/h"),
            HookTimeoutError(3, path="/h"),
            TerminationError(ProcessLookupError(3, "No such process"), path="/h"),
        ],
    )
    def test_all_are_hook_errors(self, error: HookError) -> None:
        assert isinstance(error, HookError)
        assert isinstance(error, ContainerHooksError)
        assert error.path == "/h"
        assert error.phase is None

    def test_execution_error_message_carries_output(self) -> None:
        err = ExecutionError("exit status 2", path="/h", stdout="out text", stderr="err text")
        assert str(err) == "exit status 2: stdout: out text, stderr: err text"
        assert err.stdout == "out text"
        assert err.stderr == "err text"
        assert err.cause == "exit status 2"

    def test_timeout_is_distinct_from_execution(self) -> None:
        err = HookTimeoutError(1, path="/h")
        assert str(err) == "Hook timeout"
        assert err.timeout == 1
        assert not isinstance(err, ExecutionError)

    def test_termination_error_keeps_cause(self) -> None:
        cause = ProcessLookupError(3, "No such process")
        err = TerminationError(cause, path="/h")
        assert err.cause is cause
        assert "No such process" in str(err)

    def test_serialization_error_message(self) -> None:
        err = SerializationError(TypeError("not a path"))
        assert str(err) == "Failed to serialize hook state: not a path"
