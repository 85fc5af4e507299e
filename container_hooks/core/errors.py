"""Custom exceptions for container lifecycle hook execution."""

from __future__ import annotations


class ContainerHooksError(Exception):
    """Base exception for all container hook errors."""

    pass


class ConfigurationError(ContainerHooksError):
    """Raised when configuration is invalid."""

    pass


class SpecLoadError(ContainerHooksError):
    """Raised when an OCI container specification cannot be loaded."""

    pass


# =============================================================================
# Hook execution errors
# =============================================================================


class HookError(ContainerHooksError):
    """Base exception for a failed hook execution.

    Attributes:
        path: Path of the hook executable.
        cause: The underlying error (OS error, exit status, ...), if any.
        stdout: Text the hook wrote to standard output before failing.
        stderr: Text the hook wrote to standard error before failing.
        phase: Lifecycle phase label ("pre-start", ...). Set by the
            sequence runner when the failure is propagated.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        cause: BaseException | str | None = None,
        stdout: str = "",
        stderr: str = "",
        phase: str | None = None,
    ) -> None:
        self.path = path
        self.cause = cause
        self.stdout = stdout
        self.stderr = stderr
        self.phase = phase
        super().__init__(message)


class SerializationError(HookError):
    """Raised when the runtime state payload cannot be serialized.

    No process is launched when this is raised.
    """

    def __init__(self, cause: BaseException, *, path: str = "") -> None:
        super().__init__(f"Failed to serialize hook state: {cause}", path=path, cause=cause)


class LaunchError(HookError):
    """Raised when the hook executable cannot be started."""

    def __init__(self, cause: OSError, *, path: str = "") -> None:
        super().__init__(str(cause), path=path, cause=cause)


class ExecutionError(HookError):
    """Raised when a hook exits non-zero or waiting on it fails.

    The message combines the cause with both captured streams.
    """

    def __init__(
        self,
        cause: BaseException | str,
        *,
        path: str = "",
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"{cause}: stdout: {stdout}, stderr: {stderr}",
            path=path,
            cause=cause,
            stdout=stdout,
            stderr=stderr,
        )


class HookTimeoutError(HookError):
    """Raised when a hook exceeds its deadline and was killed.

    Note: Named HookTimeoutError to avoid shadowing Python's built-in TimeoutError.
    """

    def __init__(self, timeout: int, *, path: str = "") -> None:
        self.timeout = timeout
        super().__init__("Hook timeout", path=path)


class TerminationError(HookError):
    """Raised when killing a timed-out hook fails.

    Surfaces instead of HookTimeoutError, typically when the process
    exited on its own between the deadline and the kill.
    """

    def __init__(self, cause: OSError, *, path: str = "") -> None:
        super().__init__(str(cause), path=path, cause=cause)
