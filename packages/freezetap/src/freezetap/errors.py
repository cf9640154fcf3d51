"""Exception hierarchy for freezetap.

Every failure is terminal for the invocation. Each exception carries the exit
code the CLI maps it to, so the top-level handler only has to read
``exc.exit_code``.

PUBLIC API:
  - FreezetapError: Base exception for all freezetap failures
  - EnvironmentUndetectable: Session type or desktop could not be determined
  - UnsupportedDesktop: No active-window backend for the desktop
  - NameNotFound: No process matches the requested name
  - PickerUnavailable: No window picker installed or supported
  - InvalidPid: PID text is not a non-negative integer
  - ProcessNotFound: PID does not exist
  - SelfTargetRejected: Target tree contains freezetap itself
  - SignalDeliveryFailed: Root process could not be signalled
  - Timeout: External query did not finish in time
  - ToolMissing: Required external helper is not installed
  - ToolFailed: External helper exited with an error
"""

from typing import Literal

EXIT_FAILURE = 1
EXIT_INVALID_PID = 2
EXIT_TOOL_MISSING = 127
EXIT_NOT_FOUND = 130


class FreezetapError(Exception):
    """Base exception for all freezetap failures."""

    exit_code = EXIT_FAILURE


class EnvironmentUndetectable(FreezetapError):
    """Raised when neither loginctl nor the environment yield session type and desktop."""

    exit_code = EXIT_NOT_FOUND


class UnsupportedDesktop(FreezetapError):
    """Raised when the desktop has no active-window backend."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, desktop: str):
        super().__init__(f"Unsupported desktop environment: {desktop or 'unknown'}")
        self.desktop = desktop


class NameNotFound(FreezetapError):
    """Raised when no process matches the requested name."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"No process named '{name}'")
        self.name = name


class PickerUnavailable(FreezetapError):
    """Raised when no window picker can be used.

    ``reason`` tells apart a picker that is known but not installed from an
    environment that has no picker at all.
    """

    def __init__(self, tool: str | None, environment: str, reason: Literal["not installed", "unsupported"]):
        if reason == "not installed":
            message = f"Window picker '{tool}' is not installed"
        else:
            message = f"No window picker available for {environment}"
        super().__init__(message)
        self.tool = tool
        self.environment = environment
        self.reason = reason
        self.exit_code = EXIT_TOOL_MISSING if reason == "not installed" else EXIT_NOT_FOUND


class InvalidPid(FreezetapError):
    """Raised when a PID is not a non-negative integer (e.g. "null" from an empty query)."""

    exit_code = EXIT_INVALID_PID

    def __init__(self, value: object):
        super().__init__(f"Invalid PID: {value!r}")
        self.value = value


class ProcessNotFound(FreezetapError):
    """Raised when the target PID does not exist."""

    exit_code = EXIT_NOT_FOUND

    def __init__(self, pid: int):
        super().__init__(f"Process {pid} not found")
        self.pid = pid


class SelfTargetRejected(FreezetapError):
    """Raised when the target tree contains the running freezetap process."""

    def __init__(self, pid: int, own_pid: int):
        super().__init__(f"Refusing to toggle PID {pid}: its tree contains freezetap itself (PID {own_pid})")
        self.pid = pid
        self.own_pid = own_pid


class SignalDeliveryFailed(FreezetapError):
    """Raised when the root process of the tree cannot be signalled."""

    def __init__(self, pid: int, reason: str):
        super().__init__(f"Failed to signal PID {pid}: {reason}")
        self.pid = pid
        self.reason = reason


class Timeout(FreezetapError):
    """Raised when an external query exceeds its time budget."""

    def __init__(self, tool: str, seconds: float):
        super().__init__(f"'{tool}' did not respond within {seconds:g}s")
        self.tool = tool
        self.seconds = seconds


class ToolMissing(FreezetapError):
    """Raised when a required external helper is not installed."""

    exit_code = EXIT_TOOL_MISSING

    def __init__(self, tool: str):
        super().__init__(f"Required tool '{tool}' is not installed")
        self.tool = tool


class ToolFailed(FreezetapError):
    """Raised when an external helper exits with an error or cannot be executed.

    ``returncode`` is None when the helper never started.
    """

    def __init__(self, tool: str, returncode: int | None, stderr: str = ""):
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        if returncode is None:
            super().__init__(f"'{tool}' could not be run{detail}")
        else:
            super().__init__(f"'{tool}' exited with code {returncode}{detail}")
        self.tool = tool
        self.returncode = returncode
