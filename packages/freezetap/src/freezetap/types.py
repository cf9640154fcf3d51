"""Type definitions for freezetap.

Everything here lives for a single invocation. Nothing is cached between runs
because process trees and window focus are point-in-time facts.
"""

from dataclasses import dataclass, field
from typing import Literal


type ProcessId = int
type ProcessState = Literal["running", "stopped"]
type SessionType = str  # "wayland", "x11", "tty", ...
type Desktop = str  # "hyprland", "sway", "kde", ...


@dataclass(frozen=True)
class SessionContext:
    """Session type and desktop identifier, both lowercased."""

    session_type: SessionType
    desktop: Desktop


@dataclass(frozen=True)
class ByActiveWindow:
    """Target the process owning the focused window."""

    label = "active window"


@dataclass(frozen=True)
class ByPid:
    """Target a literal pid, validated later by the controller."""

    value: str
    label = "pid"


@dataclass(frozen=True)
class ByName:
    """Target a process by its name (comm)."""

    value: str
    label = "name"


@dataclass(frozen=True)
class ByInteractivePick:
    """Target the process owning a window picked with the mouse."""

    label = "window pick"


type SelectionStrategy = ByActiveWindow | ByPid | ByName | ByInteractivePick


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a tree-wide toggle.

    Attributes:
        pid: Root process ID.
        new_state: State the root is in after the toggle (or would be, on dry run).
        process_name: Root process name, read before signalling.
        dry_run: True when no signal was sent.
        signalled: PIDs that received the signal.
        failed: PIDs that could not be signalled (exited, permission denied).
    """

    pid: ProcessId
    new_state: ProcessState
    process_name: str
    dry_run: bool = False
    signalled: tuple[ProcessId, ...] = field(default_factory=tuple)
    failed: tuple[ProcessId, ...] = field(default_factory=tuple)

    @property
    def action(self) -> str:
        """Verb describing what happened to the tree."""
        return "suspended" if self.new_state == "stopped" else "resumed"
