"""Capability interfaces implemented by the window and notification backends.

Backends are plain classes that satisfy these protocols structurally; there is
no shared base class.
"""

from typing import Protocol


class ActiveWindowQuerier(Protocol):
    """Finds the PID owning the focused window."""

    tool: str

    def active_pid(self, timeout: float) -> str:
        """Return the PID as text, or "null" when nothing is focused."""
        ...


class WindowPicker(Protocol):
    """Lets the user click a window and returns its owning PID."""

    tool: str

    def pick_pid(self, timeout: float) -> str:
        """Return the PID as text, or "null" when the pick was cancelled."""
        ...


class Notifier(Protocol):
    """Sends a desktop notification."""

    tool: str

    def send(self, title: str, body: str, timeout_ms: int, app_name: str, timeout: float) -> None:
        """Dispatch one notification. Raises FreezetapError on failure."""
        ...
