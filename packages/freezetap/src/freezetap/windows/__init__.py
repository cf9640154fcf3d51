"""Window-query, window-pick and notification backends.

Backends are chosen from the SessionContext: the desktop identifier first,
then the session type (any X11 session can fall back to xdotool).

PUBLIC API:
  - ActiveWindowQuerier: Protocol for focused-window PID lookup
  - WindowPicker: Protocol for interactive window picking
  - Notifier: Protocol for desktop notifications
  - get_active_window_querier: Backend for the session's focused window
  - get_window_picker: Installed picker for the session
  - get_notifier: Notification dispatcher
"""

import logging
from typing import Callable

from ..errors import PickerUnavailable, UnsupportedDesktop
from ..tools import is_installed
from ..types import SessionContext
from .base import ActiveWindowQuerier, Notifier, WindowPicker
from .hyprland import HyprctlQuerier, HyprpropPicker
from .niri import NiriPicker, NiriQuerier
from .notify import NotifySend
from .sway import SwaymsgQuerier
from .x11 import KdotoolQuerier, XdotoolPicker, XdotoolQuerier

logger = logging.getLogger(__name__)

# loginctl and XDG_CURRENT_DESKTOP spell some desktops differently
_DESKTOP_ALIASES = {
    "plasma": "kde",
    "kde-plasma": "kde",
    "plasmawayland": "kde",
}

_ACTIVE_WINDOW_BACKENDS: dict[str, Callable[[], ActiveWindowQuerier]] = {
    "hyprland": HyprctlQuerier,
    "sway": SwaymsgQuerier,
    "niri": NiriQuerier,
    "kde": KdotoolQuerier,
}

_PICKER_BACKENDS: dict[str, Callable[[], WindowPicker]] = {
    "hyprland": HyprpropPicker,
    "niri": NiriPicker,
}

_X11_QUERIER = XdotoolQuerier
_X11_PICKER = XdotoolPicker


def _desktop_key(context: SessionContext) -> str:
    return _DESKTOP_ALIASES.get(context.desktop, context.desktop)


def get_active_window_querier(context: SessionContext) -> ActiveWindowQuerier:
    """Pick the focused-window backend for the session.

    Raises:
        UnsupportedDesktop: If neither the desktop nor the session type has a backend.
    """
    factory = _ACTIVE_WINDOW_BACKENDS.get(_desktop_key(context))
    if factory is None and context.session_type == "x11":
        factory = _X11_QUERIER
    if factory is None:
        raise UnsupportedDesktop(context.desktop)

    querier = factory()
    logger.debug(f"Active window backend for {context.desktop}/{context.session_type}: {querier.tool}")
    return querier


def get_window_picker(context: SessionContext) -> WindowPicker:
    """Pick an installed interactive window picker for the session.

    Raises:
        PickerUnavailable: With reason "unsupported" if no picker exists for the
            environment, or "not installed" if it exists but is not on PATH.
    """
    factory = _PICKER_BACKENDS.get(_desktop_key(context))
    if factory is None and context.session_type == "x11":
        factory = _X11_PICKER
    if factory is None:
        raise PickerUnavailable(None, f"{context.desktop} ({context.session_type})", "unsupported")

    picker = factory()
    if not is_installed(picker.tool):
        raise PickerUnavailable(picker.tool, context.desktop, "not installed")
    return picker


def get_notifier() -> Notifier:
    """Return the notification dispatcher."""
    return NotifySend()


__all__ = [
    "ActiveWindowQuerier",
    "WindowPicker",
    "Notifier",
    "get_active_window_querier",
    "get_window_picker",
    "get_notifier",
]
