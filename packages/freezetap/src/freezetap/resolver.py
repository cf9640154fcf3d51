"""Target resolution - turn a selection strategy into a PID.

PUBLIC API:
  - resolve_target: Resolve a SelectionStrategy to PID text
  - needs_session: Whether a strategy depends on the window backends
"""

import logging
from typing import Optional

from .config import Settings
from .errors import NameNotFound
from .process import find_pids_by_name
from .types import ByActiveWindow, ByInteractivePick, ByName, ByPid, SelectionStrategy, SessionContext
from .windows import get_active_window_querier, get_window_picker

logger = logging.getLogger(__name__)


def needs_session(strategy: SelectionStrategy) -> bool:
    """Check if resolving the strategy requires a SessionContext."""
    return isinstance(strategy, (ByActiveWindow, ByInteractivePick))


def _resolve_name(name: str) -> str:
    """Resolve a process name to the last match in ascending PID order.

    With several matches the highest PID wins, so repeated calls against an
    unchanged process table always pick the same process.
    """
    pids = find_pids_by_name(name)
    if not pids:
        raise NameNotFound(name)
    if len(pids) > 1:
        logger.debug(f"{len(pids)} processes named '{name}': {pids}, using {pids[-1]}")
    return str(pids[-1])


def resolve_target(strategy: SelectionStrategy, context: Optional[SessionContext], settings: Settings) -> str:
    """Resolve a selection strategy to PID text.

    The result is not validated here; ``"null"`` from an empty window query
    is rejected later by the controller.

    Args:
        strategy: One of ByActiveWindow, ByPid, ByName, ByInteractivePick.
        context: Session context; required for window-based strategies.
        settings: Runtime settings (query and pick timeouts).

    Raises:
        UnsupportedDesktop: No focused-window backend for the desktop.
        NameNotFound: No process matches the name.
        PickerUnavailable: No usable window picker.
        ToolMissing, ToolFailed, Timeout: External helper failures.
    """
    if isinstance(strategy, ByPid):
        return strategy.value

    if isinstance(strategy, ByName):
        return _resolve_name(strategy.value)

    if context is None:
        raise ValueError(f"Session context required to resolve by {strategy.label}")

    if isinstance(strategy, ByActiveWindow):
        pid = get_active_window_querier(context).active_pid(settings.query_timeout)
    elif isinstance(strategy, ByInteractivePick):
        pid = get_window_picker(context).pick_pid(settings.pick_timeout)
    else:
        raise TypeError(f"Unknown selection strategy: {strategy!r}")

    logger.debug(f"Resolved {strategy.label} to PID {pid}")
    return pid
