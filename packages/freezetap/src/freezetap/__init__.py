"""Suspend and resume whole process trees from the desktop.

Picks a target by focused window, PID, process name or an interactive window
pick, then stops or continues the target and every descendant with POSIX
signals.

PUBLIC API:
  - toggle: Suspend or resume a process tree
  - detect_session: Resolve session type and desktop
  - resolve_target: Resolve a selection strategy to a PID
  - __version__: Package version string
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("freezetap")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .process import toggle  # noqa: E402
from .resolver import resolve_target  # noqa: E402
from .session import detect_session  # noqa: E402

__all__ = ["toggle", "detect_session", "resolve_target", "__version__"]
