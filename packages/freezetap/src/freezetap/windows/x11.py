"""Plain-text backends: xdotool on X11 and kdotool on KDE Plasma.

Both print the bare PID on stdout.
"""

from ..tools import NULL_PID, check_output


def _first_line(output: str) -> str:
    lines = output.strip().splitlines()
    return lines[0].strip() if lines else NULL_PID


class XdotoolQuerier:
    """Active window via ``xdotool getactivewindow getwindowpid``."""

    tool = "xdotool"

    def active_pid(self, timeout: float) -> str:
        return _first_line(check_output([self.tool, "getactivewindow", "getwindowpid"], timeout))


class XdotoolPicker:
    """Interactive pick via ``xdotool selectwindow getwindowpid``."""

    tool = "xdotool"

    def pick_pid(self, timeout: float) -> str:
        return _first_line(check_output([self.tool, "selectwindow", "getwindowpid"], timeout))


class KdotoolQuerier:
    """Active window on KDE Plasma via ``kdotool getactivewindow getwindowpid``."""

    tool = "kdotool"

    def active_pid(self, timeout: float) -> str:
        return _first_line(check_output([self.tool, "getactivewindow", "getwindowpid"], timeout))
