"""Hyprland backends: hyprctl for the focused window, hyprprop for picking."""

from ..tools import check_output, parse_pid_json


class HyprctlQuerier:
    """Active window via ``hyprctl activewindow -j``."""

    tool = "hyprctl"

    def active_pid(self, timeout: float) -> str:
        return parse_pid_json(check_output([self.tool, "activewindow", "-j"], timeout))


class HyprpropPicker:
    """Interactive pick via ``hyprprop``, which prints the window's JSON properties."""

    tool = "hyprprop"

    def pick_pid(self, timeout: float) -> str:
        return parse_pid_json(check_output([self.tool], timeout))
