"""niri backends, both served by ``niri msg --json``."""

from ..tools import check_output, parse_pid_json


class NiriQuerier:
    """Active window via ``niri msg --json focused-window`` (prints null when none)."""

    tool = "niri"

    def active_pid(self, timeout: float) -> str:
        return parse_pid_json(check_output([self.tool, "msg", "--json", "focused-window"], timeout))


class NiriPicker:
    """Interactive pick via ``niri msg --json pick-window``."""

    tool = "niri"

    def pick_pid(self, timeout: float) -> str:
        return parse_pid_json(check_output([self.tool, "msg", "--json", "pick-window"], timeout))
