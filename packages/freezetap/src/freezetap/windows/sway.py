"""Sway backend: walk the ``swaymsg -t get_tree`` layout tree for the focused node."""

import json
import logging
from typing import Any, Optional

from ..tools import NULL_PID, check_output

logger = logging.getLogger(__name__)


def find_focused(node: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Depth-first search for the node with ``focused: true``."""
    if node.get("focused"):
        return node
    for child in node.get("nodes", []) + node.get("floating_nodes", []):
        found = find_focused(child)
        if found is not None:
            return found
    return None


class SwaymsgQuerier:
    """Active window via ``swaymsg -t get_tree``."""

    tool = "swaymsg"

    def active_pid(self, timeout: float) -> str:
        output = check_output([self.tool, "-t", "get_tree"], timeout)
        try:
            tree = json.loads(output)
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable sway tree: {e}")
            return NULL_PID

        focused = find_focused(tree) if isinstance(tree, dict) else None
        # Workspaces and outputs can hold focus but carry no pid
        if not focused or focused.get("pid") is None:
            return NULL_PID
        return str(focused["pid"])
