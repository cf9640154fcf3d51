"""External helper execution - shared by session detection, window backends and notifications.

PUBLIC API:
  - run_tool: Execute an external command and return (returncode, stdout, stderr)
  - check_output: Execute a command and return stdout, raising on non-zero exit
  - parse_pid_json: Extract the "pid" field from a JSON object
  - is_installed: Check whether a helper is on PATH
"""

import json
import logging
import shutil
import subprocess
from typing import List, Tuple

from .errors import Timeout, ToolFailed, ToolMissing

logger = logging.getLogger(__name__)

# Printed in place of a pid when a query finds no window
NULL_PID = "null"


def is_installed(tool: str) -> bool:
    """Check whether a helper binary is on PATH."""
    return shutil.which(tool) is not None


def run_tool(args: List[str], timeout: float) -> Tuple[int, str, str]:
    """Run an external command, return (returncode, stdout, stderr).

    Args:
        args: Command and arguments.
        timeout: Seconds before the command is abandoned.

    Raises:
        ToolMissing: If the binary does not exist.
        ToolFailed: If the binary exists but cannot be executed.
        Timeout: If the command runs longer than ``timeout``.
    """
    logger.debug(f"Running: {' '.join(args)}")
    try:
        # Helpers may print window titles in any encoding
        result = subprocess.run(
            args, capture_output=True, text=True, encoding="utf-8", errors="replace", timeout=timeout
        )
    except FileNotFoundError:
        raise ToolMissing(args[0])
    except subprocess.TimeoutExpired:
        raise Timeout(args[0], timeout)
    except OSError as e:
        raise ToolFailed(args[0], None, e.strerror or str(e))

    logger.debug(f"{args[0]} exited {result.returncode}: {result.stdout.strip()[:200]!r}")
    return result.returncode, result.stdout, result.stderr


def check_output(args: List[str], timeout: float) -> str:
    """Run an external command and return its stdout.

    Raises:
        ToolFailed: If the command exits non-zero.
    """
    code, stdout, stderr = run_tool(args, timeout)
    if code != 0:
        raise ToolFailed(args[0], code, stderr)
    return stdout


def parse_pid_json(text: str) -> str:
    """Extract the pid field of a JSON object as text.

    Window-manager queries print ``{}`` or ``null`` when nothing is focused;
    those come back as ``"null"`` so the controller rejects them as invalid.

    Args:
        text: JSON document printed by the helper.
    """
    try:
        data = json.loads(text) if text.strip() else None
    except json.JSONDecodeError as e:
        logger.debug(f"Unparseable JSON from window query: {e}")
        return NULL_PID

    if not isinstance(data, dict):
        return NULL_PID

    pid = data.get("pid")
    if pid is None:
        return NULL_PID
    return str(pid)
