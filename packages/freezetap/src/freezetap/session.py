"""Session type and desktop environment detection.

PUBLIC API:
  - detect_session: Resolve SessionContext from loginctl, falling back to environment variables
"""

import logging
import os
from typing import Mapping, Optional, Tuple

from .errors import EnvironmentUndetectable, FreezetapError
from .tools import run_tool
from .types import SessionContext

logger = logging.getLogger(__name__)


def _parse_properties(text: str) -> dict[str, str]:
    """Parse ``Key=Value`` lines printed by ``loginctl show-*``."""
    props = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            props[key.strip()] = value.strip()
    return props


def _find_session_id(env: Mapping[str, str], timeout: float) -> Optional[str]:
    """Find the login session of the current user."""
    session_id = env.get("XDG_SESSION_ID")
    if session_id:
        return session_id

    code, stdout, _ = run_tool(["loginctl", "show-user", str(os.getuid()), "-p", "Display", "--value"], timeout)
    if code == 0 and stdout.strip():
        return stdout.strip()
    return None


def _query_loginctl(env: Mapping[str, str], timeout: float) -> Tuple[str, str]:
    """Ask loginctl for the session Type and Desktop fields.

    Returns:
        (type, desktop); either may be empty.
    """
    try:
        session_id = _find_session_id(env, timeout)
        if not session_id:
            logger.debug("No login session found via loginctl")
            return "", ""

        code, stdout, stderr = run_tool(["loginctl", "show-session", session_id, "-p", "Type", "-p", "Desktop"], timeout)
    except FreezetapError as e:
        logger.debug(f"loginctl unavailable: {e}")
        return "", ""

    if code != 0:
        logger.debug(f"loginctl show-session {session_id} failed: {stderr.strip()}")
        return "", ""

    props = _parse_properties(stdout)
    return props.get("Type", ""), props.get("Desktop", "")


def _from_environment(env: Mapping[str, str]) -> Tuple[str, str]:
    """Read the environment-variable equivalents of Type and Desktop."""
    session_type = env.get("XDG_SESSION_TYPE", "")
    # XDG_CURRENT_DESKTOP may be a list such as "KDE:plasma"
    desktop = env.get("XDG_CURRENT_DESKTOP", "").split(":")[0] or env.get("DESKTOP_SESSION", "")
    return session_type, desktop


def detect_session(timeout: float = 5.0, env: Optional[Mapping[str, str]] = None) -> SessionContext:
    """Determine the current session type and desktop environment.

    loginctl is consulted first; any field it leaves empty is filled from
    XDG_SESSION_TYPE / XDG_CURRENT_DESKTOP / DESKTOP_SESSION.

    Args:
        timeout: Seconds allowed for each loginctl call.
        env: Environment mapping (defaults to os.environ).

    Returns:
        SessionContext with lowercased fields.

    Raises:
        EnvironmentUndetectable: If either field is still missing.
    """
    if env is None:
        env = os.environ

    session_type, desktop = _query_loginctl(env, timeout)
    if not session_type or not desktop:
        env_type, env_desktop = _from_environment(env)
        session_type = session_type or env_type
        desktop = desktop or env_desktop

    if not session_type or not desktop:
        raise EnvironmentUndetectable(
            f"Could not detect session (type={session_type or '?'}, desktop={desktop or '?'})"
        )

    context = SessionContext(session_type=session_type.strip().lower(), desktop=desktop.strip().lower())
    logger.debug(f"Detected session: {context}")
    return context
