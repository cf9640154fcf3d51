"""Runtime settings for freezetap.

There is no config file. Settings are built once per invocation from the CLI
options and a few environment overrides, then passed to every component.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_NOTIF_TIMEOUT_MS = 5000
DEFAULT_QUERY_TIMEOUT = 5.0
DEFAULT_PICK_TIMEOUT = 30.0
APP_NAME = "freezetap"


@dataclass(frozen=True)
class Settings:
    """Immutable per-invocation settings.

    Attributes:
        dry_run: Compute the outcome without sending signals.
        silent: Skip the desktop notification.
        info: Print diagnostic info after toggling.
        debug: Verbose logging on stderr.
        notif_timeout: Notification display time in milliseconds.
        query_timeout: Seconds allowed for window-manager and notifier calls.
        pick_timeout: Seconds allowed for an interactive window pick.
    """

    dry_run: bool = False
    silent: bool = False
    info: bool = False
    debug: bool = False
    notif_timeout: int = DEFAULT_NOTIF_TIMEOUT_MS
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    pick_timeout: float = DEFAULT_PICK_TIMEOUT


def _env_seconds(env: Mapping[str, str], key: str, default: float) -> float:
    """Read a positive number of seconds from the environment."""
    raw = env.get(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring {key}={raw!r}: not a number")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {key}={raw!r}: must be positive")
        return default
    return value


def build_settings(
    *,
    dry_run: bool = False,
    silent: bool = False,
    info: bool = False,
    debug: bool = False,
    notif_timeout: int = DEFAULT_NOTIF_TIMEOUT_MS,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Build settings from CLI options and environment overrides.

    Args:
        dry_run: Compute the outcome without signalling.
        silent: Suppress notification.
        info: Print diagnostics after toggling.
        debug: Verbose logging.
        notif_timeout: Notification duration in milliseconds.
        env: Environment mapping (defaults to os.environ).

    Returns:
        Frozen Settings instance.
    """
    if env is None:
        env = os.environ

    return Settings(
        dry_run=dry_run,
        silent=silent,
        info=info,
        debug=debug,
        notif_timeout=notif_timeout,
        query_timeout=_env_seconds(env, "FREEZETAP_QUERY_TIMEOUT", DEFAULT_QUERY_TIMEOUT),
        pick_timeout=_env_seconds(env, "FREEZETAP_PICK_TIMEOUT", DEFAULT_PICK_TIMEOUT),
    )
