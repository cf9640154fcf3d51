"""Tree-wide suspend/resume.

Stopping only the root leaves its children running, which is exactly what
game launcher shims do, so every toggle covers the whole descendant tree.

PUBLIC API:
  - toggle: Suspend a running tree or resume a stopped one
  - parse_pid: Validate PID text
"""

import logging
import os
import signal
from typing import List, Tuple

from ..errors import InvalidPid, ProcessNotFound, SelfTargetRejected, SignalDeliveryFailed
from ..types import ProcessId, ProcessState, ToggleResult
from .tree import get_process_tree, process_exists

logger = logging.getLogger(__name__)


def parse_pid(value: object) -> ProcessId:
    """Validate that ``value`` is a non-negative decimal integer.

    Args:
        value: PID as text (or int) from the CLI or a window query.

    Raises:
        InvalidPid: For anything else, including "null" and "".
    """
    if isinstance(value, bool):
        raise InvalidPid(value)
    if isinstance(value, int):
        if value < 0:
            raise InvalidPid(value)
        return value

    text = str(value).strip() if value is not None else ""
    if not text.isascii() or not text.isdigit():
        raise InvalidPid(value)
    return int(text)


def _send_signal(pid: int, sig: int) -> Tuple[bool, str]:
    """Send a signal to a specific process.

    Returns:
        (success, reason) where reason is empty on success.
    """
    try:
        os.kill(pid, sig)
        logger.debug(f"Sent {signal.Signals(sig).name if sig else 'signal 0'} to PID {pid}")
        return True, ""
    except ProcessLookupError:
        return False, "process exited"
    except PermissionError:
        return False, "permission denied"
    except OSError as e:
        return False, str(e)


def _deliver(root: int, pids: List[int], sig: int) -> Tuple[List[int], List[int]]:
    """Signal every pid in order, failing only when the root cannot be signalled.

    Returns:
        (signalled, failed) PID lists.
    """
    signalled, failed = [], []
    for pid in pids:
        ok, reason = _send_signal(pid, sig)
        if ok:
            signalled.append(pid)
            continue
        if pid == root:
            raise SignalDeliveryFailed(pid, reason)
        logger.debug(f"Skipping PID {pid}: {reason}")
        failed.append(pid)
    return signalled, failed


def toggle(pid: object, dry_run: bool = False) -> ToggleResult:
    """Suspend or resume a whole process tree based on the root's state.

    Args:
        pid: Root PID (text or int).
        dry_run: Report the resulting state without sending any signal.

    Returns:
        ToggleResult with the new state and the root's name.

    Raises:
        InvalidPid: PID text is not a non-negative integer.
        ProcessNotFound: Root does not exist.
        SelfTargetRejected: The tree contains this process.
        SignalDeliveryFailed: The root could not be signalled.
    """
    root_pid = parse_pid(pid)

    if not process_exists(root_pid):
        raise ProcessNotFound(root_pid)

    tree = get_process_tree(root_pid)
    if tree is None:
        # Exited between the existence check and the scan
        raise ProcessNotFound(root_pid)

    pids = tree.pids()
    own_pid = os.getpid()
    if own_pid in pids:
        raise SelfTargetRejected(root_pid, own_pid)

    new_state: ProcessState = "running" if tree.is_stopped else "stopped"
    logger.debug(f"PID {root_pid} ({tree.name}) state={tree.state}, tree={pids}, target={new_state}")

    if dry_run:
        return ToggleResult(pid=root_pid, new_state=new_state, process_name=tree.name, dry_run=True)

    if new_state == "stopped":
        signalled, failed = _deliver(root_pid, pids, signal.SIGSTOP)
    else:
        # Children first so the root never runs ahead of a still-stopped subtree.
        # Signal 0 checks the root before any child continues.
        ok, reason = _send_signal(root_pid, 0)
        if not ok:
            raise SignalDeliveryFailed(root_pid, reason)
        signalled, failed = _deliver(root_pid, list(reversed(pids)), signal.SIGCONT)

    if failed:
        logger.debug(f"{len(failed)} of {len(pids)} processes could not be signalled: {failed}")

    return ToggleResult(
        pid=root_pid,
        new_state=new_state,
        process_name=tree.name,
        signalled=tuple(signalled),
        failed=tuple(failed),
    )
