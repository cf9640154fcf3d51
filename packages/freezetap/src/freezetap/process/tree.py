"""Process tree analysis using /proc filesystem.

PUBLIC API:
  - ProcessNode: Tree node with process information (dataclass)
  - ThreadInfo: Per-thread information (dataclass)
  - get_process_info: Read a single process from /proc
  - get_all_processes: Scan all processes from /proc
  - build_tree_from_processes: Build tree from pre-scanned processes
  - get_process_tree: Build complete process tree from a root PID
  - find_pids_by_name: PIDs whose name matches exactly, ascending
  - get_threads: Threads of a process from /proc/<pid>/task
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

PROC = "/proc"
TASK_COMM_LEN = 15


@dataclass
class ProcessNode:
    """Tree node with process information.

    Attributes:
        pid: Process ID.
        name: Process name (comm).
        cmdline: Full command line with arguments.
        state: Process state (R=running, S=sleeping, T=stopped, etc).
        ppid: Parent process ID.
        children: List of child ProcessNodes.
    """

    pid: int
    name: str
    cmdline: str
    state: str
    ppid: int
    children: List["ProcessNode"] = field(default_factory=list)

    @property
    def is_stopped(self) -> bool:
        """Check if process is stopped by a job-control signal."""
        return self.state == "T"

    def walk(self) -> Iterator["ProcessNode"]:
        """Yield this node and all descendants, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def pids(self) -> List[int]:
        """All PIDs in the tree, root first."""
        return [node.pid for node in self.walk()]


@dataclass
class ThreadInfo:
    """A single thread of a process."""

    tid: int
    name: str
    state: str


def _read_proc_file(path: str, default: str = "") -> str:
    """Read a /proc file safely.

    Args:
        path: Path to /proc file.
        default: Default value if read fails.
    """
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except (IOError, OSError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return default


def _read_proc_file_bytes(path: str) -> bytes:
    """Read a /proc file as bytes."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except (IOError, OSError) as e:
        logger.debug(f"Could not read {path}: {e}")
        return b""


def _parse_stat(stat_data: str) -> Optional[tuple[str, int]]:
    """Extract (state, ppid) from a /proc stat line.

    State is after the last ) in stat (handles processes with ) in name).
    """
    right_paren = stat_data.rfind(")")
    if right_paren == -1:
        return None

    stat_fields = stat_data[right_paren + 1 :].split()
    if len(stat_fields) < 2:
        return None

    try:
        return stat_fields[0], int(stat_fields[1])
    except ValueError:
        return None


def process_exists(pid: int) -> bool:
    """Check whether /proc has an entry for the PID."""
    return os.path.isdir(f"{PROC}/{pid}")


def get_process_info(pid: int) -> Optional[ProcessNode]:
    """Get information about a single process.

    Args:
        pid: Process ID to get info for.

    Returns:
        ProcessNode without children, or None if the process is gone.
    """
    name = _read_proc_file(f"{PROC}/{pid}/comm")
    if not name:
        return None

    parsed = _parse_stat(_read_proc_file(f"{PROC}/{pid}/stat"))
    if not parsed:
        return None
    state, ppid = parsed

    cmdline_bytes = _read_proc_file_bytes(f"{PROC}/{pid}/cmdline")
    cmdline = cmdline_bytes.decode("utf-8", "replace").replace("\x00", " ").strip()
    if not cmdline:
        cmdline = name  # Kernel threads have no cmdline

    return ProcessNode(pid=pid, name=name, cmdline=cmdline, state=state, ppid=ppid)


def get_all_processes() -> Dict[int, ProcessNode]:
    """Scan all processes and extract their information.

    Returns:
        Dict mapping PID to ProcessNode (children not attached).
    """
    processes = {}

    try:
        for entry in os.listdir(PROC):
            if not entry.isdigit():
                continue

            pid = int(entry)
            info = get_process_info(pid)
            if info:
                processes[pid] = info
    except OSError as e:
        logger.error(f"Error scanning {PROC}: {e}")

    return processes


def build_tree_from_processes(processes: Dict[int, ProcessNode], root_pid: int) -> Optional[ProcessNode]:
    """Build a tree structure from the flat process list.

    Args:
        processes: Dict mapping PID to ProcessNode.
        root_pid: PID to use as tree root.

    Returns:
        ProcessNode tree or None if root not found.
    """
    if root_pid not in processes:
        return None

    root = processes[root_pid]

    children_map: Dict[int, List[int]] = {}
    for pid, node in processes.items():
        children_map.setdefault(node.ppid, []).append(pid)

    # Iterative walk; a visited set guards against a reused pid forming a cycle
    visited: Set[int] = {root.pid}
    stack = [root]
    while stack:
        node = stack.pop()
        node.children = []
        for child_pid in sorted(children_map.get(node.pid, [])):
            if child_pid in visited:
                continue
            visited.add(child_pid)
            child = processes[child_pid]
            node.children.append(child)
            stack.append(child)

    return root


def get_process_tree(root_pid: int) -> Optional[ProcessNode]:
    """Build complete process tree starting from a root PID.

    Uses the pstree algorithm: scanning all processes and
    building relationships from PPID information.

    Args:
        root_pid: PID to start building tree from.

    Returns:
        ProcessNode representing the root with all descendants,
        or None if the process doesn't exist.
    """
    return build_tree_from_processes(get_all_processes(), root_pid)


def find_pids_by_name(name: str, processes: Optional[Dict[int, ProcessNode]] = None) -> List[int]:
    """Find PIDs whose process name equals ``name``.

    The kernel truncates comm to 15 characters, so longer names are compared
    on their first 15 characters.

    Args:
        name: Exact process name (comm).
        processes: Pre-scanned processes; scans /proc when omitted.

    Returns:
        Matching PIDs in ascending order.
    """
    if processes is None:
        processes = get_all_processes()
    name = name[:TASK_COMM_LEN]
    return sorted(pid for pid, node in processes.items() if node.name == name)


def get_threads(pid: int) -> List[ThreadInfo]:
    """List the threads of a process.

    Args:
        pid: Process ID.

    Returns:
        ThreadInfo per task, ordered by thread ID. Empty if the process is gone.
    """
    task_dir = f"{PROC}/{pid}/task"
    try:
        tids = sorted(int(entry) for entry in os.listdir(task_dir) if entry.isdigit())
    except OSError as e:
        logger.debug(f"Could not list {task_dir}: {e}")
        return []

    threads = []
    for tid in tids:
        parsed = _parse_stat(_read_proc_file(f"{task_dir}/{tid}/stat"))
        if not parsed:
            continue
        threads.append(ThreadInfo(tid=tid, name=_read_proc_file(f"{task_dir}/{tid}/comm"), state=parsed[0]))
    return threads
