"""Process tree discovery and tree-wide suspend/resume.

PUBLIC API:
  - toggle: Suspend or resume a process tree
  - parse_pid: Validate PID text
  - ProcessNode: Process information node dataclass
  - ThreadInfo: Thread information dataclass
  - get_process_info: Read a single process from /proc
  - get_process_tree: Build complete process tree from a root PID
  - get_all_processes: Scan all processes from /proc
  - build_tree_from_processes: Build tree from pre-scanned processes
  - find_pids_by_name: PIDs with an exact name match, ascending
  - get_threads: Threads of a process
"""

from .control import toggle, parse_pid
from .tree import (
    ProcessNode,
    ThreadInfo,
    get_process_info,
    get_process_tree,
    get_all_processes,
    build_tree_from_processes,
    find_pids_by_name,
    get_threads,
)

__all__ = [
    "toggle",
    "parse_pid",
    "ProcessNode",
    "ThreadInfo",
    "get_process_info",
    "get_process_tree",
    "get_all_processes",
    "build_tree_from_processes",
    "find_pids_by_name",
    "get_threads",
]
