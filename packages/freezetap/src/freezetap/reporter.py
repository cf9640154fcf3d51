"""Post-toggle reporting: diagnostic snapshot and desktop notification.

PUBLIC API:
  - print_info: Print session, process tree, threads and root state
  - notify: Send a desktop notification describing the new state
  - notification_text: Title and body for a toggle result
"""

import logging
from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from .config import APP_NAME, Settings
from .errors import FreezetapError
from .process import ProcessNode, get_process_tree, get_threads
from .types import SessionContext, ToggleResult
from .windows import Notifier, get_notifier

logger = logging.getLogger(__name__)

_STATE_STYLES = {"T": "bold yellow", "R": "bold green", "Z": "bold red"}


def _node_label(node: ProcessNode) -> str:
    style = _STATE_STYLES.get(node.state, "dim")
    return f"[bold]{escape(node.name)}[/bold] [cyan]{node.pid}[/cyan] [{style}]{node.state}[/{style}]"


def _build_tree(root: ProcessNode) -> Tree:
    """Mirror the ProcessNode tree as a rich Tree."""
    tree = Tree(_node_label(root))
    stack = [(root, tree)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            stack.append((child, branch.add(_node_label(child))))
    return tree


def _build_session_card(context: Optional[SessionContext]) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("session type", context.session_type if context else "unknown")
    table.add_row("desktop", context.desktop if context else "unknown")
    return Panel(table, title="Session", title_align="left", border_style="blue")


def _build_threads_card(pid: int) -> Panel:
    table = Table(show_header=True, header_style="bold", expand=True)
    table.add_column("TID", justify="right")
    table.add_column("Name")
    table.add_column("State", justify="center")
    for thread in get_threads(pid):
        table.add_row(str(thread.tid), escape(thread.name), thread.state)
    return Panel(table, title=f"Threads of {pid}", title_align="left", border_style="blue")


def _build_root_card(root: ProcessNode) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("pid", str(root.pid))
    table.add_row("name", escape(root.name))
    table.add_row("state", "stopped" if root.is_stopped else f"running ({root.state})")
    table.add_row("cmdline", escape(root.cmdline))
    return Panel(table, title="Process", title_align="left", border_style="blue")


def print_info(pid: int, context: Optional[SessionContext], console: Optional[Console] = None) -> None:
    """Print a read-only snapshot of the session and the target tree.

    Args:
        pid: Root process ID.
        context: Session context, or None when it was not needed.
        console: Console to print to (stdout by default).
    """
    if console is None:
        console = Console()

    root = get_process_tree(pid)
    if root is None:
        console.print(Group(_build_session_card(context), f"[red]Process {pid} no longer exists[/red]"))
        return

    console.print(
        Group(
            _build_session_card(context),
            Panel(_build_tree(root), title="Process tree", title_align="left", border_style="blue"),
            _build_threads_card(pid),
            _build_root_card(root),
        )
    )


def notification_text(result: ToggleResult) -> tuple[str, str]:
    """Build the notification title and body.

    Returns:
        (title, body), e.g. ("game suspended", "PID 4821").
    """
    title = f"{result.process_name} {result.action}"
    if result.dry_run:
        title = f"[dry-run] {title}"
    return title, f"PID {result.pid}"


def notify(result: ToggleResult, settings: Settings, notifier: Optional[Notifier] = None) -> bool:
    """Send a desktop notification describing the new state.

    Fire-and-forget: failures are logged, never raised or retried.

    Args:
        result: Toggle outcome.
        settings: Runtime settings (notification and query timeouts).
        notifier: Dispatcher override (notify-send by default).

    Returns:
        True if the notification was dispatched.
    """
    if notifier is None:
        notifier = get_notifier()

    title, body = notification_text(result)
    try:
        notifier.send(title, body, settings.notif_timeout, APP_NAME, settings.query_timeout)
    except FreezetapError as e:
        logger.warning(f"Notification failed: {e}")
        return False
    return True
