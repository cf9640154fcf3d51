"""freezetap command line.

Parses options, enforces a single selection strategy, and sequences session
detection, target resolution, the toggle and reporting. All failures arrive
here as FreezetapError and are mapped to exit codes in one place.

PUBLIC API:
  - app: Typer application
  - execute: Run one toggle for an already-parsed strategy
  - select_strategy: Build the SelectionStrategy from CLI flags
"""

import logging
from typing import Optional

import click
import typer
from rich.console import Console
from typer.core import TyperCommand

from . import __version__
from .config import DEFAULT_NOTIF_TIMEOUT_MS, Settings, build_settings
from .errors import EXIT_FAILURE, EnvironmentUndetectable, FreezetapError
from .process import toggle
from .reporter import notify, print_info
from .resolver import needs_session, resolve_target
from .session import detect_session
from .types import ByActiveWindow, ByInteractivePick, ByName, ByPid, SelectionStrategy, SessionContext, ToggleResult

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

app = typer.Typer(
    name="freezetap",
    help="Suspend or resume a process tree chosen by window, PID or name.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class FreezetapCommand(TyperCommand):
    """Reports malformed options with exit code 1, leaving 2 to invalid PIDs."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = EXIT_FAILURE
            raise


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    logging.getLogger("freezetap").setLevel(logging.DEBUG if debug else logging.WARNING)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"freezetap {__version__}")
        raise typer.Exit()


def select_strategy(active: bool, pid: Optional[str], name: Optional[str], prop: bool) -> Optional[SelectionStrategy]:
    """Build the selection strategy from the mutually exclusive flags.

    Returns:
        The strategy, or None unless exactly one flag is set.
    """
    chosen: list[SelectionStrategy] = []
    if active:
        chosen.append(ByActiveWindow())
    if pid is not None:
        chosen.append(ByPid(pid))
    if name is not None:
        chosen.append(ByName(name))
    if prop:
        chosen.append(ByInteractivePick())
    return chosen[0] if len(chosen) == 1 else None


def _session_for(strategy: SelectionStrategy, settings: Settings) -> Optional[SessionContext]:
    """Detect the session when the strategy or --info needs it."""
    if needs_session(strategy):
        return detect_session(settings.query_timeout)
    if not settings.info:
        return None
    try:
        return detect_session(settings.query_timeout)
    except EnvironmentUndetectable as e:
        logger.debug(f"Session info unavailable: {e}")
        return None


def _describe(result: ToggleResult) -> str:
    verb = "suspend" if result.new_state == "stopped" else "resume"
    target = f"{result.process_name} (PID {result.pid})"
    if result.dry_run:
        return f"Would {verb} {target}"
    return f"{result.action.capitalize()} {target}"


def execute(strategy: SelectionStrategy, settings: Settings, console: Optional[Console] = None) -> ToggleResult:
    """Resolve the target, toggle its tree and report.

    Raises:
        FreezetapError: Any failure along the way.
    """
    context = _session_for(strategy, settings)
    pid_text = resolve_target(strategy, context, settings)
    result = toggle(pid_text, dry_run=settings.dry_run)

    typer.echo(_describe(result))

    if settings.info:
        print_info(result.pid, context, console=console)
    if not settings.silent:
        notify(result, settings)
    return result


@app.command(cls=FreezetapCommand)
def main(
    ctx: typer.Context,
    active: bool = typer.Option(False, "-a", "--active", help="Target the focused window's process."),
    pid: Optional[str] = typer.Option(None, "-p", "--pid", metavar="PID", help="Target a process ID."),
    name: Optional[str] = typer.Option(None, "-n", "--name", metavar="NAME", help="Target a process by name."),
    prop: bool = typer.Option(False, "-r", "--prop", help="Pick the target window interactively."),
    silent: bool = typer.Option(False, "-s", "--silent", help="Do not send a desktop notification."),
    notif_timeout: int = typer.Option(
        DEFAULT_NOTIF_TIMEOUT_MS, "-t", "--notif-timeout", metavar="MS", min=0, help="Notification duration in ms."
    ),
    info: bool = typer.Option(False, "--info", help="Print process and session info after toggling."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report the outcome without sending signals."),
    debug: bool = typer.Option(False, "--debug", help="Verbose trace on stderr."),
    version: bool = typer.Option(
        False, "-V", "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Toggle a process tree between suspended and running.

    Exactly one of --active, --pid, --name or --prop selects the target.
    """
    _configure_logging(debug)

    strategy = select_strategy(active, pid, name, prop)
    if strategy is None:
        typer.echo("Error: choose exactly one of --active, --pid, --name, --prop", err=True)
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(EXIT_FAILURE)

    settings = build_settings(dry_run=dry_run, silent=silent, info=info, debug=debug, notif_timeout=notif_timeout)
    logger.debug(f"Strategy={strategy}, settings={settings}")

    try:
        execute(strategy, settings)
    except FreezetapError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(e.exit_code)
