import io
import os

from rich.console import Console

from freezetap.config import Settings
from freezetap.windows.notify import NotifySend
from freezetap.errors import ToolMissing
from freezetap.reporter import notification_text, notify, print_info
from freezetap.types import SessionContext, ToggleResult


class RecordingNotifier:
    tool = "recorder"

    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, title, body, timeout_ms, app_name, timeout):
        if self.error:
            raise self.error
        self.sent.append((title, body, timeout_ms, app_name, timeout))


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_notification_text_for_each_state():
    stopped = ToggleResult(pid=4821, new_state="stopped", process_name="game")
    running = ToggleResult(pid=4821, new_state="running", process_name="game", dry_run=True)

    assert notification_text(stopped) == ("game suspended", "PID 4821")
    assert notification_text(running) == ("[dry-run] game resumed", "PID 4821")


def test_notify_passes_settings():
    notifier = RecordingNotifier()
    result = ToggleResult(pid=4821, new_state="stopped", process_name="game")

    assert notify(result, Settings(notif_timeout=1500, query_timeout=2.0), notifier=notifier)
    assert notifier.sent == [("game suspended", "PID 4821", 1500, "freezetap", 2.0)]


def test_notify_failure_is_swallowed(caplog):
    notifier = RecordingNotifier(error=ToolMissing("notify-send"))
    result = ToggleResult(pid=4821, new_state="running", process_name="game")

    assert notify(result, Settings(), notifier=notifier) is False
    assert "notify-send" in caplog.text


def test_print_info_shows_tree_threads_and_session(process_tree):
    console = _console()

    print_info(process_tree.pid, SessionContext(session_type="wayland", desktop="hyprland"), console=console)

    output = console.file.getvalue()
    assert "hyprland" in output
    assert "wayland" in output
    assert str(process_tree.pid) in output
    assert "sleep" in output
    assert f"Threads of {process_tree.pid}" in output


def test_print_info_without_session(dead_pid):
    console = _console()

    print_info(dead_pid, None, console=console)

    output = console.file.getvalue()
    assert "unknown" in output
    assert "no longer exists" in output


def test_print_info_for_self():
    console = _console()

    print_info(os.getpid(), None, console=console)

    assert "running" in console.file.getvalue()


def test_notify_with_unexecutable_notify_send(tmp_path, monkeypatch, caplog):
    helper = tmp_path / "notify-send"
    helper.write_text("#!/bin/sh\nexit 0\n")
    helper.chmod(0o644)
    monkeypatch.setenv("PATH", str(tmp_path))
    result = ToggleResult(pid=4821, new_state="stopped", process_name="game")

    assert notify(result, Settings(), notifier=NotifySend()) is False
    assert "could not be run" in caplog.text
