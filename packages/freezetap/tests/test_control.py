import os
import signal

import pytest

from freezetap.errors import InvalidPid, ProcessNotFound, SelfTargetRejected, SignalDeliveryFailed
from freezetap.process import control
from freezetap.process.control import parse_pid, toggle
from freezetap.process.tree import ProcessNode, get_process_tree

from .conftest import FakeKill, state_of, wait_for


def _game_tree(state="S"):
    root = ProcessNode(pid=4821, name="game", cmdline="./game", state=state, ppid=1)
    root.children.append(ProcessNode(pid=4830, name="game-worker", cmdline="./worker", state=state, ppid=4821))
    return root


@pytest.fixture
def fake_game(monkeypatch):
    """Serve a fixed 4821 -> 4830 tree whose state the test controls."""
    holder = {"state": "S"}
    monkeypatch.setattr(control, "process_exists", lambda pid: pid == 4821)
    monkeypatch.setattr(control, "get_process_tree", lambda pid: _game_tree(holder["state"]) if pid == 4821 else None)
    return holder


@pytest.mark.parametrize("value, expected", [("4821", 4821), (" 42 ", 42), ("007", 7), ("0", 0), (17, 17)])
def test_parse_pid_accepts_non_negative_integers(value, expected):
    assert parse_pid(value) == expected


@pytest.mark.parametrize("value", ["null", "", "   ", "-1", "12a", "1.5", "٣", None, True, -3])
def test_parse_pid_rejects_everything_else(value):
    with pytest.raises(InvalidPid):
        parse_pid(value)


def test_toggle_null_sentinel_is_invalid_pid(fake_kill):
    with pytest.raises(InvalidPid) as exc_info:
        toggle("null")

    assert exc_info.value.exit_code == 2
    assert fake_kill.calls == []


def test_toggle_missing_process_sends_nothing(fake_kill, dead_pid):
    with pytest.raises(ProcessNotFound) as exc_info:
        toggle(str(dead_pid))

    assert exc_info.value.exit_code == 130
    assert fake_kill.calls == []


def test_toggle_rejects_own_process(fake_kill):
    with pytest.raises(SelfTargetRejected):
        toggle(os.getpid())

    assert fake_kill.calls == []


def test_toggle_running_tree_stops_root_then_children(fake_kill, fake_game):
    result = toggle("4821")

    assert result.new_state == "stopped"
    assert result.process_name == "game"
    assert result.signalled == (4821, 4830)
    assert fake_kill.calls == [(4821, signal.SIGSTOP), (4830, signal.SIGSTOP)]


def test_toggle_stopped_tree_resumes_children_then_root(fake_kill, fake_game):
    fake_game["state"] = "T"

    result = toggle("4821")

    assert result.new_state == "running"
    assert result.process_name == "game"
    assert fake_kill.calls == [(4821, 0), (4830, signal.SIGCONT), (4821, signal.SIGCONT)]


def test_toggle_direction_follows_root_only(fake_kill, monkeypatch):
    root = ProcessNode(pid=4821, name="game", cmdline="game", state="S", ppid=1)
    root.children.append(ProcessNode(pid=4830, name="child", cmdline="child", state="T", ppid=4821))
    monkeypatch.setattr(control, "process_exists", lambda pid: True)
    monkeypatch.setattr(control, "get_process_tree", lambda pid: root)

    assert toggle(4821).new_state == "stopped"


def test_dry_run_matches_real_run_without_signals(fake_kill, fake_game):
    dry = toggle("4821", dry_run=True)
    assert fake_kill.calls == []

    real = toggle("4821")

    assert dry.dry_run and not real.dry_run
    assert dry.new_state == real.new_state
    assert dry.process_name == real.process_name
    assert dry.signalled == ()


def test_child_signal_failure_is_not_fatal(monkeypatch, fake_game):
    recorder = FakeKill(fail={4830: ProcessLookupError()})
    monkeypatch.setattr(control.os, "kill", recorder)

    result = toggle("4821")

    assert result.new_state == "stopped"
    assert result.signalled == (4821,)
    assert result.failed == (4830,)


def test_root_signal_failure_raises(monkeypatch, fake_game):
    recorder = FakeKill(fail={4821: PermissionError()})
    monkeypatch.setattr(control.os, "kill", recorder)

    with pytest.raises(SignalDeliveryFailed) as exc_info:
        toggle("4821")

    assert "permission denied" in str(exc_info.value)
    assert recorder.calls == []


def test_root_resume_failure_leaves_children_stopped(monkeypatch, fake_game):
    fake_game["state"] = "T"
    recorder = FakeKill(fail={4821: PermissionError()})
    monkeypatch.setattr(control.os, "kill", recorder)

    with pytest.raises(SignalDeliveryFailed) as exc_info:
        toggle("4821")

    assert "permission denied" in str(exc_info.value)
    assert recorder.calls == []


def test_root_vanishing_after_existence_check(monkeypatch, fake_kill):
    monkeypatch.setattr(control, "process_exists", lambda pid: True)
    monkeypatch.setattr(control, "get_process_tree", lambda pid: None)

    with pytest.raises(ProcessNotFound):
        toggle("4821")
    assert fake_kill.calls == []


def test_toggle_twice_restores_real_tree(process_tree):
    pids = get_process_tree(process_tree.pid).pids()

    first = toggle(process_tree.pid)
    assert first.new_state == "stopped"
    assert first.process_name == "sh"
    assert set(first.signalled) == set(pids)
    assert wait_for(lambda: all(state_of(pid) == "T" for pid in pids))

    second = toggle(process_tree.pid)
    assert second.new_state == "running"
    assert wait_for(lambda: all(state_of(pid) != "T" for pid in pids))


def test_dry_run_leaves_real_tree_untouched(process_tree):
    pids = get_process_tree(process_tree.pid).pids()

    result = toggle(process_tree.pid, dry_run=True)

    assert result.new_state == "stopped"
    assert all(state_of(pid) != "T" for pid in pids)
