import os
import signal
import subprocess
import time

import pytest

from freezetap.process import get_process_info, get_process_tree


def wait_for(predicate, timeout=5.0, interval=0.02):
    """Poll until predicate() is truthy or the timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


def state_of(pid):
    info = get_process_info(pid)
    return info.state if info else None


class FakeKill:
    """Records os.kill calls instead of sending signals."""

    def __init__(self, fail=None):
        self.calls = []
        self.fail = fail or {}

    def __call__(self, pid, sig):
        if pid in self.fail:
            raise self.fail[pid]
        self.calls.append((pid, sig))


@pytest.fixture
def fake_kill(monkeypatch):
    from freezetap.process import control

    recorder = FakeKill()
    monkeypatch.setattr(control.os, "kill", recorder)
    return recorder


@pytest.fixture
def process_tree():
    """A real two-level tree: ``sh`` waiting on a ``sleep`` child."""
    proc = subprocess.Popen(["sh", "-c", "sleep 60 & wait"])
    assert wait_for(lambda: (tree := get_process_tree(proc.pid)) is not None and len(tree.pids()) >= 2)

    yield proc

    tree = get_process_tree(proc.pid)
    pids = tree.pids() if tree else [proc.pid]
    for pid in reversed(pids):
        for sig in (signal.SIGCONT, signal.SIGKILL):
            try:
                os.kill(pid, sig)
            except ProcessLookupError:
                pass
    proc.wait(timeout=5)


@pytest.fixture
def dead_pid():
    """PID of a process that has already exited and been reaped."""
    proc = subprocess.Popen(["true"])
    proc.wait(timeout=5)
    return proc.pid
