import pytest

from freezetap import resolver
from freezetap.config import Settings
from freezetap.errors import NameNotFound
from freezetap.resolver import needs_session, resolve_target
from freezetap.types import ByActiveWindow, ByInteractivePick, ByName, ByPid, SessionContext

CONTEXT = SessionContext(session_type="wayland", desktop="hyprland")
SETTINGS = Settings(query_timeout=2.0, pick_timeout=20.0)


class FakeBackend:
    tool = "fake"

    def __init__(self, pid):
        self.pid = pid
        self.timeouts = []

    def active_pid(self, timeout):
        self.timeouts.append(timeout)
        return self.pid

    def pick_pid(self, timeout):
        self.timeouts.append(timeout)
        return self.pid


def test_pid_is_passed_through_unvalidated():
    assert resolve_target(ByPid("null"), None, SETTINGS) == "null"
    assert resolve_target(ByPid("4821"), None, SETTINGS) == "4821"


def test_name_picks_last_listed_match(monkeypatch):
    monkeypatch.setattr(resolver, "find_pids_by_name", lambda name: [120, 4821, 9000])

    first = resolve_target(ByName("game"), None, SETTINGS)
    second = resolve_target(ByName("game"), None, SETTINGS)

    assert first == second == "9000"


def test_name_without_match(monkeypatch):
    monkeypatch.setattr(resolver, "find_pids_by_name", lambda name: [])

    with pytest.raises(NameNotFound) as exc_info:
        resolve_target(ByName("ghost"), None, SETTINGS)

    assert exc_info.value.exit_code == 130


def test_active_window_uses_query_timeout(monkeypatch):
    backend = FakeBackend("4821")
    monkeypatch.setattr(resolver, "get_active_window_querier", lambda context: backend)

    assert resolve_target(ByActiveWindow(), CONTEXT, SETTINGS) == "4821"
    assert backend.timeouts == [2.0]


def test_interactive_pick_uses_pick_timeout(monkeypatch):
    backend = FakeBackend("77")
    monkeypatch.setattr(resolver, "get_window_picker", lambda context: backend)

    assert resolve_target(ByInteractivePick(), CONTEXT, SETTINGS) == "77"
    assert backend.timeouts == [20.0]


def test_window_strategies_need_context():
    assert needs_session(ByActiveWindow()) and needs_session(ByInteractivePick())
    assert not needs_session(ByPid("1")) and not needs_session(ByName("x"))

    with pytest.raises(ValueError):
        resolve_target(ByActiveWindow(), None, SETTINGS)
