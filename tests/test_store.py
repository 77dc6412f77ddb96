import importlib

import settings
import store
from store import SessionStore


def test_create_beyond_cap_evicts_oldest(monkeypatch):
    SessionStore.clear()
    monkeypatch.setattr(store, "MAX_SESSIONS", 2)
    first = SessionStore.create()
    second = SessionStore.create()
    third = SessionStore.create()
    assert SessionStore.count() == 2
    assert SessionStore.get(first.id) is None
    assert SessionStore.get(second.id) is second
    assert SessionStore.get(third.id) is third


def test_drop_and_clear():
    SessionStore.clear()
    a = SessionStore.create(seed=1)
    b = SessionStore.create(seed=2)
    assert SessionStore.drop(a.id) is True
    assert SessionStore.drop(a.id) is False
    assert SessionStore.get(a.id) is None
    assert SessionStore.clear() == 1
    assert SessionStore.get(b.id) is None
    assert SessionStore.count() == 0


def test_get_without_id():
    assert SessionStore.get(None) is None
    assert SessionStore.get("") is None


def test_session_cap_never_below_one(monkeypatch):
    monkeypatch.setenv("HELIX_MAX_SESSIONS", "0")
    try:
        assert importlib.reload(settings).MAX_SESSIONS == 1
    finally:
        monkeypatch.delenv("HELIX_MAX_SESSIONS")
        importlib.reload(settings)
