import httpx
import pytest

from landscape.services.sessions import SessionStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(config, clock):
    return SessionStore(config, httpx.AsyncClient(), clock=clock)


def test_sessions_get_their_own_coordinator(store):
    first, second = store.create(), store.create()
    assert first != second
    assert store.get(first) is not store.get(second)
    assert store.get("missing") is None


def test_idle_sessions_expire(store, config, clock):
    config.SESSION_TTL_SECONDS = 60
    stale = store.create()
    clock.now += 30
    active = store.create()

    clock.now += 45
    assert store.get(stale) is None
    assert store.get(active) is not None


def test_access_keeps_session_alive(store, config, clock):
    config.SESSION_TTL_SECONDS = 60
    session_id = store.create()
    for _ in range(5):
        clock.now += 50
        assert store.get(session_id) is not None


def test_least_recently_used_session_is_evicted_at_capacity(store, config):
    config.MAX_SESSIONS = 2
    oldest = store.create()
    recent = store.create()
    store.get(oldest)

    newest = store.create()

    assert store.get(recent) is None
    assert store.get(oldest) is not None
    assert store.get(newest) is not None


def test_discard(store):
    session_id = store.create()
    assert store.discard(session_id) is True
    assert store.discard(session_id) is False
    assert store.get(session_id) is None
