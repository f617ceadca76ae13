from __future__ import annotations

import fakeredis
import pytest

from dicer.errors import SessionBusy
from dicer.lock import session_lock


def test_lock_is_exclusive_and_released(r: fakeredis.FakeRedis) -> None:
    with session_lock(r=r, session_id="s1"):
        assert r.get("lock:session:s1") is not None
        with pytest.raises(SessionBusy):
            with session_lock(r=r, session_id="s1"):
                pass
        # Other sessions are independent.
        with session_lock(r=r, session_id="s2"):
            pass

    assert r.get("lock:session:s1") is None


def test_lock_released_when_body_raises(r: fakeredis.FakeRedis) -> None:
    with pytest.raises(RuntimeError):
        with session_lock(r=r, session_id="s1"):
            raise RuntimeError("boom")

    assert r.get("lock:session:s1") is None


def test_lock_has_ttl(r: fakeredis.FakeRedis) -> None:
    with session_lock(r=r, session_id="s1", ttl_ms=2_000):
        ttl = r.pttl("lock:session:s1")
        assert 0 < ttl <= 2_000


def test_expired_lock_taken_by_another_holder_is_not_deleted(r: fakeredis.FakeRedis) -> None:
    with session_lock(r=r, session_id="s1"):
        # Simulate our TTL expiring and another writer taking the lock.
        r.set("lock:session:s1", "other")

    assert r.get("lock:session:s1") == "other"


def test_release_is_a_single_server_side_step(r: fakeredis.FakeRedis, monkeypatch: pytest.MonkeyPatch) -> None:
    with session_lock(r=r, session_id="s1"):
        # A client-side GET-then-DEL could race the TTL; release must not read the key.
        def _no_get(*args, **kwargs):  # type: ignore[no-untyped-def]
            raise AssertionError("release read the lock key")

        monkeypatch.setattr(r, "get", _no_get)
        monkeypatch.setattr(r, "delete", _no_get)

    monkeypatch.undo()
    assert r.get("lock:session:s1") is None
