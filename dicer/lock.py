from __future__ import annotations

import logging
import secrets
from collections.abc import Iterator
from contextlib import contextmanager

import redis

from dicer.errors import PersistenceUnavailable, SessionBusy

logger = logging.getLogger(__name__)

# Delete the key only while it still holds our token.
_RELEASE_LUA = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


def _lock_key(session_id: str) -> str:
    return f"lock:session:{session_id}"


@contextmanager
def session_lock(*, r: redis.Redis, session_id: str, ttl_ms: int = 5_000) -> Iterator[None]:
    """Single-writer lock around a session's load-mutate-save cycle.

    Fails fast with SessionBusy instead of waiting. The TTL bounds how long a
    crashed holder can block the session.
    """

    key = _lock_key(session_id)
    token = secrets.token_hex(8)
    try:
        acquired = r.set(key, token, nx=True, px=ttl_ms)
    except redis.RedisError as e:
        raise PersistenceUnavailable(f"could not lock session {session_id}: {e}") from e
    if not acquired:
        raise SessionBusy(f"Session {session_id} is busy")
    try:
        yield
    finally:
        # Leave the key alone if our TTL expired and someone else took it.
        try:
            release = r.register_script(_RELEASE_LUA)
            release(keys=[key], args=[token])
        except redis.RedisError as e:
            # The TTL frees the key eventually.
            logger.warning("Could not release lock for session %s: %s", session_id, e)
