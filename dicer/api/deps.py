from __future__ import annotations

from collections.abc import Generator

import redis

from dicer.config import get_session_id
from dicer.infra.redis_client import create_redis


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        try:
            client.close()
        except Exception:
            # Some redis client versions don't require explicit close.
            pass


def current_session_id() -> str:
    # Single-player: every request plays the configured session.
    return get_session_id()
