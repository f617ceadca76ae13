from __future__ import annotations

from collections.abc import Generator

import fakeredis
import pytest
from fastapi.testclient import TestClient

from dicer.board import BONUS, Board


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def client_and_redis(r: fakeredis.FakeRedis) -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient whose Redis dependency is a fresh fakeredis."""

    from dicer.api.deps import get_redis
    from dicer.main import app

    def _override() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override
    with TestClient(app) as c:
        yield c, r
    app.dependency_overrides.clear()


@pytest.fixture()
def fixed_board() -> Board:
    # Bonus at 0, then cell k holds 5*k.
    return [BONUS, *range(5, 80, 5)]


@pytest.fixture()
def fixed_dice(monkeypatch: pytest.MonkeyPatch):
    """Queue the dice the engine will roll: `fixed_dice((1, 2), (3, 4))`."""

    import dicer.engine as engine

    def _set(*rolls: tuple[int, int]) -> None:
        queue = list(rolls)

        def _roll(*, rng=None):  # type: ignore[no-untyped-def]
            return queue.pop(0)

        monkeypatch.setattr(engine, "roll_dice", _roll)

    return _set
