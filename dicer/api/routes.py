from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
import redis

from dicer import game_store
from dicer.api.deps import current_session_id, get_redis
from dicer.api.models import BetSnapshot, StateView
from dicer.board import Cell
from dicer.config import get_lock_ttl_ms
from dicer.dice import roll_dice
from dicer.errors import PersistenceUnavailable, SessionBusy

router = APIRouter()


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, SessionBusy):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/dice")
async def dice_route() -> list[int]:
    """Roll two dice without touching the session."""

    return list(roll_dice())


@router.get("/board", response_model=list[Cell])
async def board_route(
    r: redis.Redis = Depends(get_redis),
    session_id: str = Depends(current_session_id),
) -> list[Cell]:
    try:
        return game_store.get_board(r=r, session_id=session_id, lock_ttl_ms=get_lock_ttl_ms())
    except (SessionBusy, PersistenceUnavailable) as e:
        raise _http_error(e) from e


@router.get("/state", response_model=StateView)
async def state_route(
    r: redis.Redis = Depends(get_redis),
    session_id: str = Depends(current_session_id),
) -> StateView:
    try:
        return game_store.get_state(r=r, session_id=session_id, lock_ttl_ms=get_lock_ttl_ms())
    except (SessionBusy, PersistenceUnavailable) as e:
        raise _http_error(e) from e


@router.post("/bet", response_model=BetSnapshot)
async def bet_route(
    r: redis.Redis = Depends(get_redis),
    session_id: str = Depends(current_session_id),
) -> BetSnapshot:
    try:
        return game_store.place_bet(r=r, session_id=session_id, lock_ttl_ms=get_lock_ttl_ms())
    except (SessionBusy, PersistenceUnavailable) as e:
        raise _http_error(e) from e


@router.post("/reset", response_model=BetSnapshot)
async def reset_route(
    r: redis.Redis = Depends(get_redis),
    session_id: str = Depends(current_session_id),
) -> BetSnapshot:
    try:
        return game_store.reset_game(r=r, session_id=session_id, lock_ttl_ms=get_lock_ttl_ms())
    except (SessionBusy, PersistenceUnavailable) as e:
        raise _http_error(e) from e
