from __future__ import annotations

import logging
import random

import redis
from pydantic import ValidationError

from dicer import engine
from dicer.api.models import BetSnapshot, GameState, SessionDocument, StateView
from dicer.board import Board
from dicer.errors import PersistenceUnavailable
from dicer.lock import session_lock

logger = logging.getLogger(__name__)


SESSION_KEY_PREFIX = "dicer:session:"  # + {session_id}


def _session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def save_session(*, r: redis.Redis, session_id: str, board: Board, state: GameState) -> GameState:
    """Write board and state as one document. Returns the state as stored (version bumped)."""

    saved = state.model_copy(update={"version": state.version + 1})
    doc = SessionDocument(board=board, state=saved)
    try:
        r.set(_session_key(session_id), doc.model_dump_json())
    except redis.RedisError as e:
        raise PersistenceUnavailable(f"could not save session {session_id}: {e}") from e
    return saved


def _init_session(*, r: redis.Redis, session_id: str, rng: random.Random | None = None) -> tuple[Board, GameState]:
    board, state = engine.new_session(rng=rng)
    saved = save_session(r=r, session_id=session_id, board=board, state=state)
    return board, saved


def _fetch(*, r: redis.Redis, session_id: str) -> str | None:
    try:
        return r.get(_session_key(session_id))
    except redis.RedisError as e:
        raise PersistenceUnavailable(f"could not load session {session_id}: {e}") from e


def load_session(*, r: redis.Redis, session_id: str) -> tuple[Board, GameState]:
    """Return the stored (board, state); a missing or corrupt session is replaced by defaults.

    Writes on that path, so callers must hold the session lock.
    """

    raw = _fetch(r=r, session_id=session_id)

    if not raw:
        logger.info("No session %s yet; creating a new board", session_id)
        return _init_session(r=r, session_id=session_id)

    try:
        doc = SessionDocument.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Session %s is corrupt; resetting to defaults: %s", session_id, e)
        return _init_session(r=r, session_id=session_id)

    return doc.board, doc.state


def place_bet(
    *,
    r: redis.Redis,
    session_id: str,
    lock_ttl_ms: int = 5_000,
    rng: random.Random | None = None,
) -> BetSnapshot:
    with session_lock(r=r, session_id=session_id, ttl_ms=lock_ttl_ms):
        board, state = load_session(r=r, session_id=session_id)
        outcome = engine.place_bet(board, state, rng=rng)
        saved = save_session(r=r, session_id=session_id, board=outcome.board, state=outcome.state)

    logger.debug(
        "Bet on %s: dice=%s position=%d prize=%r balance=%d mode=%s v%d",
        session_id,
        outcome.dice,
        saved.position,
        saved.last_prize_won,
        saved.balance,
        saved.mode.kind,
        saved.version,
    )
    if outcome.bonus_triggered:
        logger.info("Bonus round started on %s with %d free spins", session_id, saved.freespin_amount)

    return engine.snapshot(outcome.board, saved)


def reset_game(
    *,
    r: redis.Redis,
    session_id: str,
    lock_ttl_ms: int = 5_000,
    rng: random.Random | None = None,
) -> BetSnapshot:
    with session_lock(r=r, session_id=session_id, ttl_ms=lock_ttl_ms):
        board, state = _init_session(r=r, session_id=session_id, rng=rng)

    logger.debug("Reset %s", session_id)
    return engine.snapshot(board, state)


def _read_session(*, r: redis.Redis, session_id: str, lock_ttl_ms: int) -> tuple[Board, GameState]:
    raw = _fetch(r=r, session_id=session_id)
    doc: SessionDocument | None = None
    if raw:
        try:
            doc = SessionDocument.model_validate_json(raw)
        except ValidationError:
            # load_session logs it and replaces it.
            doc = None
    if doc is not None:
        return doc.board, doc.state

    # First read (or a corrupt one) writes defaults: one writer at a time.
    with session_lock(r=r, session_id=session_id, ttl_ms=lock_ttl_ms):
        return load_session(r=r, session_id=session_id)


def get_board(*, r: redis.Redis, session_id: str, lock_ttl_ms: int = 5_000) -> Board:
    board, _ = _read_session(r=r, session_id=session_id, lock_ttl_ms=lock_ttl_ms)
    return board


def get_state(*, r: redis.Redis, session_id: str, lock_ttl_ms: int = 5_000) -> StateView:
    _, state = _read_session(r=r, session_id=session_id, lock_ttl_ms=lock_ttl_ms)
    return engine.state_view(state)

