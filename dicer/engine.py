from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from dicer.api.models import BetSnapshot, BonusMode, GameState, StateView
from dicer.board import BONUS, Board, derive_bonus_board, generate_board, is_prize
from dicer.dice import roll_dice
from dicer.fsm import ModeMachine
from dicer.rules import DEFAULT_RULES, GameRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BetOutcome:
    """Result of one bet.

    - `board`: the regular board to persist (a new one if the bonus was triggered).
    - `state`: the updated state; the input state is left untouched.
    """

    board: Board
    state: GameState
    dice: tuple[int, int]
    bonus_triggered: bool = False


def new_session(*, rng: random.Random | None = None, rules: GameRules = DEFAULT_RULES) -> tuple[Board, GameState]:
    return generate_board(rng=rng, rules=rules), GameState(balance=rules.starting_balance)


def available_to_spin(state: GameState, *, rules: GameRules = DEFAULT_RULES) -> bool:
    if isinstance(state.mode, BonusMode):
        return state.mode.freespin_amount > 0
    return state.balance > rules.wager


def place_bet(
    board: Board,
    state: GameState,
    *,
    rng: random.Random | None = None,
    rules: GameRules = DEFAULT_RULES,
) -> BetOutcome:
    game = state.model_copy(deep=True)
    machine = ModeMachine(game)

    d1, d2 = roll_dice(rng=rng)
    game.last_dice_result = [d1, d2]
    game.position = (state.position + d1 + d2) % rules.board_size

    if isinstance(game.mode, BonusMode):
        _free_spin(game, game.mode, machine)
        return BetOutcome(board=list(board), state=game, dice=(d1, d2))

    # The wager is taken even when the balance cannot cover it.
    game.balance -= rules.wager
    cell = board[game.position]

    if cell == BONUS:
        game.last_prize_won = BONUS
        machine.bonus_triggered(bonus_board=derive_bonus_board(board, rules=rules), freespins=rules.freespins)
        # The board played after the bonus round is a new layout.
        next_board = generate_board(rng=rng, rules=rules)
        return BetOutcome(board=next_board, state=game, dice=(d1, d2), bonus_triggered=True)

    game.last_prize_won = _collect(game, cell)
    return BetOutcome(board=list(board), state=game, dice=(d1, d2))


def _free_spin(game: GameState, mode: BonusMode, machine: ModeMachine) -> None:
    cell = mode.bonus_board[game.position]

    if cell == BONUS:
        game.last_prize_won = BONUS
    else:
        game.last_prize_won = _collect(game, cell)

    mode.freespin_amount = max(mode.freespin_amount - 1, 0)
    if mode.freespin_amount == 0:
        machine.freespins_exhausted()


def _collect(game: GameState, cell: object) -> int:
    if not is_prize(cell):
        logger.warning("Landing cell %r at position %d is not a prize; paying 0", cell, game.position)
        return 0
    game.balance += cell  # type: ignore[operator]
    return cell  # type: ignore[return-value]


def snapshot(board: Board, state: GameState, *, rules: GameRules = DEFAULT_RULES) -> BetSnapshot:
    return BetSnapshot(
        balance=state.balance,
        dice_result=list(state.last_dice_result),
        last_prize_won=state.last_prize_won,
        available_to_spin=available_to_spin(state, rules=rules),
        bonus_mode_board=state.bonus_board,
        bonus_mode=state.is_bonus,
        freespin_amount=state.freespin_amount,
        regular_mode_board=list(board),
    )


def state_view(state: GameState, *, rules: GameRules = DEFAULT_RULES) -> StateView:
    return StateView(**state.model_dump(), available_to_spin=available_to_spin(state, rules=rules))
