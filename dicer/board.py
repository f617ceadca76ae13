from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Literal, TypeAlias

from dicer.errors import CorruptBoardError
from dicer.rules import DEFAULT_RULES, GameRules

BONUS: Literal["bonus"] = "bonus"

_SYSTEM_RNG = random.SystemRandom()

Cell: TypeAlias = int | Literal["bonus"]
Board: TypeAlias = list[Cell]


def is_prize(cell: object) -> bool:
    # bool is an int subclass; a stored `true` is not a prize.
    return isinstance(cell, int) and not isinstance(cell, bool)


def _shuffled_indices(n: int, rng: random.Random) -> list[int]:
    # Fisher-Yates, walking down from the last index.
    idx = list(range(n))
    for i in range(n - 1, 0, -1):
        j = rng.randint(0, i)
        idx[i], idx[j] = idx[j], idx[i]
    return idx


def generate_board(*, rng: random.Random | None = None, rules: GameRules = DEFAULT_RULES) -> Board:
    """Return a fresh board: one bonus marker and each prize value once, at random positions.

    The first shuffled index gets the bonus marker; the remaining indices get the
    prize values in ascending order.
    """

    src = rng if rng is not None else _SYSTEM_RNG
    order = _shuffled_indices(rules.board_size, src)

    board: list[Cell] = [0] * rules.board_size
    board[order[0]] = BONUS
    for pos, value in zip(order[1:], rules.prize_values, strict=True):
        board[pos] = value
    return board


def derive_bonus_board(board: Sequence[Cell], *, rules: GameRules = DEFAULT_RULES) -> Board:
    """Scale a regular board for the bonus round. Does not mutate `board`."""

    out: list[Cell] = []
    for cell in board:
        if cell == BONUS:
            out.append(rules.bonus_cell_value)
        elif is_prize(cell):
            out.append(cell * rules.bonus_multiplier)  # type: ignore[operator]
        else:
            out.append(cell)
    return out


def validate_board(board: Sequence[object], *, rules: GameRules = DEFAULT_RULES) -> None:
    if len(board) != rules.board_size:
        raise CorruptBoardError(f"board must have {rules.board_size} cells, got {len(board)}")

    bonus_count = sum(1 for c in board if c == BONUS)
    if bonus_count != 1:
        raise CorruptBoardError(f"board must have exactly one bonus cell, got {bonus_count}")

    prizes = [c for c in board if c != BONUS]
    if not all(is_prize(c) for c in prizes):
        raise CorruptBoardError("board cells must be integers or the bonus marker")
    if sorted(prizes) != rules.prize_values:  # type: ignore[type-var]
        raise CorruptBoardError("board prizes must be each prize value exactly once")
