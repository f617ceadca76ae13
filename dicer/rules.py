from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameRules:
    starting_balance: int = 100
    wager: int = 50
    freespins: int = 3
    bonus_multiplier: int = 10
    # Value the bonus marker takes on the bonus-round board.
    bonus_cell_value: int = 10
    board_size: int = 16
    prize_step: int = 5

    @property
    def prize_values(self) -> list[int]:
        """5, 10, ..., 75 for the default rules: one prize per non-bonus cell."""

        return [self.prize_step * (i + 1) for i in range(self.board_size - 1)]


DEFAULT_RULES = GameRules()
