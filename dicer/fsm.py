from __future__ import annotations

from statemachine import State, StateMachine

from dicer.api.models import BonusMode, GameMode, GameState, RegularMode
from dicer.board import Board


class ModeMachine(StateMachine):
    """FSM wrapper around GameState.mode.

    - regular -> bonus when a bet lands on the bonus cell
    - bonus -> regular when the last free spin is used

    The engine decides *when* to fire an event; the machine guards that the
    transition is legal and swaps the mode variant on the model.
    """

    regular = State(GameMode.regular.value, value=GameMode.regular.value, initial=True)
    bonus = State(GameMode.bonus.value, value=GameMode.bonus.value)

    bonus_triggered = regular.to(bonus)
    freespins_exhausted = bonus.to(regular)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.mode.kind)

    def on_bonus_triggered(self, bonus_board: Board, freespins: int) -> None:
        self.game.mode = BonusMode(bonus_board=bonus_board, freespin_amount=freespins)

    def on_freespins_exhausted(self) -> None:
        self.game.mode = RegularMode()
