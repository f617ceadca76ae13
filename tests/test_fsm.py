from __future__ import annotations

import pytest
from pydantic import ValidationError
from statemachine.exceptions import TransitionNotAllowed

from dicer.api.models import BonusMode, GameState, RegularMode
from dicer.fsm import ModeMachine


def test_bonus_round_round_trip() -> None:
    game = GameState()
    machine = ModeMachine(game)
    assert machine.current_state.value == "regular"

    machine.bonus_triggered(bonus_board=[10] * 16, freespins=3)
    assert machine.current_state.value == "bonus"
    assert isinstance(game.mode, BonusMode)
    assert game.mode.freespin_amount == 3

    machine.freespins_exhausted()
    assert machine.current_state.value == "regular"
    assert isinstance(game.mode, RegularMode)


def test_machine_starts_from_stored_mode() -> None:
    game = GameState(mode=BonusMode(bonus_board=[10] * 16, freespin_amount=2))
    machine = ModeMachine(game)
    assert machine.current_state.value == "bonus"


def test_illegal_transitions_are_rejected() -> None:
    machine = ModeMachine(GameState())
    with pytest.raises(TransitionNotAllowed):
        machine.freespins_exhausted()

    bonus = ModeMachine(GameState(mode=BonusMode(bonus_board=[10] * 16, freespin_amount=1)))
    with pytest.raises(TransitionNotAllowed):
        bonus.bonus_triggered(bonus_board=[10] * 16, freespins=3)


def test_bonus_mode_needs_a_spin_left() -> None:
    with pytest.raises(ValidationError):
        BonusMode(bonus_board=[10] * 16, freespin_amount=0)
