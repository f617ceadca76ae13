from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dicer.board import Board, Cell, validate_board
from dicer.rules import DEFAULT_RULES


class GameMode(StrEnum):
    regular = "regular"
    bonus = "bonus"


class RegularMode(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["regular"] = GameMode.regular.value


class BonusMode(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["bonus"] = GameMode.bonus.value

    # Derived from the regular board at the moment the bonus was triggered.
    bonus_board: list[Cell] = Field(..., min_length=DEFAULT_RULES.board_size, max_length=DEFAULT_RULES.board_size)
    # A round with no spins left is stored as RegularMode.
    freespin_amount: int = Field(..., ge=1)


Mode = Annotated[RegularMode | BonusMode, Field(discriminator="kind")]


class GameState(BaseModel):
    model_config = ConfigDict(extra="forbid")

    balance: int = DEFAULT_RULES.starting_balance
    position: int = Field(0, ge=0, lt=DEFAULT_RULES.board_size)
    mode: Mode = Field(default_factory=RegularMode)

    last_prize_won: Cell | None = None
    last_dice_result: list[int] = Field(default_factory=list, max_length=2)

    # Bumped on every save.
    version: int = Field(0, ge=0)

    @property
    def is_bonus(self) -> bool:
        return isinstance(self.mode, BonusMode)

    @property
    def freespin_amount(self) -> int:
        return self.mode.freespin_amount if isinstance(self.mode, BonusMode) else 0

    @property
    def bonus_board(self) -> Board | None:
        return self.mode.bonus_board if isinstance(self.mode, BonusMode) else None


class SessionDocument(BaseModel):
    """What the store holds per session: the regular board and the state, written as one value."""

    board: list[Cell]
    state: GameState

    @field_validator("board")
    @classmethod
    def _board_invariant(cls, v: list[Cell]) -> list[Cell]:
        validate_board(v)
        return v

    @field_validator("state", mode="before")
    @classmethod
    def _state_complete(cls, v: object) -> object:
        # The defaults are for new sessions; a stored state must carry every field.
        if isinstance(v, dict):
            missing = sorted(set(GameState.model_fields) - set(v))
            if missing:
                raise ValueError(f"stored state is missing fields: {', '.join(missing)}")
        return v


class BetSnapshot(BaseModel):
    balance: int
    dice_result: list[int]
    last_prize_won: Cell | None
    available_to_spin: bool
    bonus_mode_board: list[Cell] | None
    bonus_mode: bool
    freespin_amount: int
    regular_mode_board: list[Cell]


class StateView(GameState):
    available_to_spin: bool
