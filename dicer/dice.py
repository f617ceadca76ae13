from __future__ import annotations

import random

_SYSTEM_RNG = random.SystemRandom()


def roll_dice(*, rng: random.Random | None = None) -> tuple[int, int]:
    """Roll two independent six-sided dice.

    Uses the OS entropy source unless an `rng` is injected (tests).
    """

    src = rng if rng is not None else _SYSTEM_RNG
    return src.randint(1, 6), src.randint(1, 6)
