from __future__ import annotations

import random
from collections import Counter

from dicer.dice import roll_dice


def test_roll_dice_returns_two_faces_in_range() -> None:
    for _ in range(500):
        d1, d2 = roll_dice()
        assert 1 <= d1 <= 6
        assert 1 <= d2 <= 6


def test_roll_dice_marginals_are_roughly_uniform() -> None:
    rng = random.Random(1234)
    n = 12_000
    first: Counter[int] = Counter()
    second: Counter[int] = Counter()
    for _ in range(n):
        d1, d2 = roll_dice(rng=rng)
        first[d1] += 1
        second[d2] += 1

    # Expected 2000 per face; allow a generous band.
    for counts in (first, second):
        assert set(counts) == {1, 2, 3, 4, 5, 6}
        for face in range(1, 7):
            assert 1700 < counts[face] < 2300
