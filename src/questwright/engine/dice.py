"""d20 resolution with selectable weighting for Questwright.

Each DiceMode maps to one pure roll policy taking a ``random.Random``:

- fair:    uniform 1-20
- lucky:   uniform 11-20 (mean 15.5)
- unlucky: 1d10 + 0-3, clamped to 1 (mean 7)
- blessed: always 20
- cursed:  always 1

A natural 20 is a critical success and a natural 1 a critical failure,
regardless of whether the total meets the target.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from questwright.models.config import DiceMode
from questwright.models.report import DiceStats

logger = logging.getLogger(__name__)

D20_MIN = 1
D20_MAX = 20

# Raw rolls at or above this count as "successful" in DiceStats.success_rate
APPROXIMATE_SUCCESS_ROLL = 10

RollPolicy = Callable[[random.Random], int]
Critical = Literal["success", "failure"]


def clamp_d20(value: int) -> int:
    return max(D20_MIN, min(D20_MAX, value))


def roll_fair(rng: random.Random) -> int:
    return rng.randint(D20_MIN, D20_MAX)


def roll_lucky(rng: random.Random) -> int:
    return clamp_d20(rng.randint(1, 10) + 10)


def roll_unlucky(rng: random.Random) -> int:
    return clamp_d20(rng.randint(1, 10) + rng.randint(0, 3))


def roll_blessed(rng: random.Random) -> int:
    return D20_MAX


def roll_cursed(rng: random.Random) -> int:
    return D20_MIN


ROLL_POLICIES: dict[DiceMode, RollPolicy] = {
    DiceMode.FAIR: roll_fair,
    DiceMode.LUCKY: roll_lucky,
    DiceMode.UNLUCKY: roll_unlucky,
    DiceMode.BLESSED: roll_blessed,
    DiceMode.CURSED: roll_cursed,
}


def get_roll_policy(mode: DiceMode | str) -> RollPolicy:
    """Look up the roll policy for a mode, defaulting to fair."""
    try:
        return ROLL_POLICIES[DiceMode(mode)]
    except ValueError:
        return roll_fair


@dataclass(frozen=True)
class RollResult:
    """Outcome of a single check.

    Attributes:
        roll: Raw d20 value
        total: roll + bonus
        success: total >= target
        critical: "success" on a natural 20, "failure" on a natural 1
    """

    roll: int
    total: int
    success: bool
    critical: Critical | None


class DiceEngine:
    """Resolves d20-vs-target checks and accumulates statistics.

    Example:
        >>> engine = DiceEngine(DiceMode.BLESSED)
        >>> engine.roll(15, bonus=2)
        RollResult(roll=20, total=22, success=True, critical='success')
    """

    def __init__(self, mode: DiceMode | str = DiceMode.FAIR, rng: random.Random | None = None):
        self.mode = mode
        self._policy = get_roll_policy(mode)
        self._rng = rng or random.Random()
        self._rolls: list[int] = []
        self._critical_successes = 0
        self._critical_failures = 0

    def roll(self, target: int, bonus: int = 0) -> RollResult:
        """Roll a d20 against a target value.

        Args:
            target: Value the total must meet or beat
            bonus: Modifier added to the raw roll

        Returns:
            RollResult for this check
        """
        raw = self._policy(self._rng)
        total = raw + bonus
        critical: Critical | None = None
        if raw == D20_MAX:
            critical = "success"
            self._critical_successes += 1
        elif raw == D20_MIN:
            critical = "failure"
            self._critical_failures += 1
        self._rolls.append(raw)

        logger.debug(f"d20={raw} + {bonus} = {total} vs {target}")
        return RollResult(roll=raw, total=total, success=total >= target, critical=critical)

    @property
    def total_rolls(self) -> int:
        return len(self._rolls)

    def stats(self) -> DiceStats:
        """Snapshot of the accumulated statistics.

        ``success_rate`` is approximate: raw rolls >= 10 count as successes
        because target values are not retained per roll.
        """
        count = len(self._rolls)
        if count == 0:
            return DiceStats()
        approximate_successes = sum(1 for r in self._rolls if r >= APPROXIMATE_SUCCESS_ROLL)
        return DiceStats(
            total_rolls=count,
            rolls=list(self._rolls),
            average=sum(self._rolls) / count,
            critical_successes=self._critical_successes,
            critical_failures=self._critical_failures,
            success_rate=approximate_successes / count,
        )
