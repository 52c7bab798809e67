"""
leveling.py: XP curve and rank lookup tables. Built once and never mutated.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .constants import (
    BASE_XP_REQUIRED, DEFAULT_RANK, LEVEL_CAP, RANK_THRESHOLDS, XP_GROWTH_FACTOR
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class LevelingTable:
    """
    Cumulative XP needed to reach each level, from 1 up to the level cap.
    The step from level L to L + 1 costs round(base_xp * growth ** L).
    """

    def __init__(self, base_xp: int = BASE_XP_REQUIRED,
                 growth: float = XP_GROWTH_FACTOR, level_cap: int = LEVEL_CAP):
        if base_xp <= 0:
            raise ValueError(f"base_xp must be positive, got {base_xp}")
        if growth <= 1:
            raise ValueError(f"growth must be greater than 1, got {growth}")
        if level_cap < 1:
            raise ValueError(f"level_cap must be at least 1, got {level_cap}")

        self.base_xp = base_xp
        self.growth = growth
        self.level_cap = level_cap

        self._cumulative: Dict[int, int] = {1: 0}
        for level in range(1, level_cap):
            self._cumulative[level + 1] = self._cumulative[level] + self.step_cost(level)

    def step_cost(self, level: int) -> int:
        return round_half_up(self.base_xp * self.growth ** level)

    def cumulative_xp(self, level: int) -> int:
        """Total XP needed to reach `level`."""
        if level not in self._cumulative:
            raise ValueError(f"level must be between 1 and {self.level_cap}, got {level}")
        return self._cumulative[level]

    def xp_required_for_next_level(self, level: int) -> Union[int, float]:
        """XP between `level` and the next one; infinite at or past the cap."""
        if level >= self.level_cap:
            return math.inf
        return self.step_cost(level)

    def level_for_xp(self, total_xp: int) -> int:
        level = 1
        while level < self.level_cap and total_xp >= self._cumulative[level + 1]:
            level += 1
        return level

    def progress(self, total_xp: int, level: int) -> Tuple[int, Optional[int]]:
        """Returns (XP earned inside `level`, XP needed for the next level or None at the cap)."""
        level = min(max(level, 1), self.level_cap)
        in_level = max(total_xp - self._cumulative[level], 0)
        if level >= self.level_cap:
            return in_level, None
        return in_level, self.step_cost(level)


class RankTable:
    """Ordered (minimum level, rank name) ladder."""

    def __init__(self, thresholds: Sequence[Tuple[int, str]] = RANK_THRESHOLDS,
                 default: str = DEFAULT_RANK):
        if not thresholds:
            raise ValueError("rank table must not be empty")
        levels = [level for level, _ in thresholds]
        if any(lower >= upper for lower, upper in zip(levels, levels[1:])):
            raise ValueError(f"rank thresholds must be strictly increasing, got {levels}")
        if levels[0] > 1:
            raise ValueError(f"the first rank must start at level 1 or below, got {levels[0]}")
        names = [name for _, name in thresholds]
        if len(set(names)) != len(names):
            raise ValueError(f"rank names must be unique, got {names}")

        self._thresholds: List[Tuple[int, str]] = list(thresholds)
        self.default = default

    def ranks(self) -> List[Tuple[int, str]]:
        return list(self._thresholds)

    def rank_for(self, level: int) -> str:
        for threshold, name in reversed(self._thresholds):
            if threshold <= level:
                return name
        return self.default
