"""
data_models.py: Data structures for the player profile, the run and its obstacles.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from .constants import (
    DEFAULT_PLAYER_NAME, LEVEL_CAP, PIPE_WIDTH, RANK_THRESHOLDS, RESPAWN_Y
)

STARTING_RANK = RANK_THRESHOLDS[0][1]


def _starting_ranks() -> Set[str]:
    return {STARTING_RANK}


@dataclass
class PlayerProfile:
    """The durable progression record, one per device."""
    name: str = DEFAULT_PLAYER_NAME
    total_xp: int = 0
    current_level: int = 1
    total_playtime_seconds: int = 0
    total_pipes_crossed: int = 0
    highest_pipes_in_run: int = 0
    achieved_ranks: Set[str] = field(default_factory=_starting_ranks)

    def to_record(self) -> dict:
        """Prepares the profile for storage."""
        return {
            "name": self.name,
            "total_xp": self.total_xp,
            "current_level": self.current_level,
            "total_playtime_seconds": self.total_playtime_seconds,
            "total_pipes_crossed": self.total_pipes_crossed,
            "highest_pipes_in_run": self.highest_pipes_in_run,
            "achieved_ranks": sorted(self.achieved_ranks),
        }

    @classmethod
    def from_record(cls, record: dict) -> "PlayerProfile":
        """
        Rebuilds a profile from a stored record.
        Missing fields fall back to defaults so older saves keep loading.
        """
        defaults = cls()
        ranks = set(record.get("achieved_ranks") or ())
        ranks.add(STARTING_RANK)
        return cls(
            name=str(record.get("name", defaults.name)),
            total_xp=max(int(record.get("total_xp", defaults.total_xp)), 0),
            current_level=min(
                max(int(record.get("current_level", defaults.current_level)), 1), LEVEL_CAP),
            total_playtime_seconds=max(
                int(record.get("total_playtime_seconds", defaults.total_playtime_seconds)), 0),
            total_pipes_crossed=max(
                int(record.get("total_pipes_crossed", defaults.total_pipes_crossed)), 0),
            highest_pipes_in_run=max(
                int(record.get("highest_pipes_in_run", defaults.highest_pipes_in_run)), 0),
            achieved_ranks=ranks,
        )


@dataclass
class Ball:
    """The player's body. Only its vertical state changes."""
    y: float = RESPAWN_Y
    velocity: float = 0.0


@dataclass
class Obstacle:
    """One pipe section. Position is the section's center."""
    x: float
    y: float
    height: float
    velocity_x: float
    width: float = PIPE_WIDTH
    is_leader: bool = False              # Only the top pipe of a pair scores
    scored: bool = False
    milestone_tag: Optional[int] = None

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class ObstaclePair:
    """Descriptor of one spawned top + bottom pipe pair."""
    top: Obstacle
    bottom: Obstacle
    gap: float
    gap_center: float
    speed: float
    eased: bool
    milestone_tag: Optional[int] = None

    @property
    def obstacles(self) -> Tuple[Obstacle, Obstacle]:
        return self.top, self.bottom


@dataclass
class RunState:
    """Transient state of a single run."""
    elapsed_millis: float = 0.0
    pipes_passed: int = 0
    milestones_awarded: Set[int] = field(default_factory=set)
    milestone_xp: int = 0
    spawn_count: int = 0
    is_over: bool = False
    obstacles: List[Obstacle] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> int:
        return int(math.floor(self.elapsed_millis / 1000))


# -------- Events --------

class CollisionKind(Enum):
    OBSTACLE = "obstacle"
    BOUNDARY = "boundary"


@dataclass(frozen=True)
class PassEvent:
    obstacle: Obstacle
    pipes_passed: int


@dataclass(frozen=True)
class DestroyEvent:
    obstacle: Obstacle


@dataclass(frozen=True)
class CollisionEvent:
    kind: CollisionKind


# -------- Progression results --------

@dataclass(frozen=True)
class MilestoneAward:
    threshold: int
    xp: int

    @property
    def message(self) -> str:
        return f"+{self.xp} XP ({self.threshold} Pipes)"


@dataclass
class RunReport:
    """Everything the game-over screen shows, built from what was actually credited."""
    score: int
    elapsed_seconds: int
    pipes_crossed: int
    time_xp: int
    pipe_xp: int
    milestone_xp: int
    milestones: List[int] = field(default_factory=list)
    level_up: bool = False
    new_level: int = 1
    new_ranks: List[str] = field(default_factory=list)

    @property
    def total_xp(self) -> int:
        return self.time_xp + self.pipe_xp + self.milestone_xp

    @property
    def new_rank(self) -> Optional[str]:
        """The highest rank unlocked by this run, if any."""
        return self.new_ranks[-1] if self.new_ranks else None

    @property
    def playtime_text(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes} minutes {seconds} seconds"

    def summary_lines(self) -> List[str]:
        lines = []
        if self.time_xp > 0:
            lines.append(f"{self.time_xp} XP for {self.elapsed_seconds // 60} minutes played")
        else:
            lines.append("No XP from time played in this short run.")
        if self.pipe_xp > 0:
            lines.append(f"{self.pipe_xp} XP for {self.pipes_crossed} pipes crossed")
        if self.milestones:
            reached = ", ".join(f"{m} pipes" for m in self.milestones)
            lines.append(f"{self.milestone_xp} XP for milestones ({reached})")
        if self.level_up:
            lines.append(f"Congratulations! You reached Level {self.new_level}!")
        if self.new_rank:
            lines.append(f"You are now a {self.new_rank}!")
        return lines


@dataclass
class ProfileSummary:
    """Derived view of a profile for the profile screen."""
    name: str
    level: int
    rank: str
    total_xp: int
    xp_in_level: int
    xp_for_next_level: Optional[int]     # None once the level cap is reached
    total_playtime_seconds: int
    total_pipes_crossed: int
    highest_pipes_in_run: int
    ranks: List[Tuple[str, int, bool]] = field(default_factory=list)

    @property
    def xp_fraction(self) -> float:
        if not self.xp_for_next_level:
            return 1.0
        return min(max(self.xp_in_level / self.xp_for_next_level, 0.0), 1.0)
