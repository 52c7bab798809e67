"""
spawner.py: Generates pipe pairs, easing in at the start of a run and then
scaling gap and speed with the player's level.
"""

import logging
import random
from typing import Optional

from .constants import (
    BASE_PIPE_GAP, BASE_PIPE_SPEED, DIFFICULTY_LEVEL_CAP, EASE_IN_CENTER_JITTER,
    EASE_IN_COUNT, EASE_IN_GAP, EASE_IN_SPEED, GAP_SHRINK_RATIO, MAX_PIPE_SPEED,
    MILESTONE_THRESHOLDS, MIN_PIPE_GAP, MIN_PIPE_HEIGHT, PIPE_SPAWN_X,
    SCREEN_HEIGHT, SPEED_GROWTH_RATIO
)
from .data_models import Obstacle, ObstaclePair, RunState

logger = logging.getLogger(__name__)


def scaled_gap(level: int) -> float:
    influence = min(max(level, 0), DIFFICULTY_LEVEL_CAP) / DIFFICULTY_LEVEL_CAP
    return max(BASE_PIPE_GAP - influence * BASE_PIPE_GAP * GAP_SHRINK_RATIO, MIN_PIPE_GAP)


def scaled_speed(level: int) -> float:
    influence = min(max(level, 0), DIFFICULTY_LEVEL_CAP) / DIFFICULTY_LEVEL_CAP
    return min(BASE_PIPE_SPEED + influence * BASE_PIPE_SPEED * SPEED_GROWTH_RATIO, MAX_PIPE_SPEED)


class ObstacleSpawner:
    """Creates one pipe pair per call and adds it to the run's live obstacles."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def spawn(self, run: RunState, level: int) -> Optional[ObstaclePair]:
        if run.is_over:
            return None

        eased = run.spawn_count < EASE_IN_COUNT
        if eased:
            gap = float(EASE_IN_GAP)
            speed = EASE_IN_SPEED
            gap_center = SCREEN_HEIGHT / 2 + self.rng.uniform(
                -EASE_IN_CENTER_JITTER, EASE_IN_CENTER_JITTER)
        else:
            gap = scaled_gap(level)
            speed = scaled_speed(level)
            top_height = self.rng.randint(
                MIN_PIPE_HEIGHT, int(SCREEN_HEIGHT - MIN_PIPE_HEIGHT - gap))
            gap_center = top_height + gap / 2

        # The score this pair produces once passed
        ordinal = run.pipes_passed + 1
        tag = ordinal if ordinal in MILESTONE_THRESHOLDS else None

        pair = self._build_pair(gap, gap_center, speed, eased, tag)
        run.spawn_count += 1
        run.obstacles.extend(pair.obstacles)

        logger.debug(
            "Spawned pair #%d (%s): gap=%.1f center=%.1f speed=%.1f tag=%s",
            run.spawn_count, "ease-in" if eased else "scaled", gap, gap_center, speed, tag)
        return pair

    @staticmethod
    def _build_pair(gap: float, gap_center: float, speed: float,
                    eased: bool, tag: Optional[int]) -> ObstaclePair:
        top_height = gap_center - gap / 2
        bottom_height = SCREEN_HEIGHT - top_height - gap

        top = Obstacle(
            x=float(PIPE_SPAWN_X), y=top_height / 2, height=top_height,
            velocity_x=-speed, is_leader=True, milestone_tag=tag)
        bottom = Obstacle(
            x=float(PIPE_SPAWN_X), y=SCREEN_HEIGHT - bottom_height / 2, height=bottom_height,
            velocity_x=-speed, is_leader=False, milestone_tag=tag)

        return ObstaclePair(
            top=top, bottom=bottom, gap=gap, gap_center=gap_center,
            speed=speed, eased=eased, milestone_tag=tag)
