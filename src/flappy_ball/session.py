"""
session.py: The single owner of the profile, the current run and the tick loop.
"""

import logging
import random
from typing import List, Optional

from .constants import PIPE_SPAWN_INTERVAL_SECONDS, PLAYER_X
from .data_models import (
    Ball, CollisionEvent, MilestoneAward, ObstaclePair, ProfileSummary, RunReport, RunState
)
from .leveling import LevelingTable, RankTable
from .physics_core import PhysicsCore
from .profile_db import ProfileStore
from .progression import ProgressionEngine
from .scoring import RunEvent, ScoringEvaluator
from .spawner import ObstacleSpawner

logger = logging.getLogger(__name__)


class RunActiveError(RuntimeError):
    """Raised when a run is started while another one is still active."""


class GameSession:
    """
    Drives one run at a time: spawn timer, physics, collision, scoring.
    Everything runs on the caller's loop, one tick per frame.
    """

    def __init__(self, store: ProfileStore, rng: Optional[random.Random] = None,
                 spawn_interval: float = PIPE_SPAWN_INTERVAL_SECONDS):
        self.store = store
        self.profile = store.load_profile()

        self.leveling = LevelingTable()
        self.ranks = RankTable()
        self.progression = ProgressionEngine(store, self.leveling, self.ranks)
        self.evaluator = ScoringEvaluator(self.progression)
        self.spawner = ObstacleSpawner(rng)
        self.physics = PhysicsCore()

        self.spawn_interval = spawn_interval
        self.spawn_timer = 0.0
        self.ball = Ball()
        self.run: Optional[RunState] = None
        self.report: Optional[RunReport] = None

        # Saves from older builds may carry a level that disagrees with their XP
        self.progression.reconcile_level(self.profile)

    @property
    def is_active(self) -> bool:
        return self.run is not None and not self.run.is_over

    @property
    def last_milestone(self) -> Optional[MilestoneAward]:
        return self.evaluator.last_award

    def start_run(self) -> RunState:
        if self.is_active:
            raise RunActiveError("a run is already in progress")

        self.run = RunState()
        self.report = None
        self.spawn_timer = 0.0
        self.evaluator.last_award = None
        self.physics.respawn(self.ball)
        logger.info("Run started at level %d.", self.profile.current_level)
        return self.run

    def impulse(self):
        """Applies a jump. Ignored when no run is active."""
        if not self.is_active:
            return
        self.ball.velocity = self.physics.impulse()

    def spawn(self) -> Optional[ObstaclePair]:
        if self.run is None:
            return None
        return self.spawner.spawn(self.run, self.profile.current_level)

    def tick(self, dt: float) -> List[RunEvent]:
        """Advances the active run by `dt` seconds."""
        if not self.is_active:
            return []
        run = self.run

        run.elapsed_millis += dt * 1000

        # 1. Spawn on the fixed cadence
        self.spawn_timer += dt
        while self.spawn_timer >= self.spawn_interval:
            self.spawn_timer -= self.spawn_interval
            self.spawn()

        # 2. Move the ball and the pipes
        self.physics.step_ball(self.ball, dt)
        self.physics.step_obstacles(run.obstacles, dt)

        # 3. Collision ends the run
        collision = self.physics.check_collision(self.ball.y, run.obstacles)
        if collision:
            self.on_collision(collision)
            return [collision]

        # 4. Scoring
        return self.evaluator.evaluate(run, self.profile, PLAYER_X)

    def on_collision(self, event: CollisionEvent) -> Optional[RunReport]:
        """Ends the current run. Repeated collisions are ignored."""
        if self.run is None:
            return None
        report = self.evaluator.handle_collision(self.run, self.profile, event)
        if report:
            self.report = report
        return report

    def describe_profile(self) -> ProfileSummary:
        return self.progression.describe_profile(self.profile)
