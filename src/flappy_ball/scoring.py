"""
scoring.py: Turns pipe positions and collisions into run events.
"""

import logging
from typing import List, Optional, Union

from .data_models import (
    CollisionEvent, DestroyEvent, MilestoneAward, PassEvent, PlayerProfile, RunReport, RunState
)
from .progression import ProgressionEngine

logger = logging.getLogger(__name__)

RunEvent = Union[PassEvent, DestroyEvent, CollisionEvent]


class ScoringEvaluator:
    """
    Evaluates the live pipes once per tick and applies the resulting events
    to the run and the profile.
    """

    def __init__(self, progression: ProgressionEngine):
        self.progression = progression
        self.last_award: Optional[MilestoneAward] = None

    def evaluate(self, run: RunState, profile: PlayerProfile, player_x: float) -> List[RunEvent]:
        events: List[RunEvent] = []
        if run.is_over:
            return events

        for obstacle in list(run.obstacles):
            if obstacle.is_leader and not obstacle.scored and obstacle.x < player_x:
                obstacle.scored = True
                run.pipes_passed += 1
                events.append(PassEvent(obstacle=obstacle, pipes_passed=run.pipes_passed))

                award = self.progression.award_milestone(run, profile)
                if award:
                    self.last_award = award

            # Remove pipes that are fully off-screen to the left
            if obstacle.x < -obstacle.width:
                run.obstacles.remove(obstacle)
                events.append(DestroyEvent(obstacle=obstacle))

        return events

    def handle_collision(self, run: RunState, profile: PlayerProfile,
                         event: CollisionEvent) -> Optional[RunReport]:
        """Ends the run on the first collision; later ones are ignored."""
        if run.is_over:
            return None

        run.is_over = True
        logger.info("Collision with %s after %d pipes.", event.kind.value, run.pipes_passed)
        return self.progression.end_run(
            profile,
            score=run.pipes_passed,
            elapsed_seconds=run.elapsed_seconds,
            pipes_crossed=run.pipes_passed,
            run=run,
        )
