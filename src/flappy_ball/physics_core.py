"""
physics_core.py: Deterministic kinematics and collision detection for the ball and pipes.
"""

from typing import List, Optional

from .constants import (
    BALL_RADIUS, GRAVITY_ACCEL, JUMP_IMPULSE, MAX_FALL_VELOCITY,
    PLAYER_X, RESPAWN_Y, SCREEN_HEIGHT
)
from .data_models import Ball, CollisionEvent, CollisionKind, Obstacle


class PhysicsCore:
    """
    Moves the ball and the pipes and reports contact.
    The run logic only ever sees the CollisionEvent it returns.
    """

    SCREEN_HEIGHT = SCREEN_HEIGHT
    PLAYER_X = PLAYER_X

    def apply_gravity_and_movement(self, y: float, velocity: float, dt: float) -> tuple[float, float]:
        """
        Calculates new velocity and position after a timestep of `dt` seconds.
        """
        velocity += GRAVITY_ACCEL * dt
        velocity = min(velocity, MAX_FALL_VELOCITY)
        y += velocity * dt

        y = round(y, 4)
        velocity = round(velocity, 4)

        return y, velocity

    def impulse(self) -> float:
        """Returns the instantaneous velocity after a jump."""
        return JUMP_IMPULSE

    def step_ball(self, ball: Ball, dt: float):
        ball.y, ball.velocity = self.apply_gravity_and_movement(ball.y, ball.velocity, dt)

    def step_obstacles(self, obstacles: List[Obstacle], dt: float):
        for obstacle in obstacles:
            obstacle.x = round(obstacle.x + obstacle.velocity_x * dt, 4)

    def check_collision(self, y: float, obstacles: List[Obstacle]) -> Optional[CollisionEvent]:
        """Checks for contact with the floor, the ceiling, or any pipe."""

        # 1. Floor/Ceiling Collision
        if y - BALL_RADIUS <= 0 or y + BALL_RADIUS >= self.SCREEN_HEIGHT:
            return CollisionEvent(CollisionKind.BOUNDARY)

        # 2. Pipe Collision
        for obstacle in obstacles:
            half_width = obstacle.width / 2
            if obstacle.x - half_width - BALL_RADIUS < self.PLAYER_X < obstacle.x + half_width + BALL_RADIUS:
                if obstacle.top - BALL_RADIUS < y < obstacle.bottom + BALL_RADIUS:
                    return CollisionEvent(CollisionKind.OBSTACLE)

        return None

    def respawn(self, ball: Ball):
        ball.y = RESPAWN_Y
        ball.velocity = 0.0
