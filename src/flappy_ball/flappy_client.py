#!/usr/bin/env python3
"""
flappy_client.py

pygame front end: input, rendering of the run, game-over report and profile screen.
"""

import logging
import random
from typing import List, Optional

import pygame

from .constants import (
    BALL_RADIUS, DB_FILE, PLAYER_X, RENDER_FPS, SCREEN_HEIGHT, SCREEN_WIDTH
)
from .data_models import Obstacle
from .profile_db import ProfileStore
from .session import GameSession

logger = logging.getLogger(__name__)

TICK_TIME = 1.0 / RENDER_FPS

PIPE_COLOR = (0, 255, 0)
MILESTONE_COLORS = {
    10: ((255, 0, 0), (255, 255, 255)),
    20: ((255, 0, 255), (255, 255, 255)),
    50: ((255, 255, 0), (0, 0, 0)),
    100: ((255, 136, 0), (255, 255, 255)),
    200: ((0, 255, 255), (0, 0, 0)),
    350: ((138, 43, 226), (255, 255, 255)),
    500: ((255, 215, 0), (0, 0, 0)),
}
XP_TEXT_SECONDS = 1.5

HOME, PLAYING, GAME_OVER, PROFILE = "home", "playing", "game_over", "profile"


class FlappyBallClient:
    def __init__(self, session: GameSession):
        pygame.init()
        self.session = session
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Flappy Ball")

        self.clock = pygame.time.Clock()
        self.tick_timer = 0.0
        self.screen_name = HOME
        self.previous_screen = HOME

        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)
        self.stars = [
            (random.randint(0, SCREEN_WIDTH), random.randint(0, SCREEN_HEIGHT))
            for _ in range(100)
        ]

        self.xp_text: Optional[str] = None
        self.xp_text_timer = 0.0

    def run(self):
        """The main client execution loop."""
        running = True
        while running:
            frame_time = self.clock.tick(RENDER_FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                    self._toggle_profile()
                elif (event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE) or event.type == pygame.MOUSEBUTTONDOWN:
                    self._on_tap()

            # --- Simulation Loop (Fixed Timestep) ---
            if self.screen_name == PLAYING:
                self.tick_timer += frame_time
                while self.tick_timer >= TICK_TIME:
                    self.tick_timer -= TICK_TIME
                    self._step()
            self.xp_text_timer = max(self.xp_text_timer - frame_time, 0.0)

            self._draw()

        self.session.store.close()
        pygame.quit()

    def _on_tap(self):
        if self.screen_name == PLAYING:
            self.session.impulse()
        elif self.screen_name in (HOME, GAME_OVER):
            self.session.start_run()
            self.tick_timer = 0.0
            self.xp_text = None
            self.screen_name = PLAYING

    def _toggle_profile(self):
        if self.screen_name == PROFILE:
            self.screen_name = self.previous_screen
        elif self.screen_name != PLAYING:
            self.previous_screen = self.screen_name
            self.screen_name = PROFILE

    def _step(self):
        award_before = self.session.last_milestone
        self.session.tick(TICK_TIME)

        award = self.session.last_milestone
        if award is not None and award is not award_before:
            self.xp_text = award.message
            self.xp_text_timer = XP_TEXT_SECONDS

        if not self.session.is_active:
            self.screen_name = GAME_OVER

    # ----------------- Rendering -----------------

    def _draw(self):
        screen = self.screen
        screen.fill((0, 0, 0))
        for x, y in self.stars:
            pygame.draw.circle(screen, (128, 128, 128), (x, y), 1)
        pygame.draw.circle(screen, (240, 240, 240), (SCREEN_WIDTH - 50, 50), 20)

        if self.screen_name == PROFILE:
            self._draw_profile()
        else:
            if self.session.run is not None:
                self._draw_run()
            if self.screen_name == HOME:
                self._draw_lines(["Flappy Ball", "", "Space / Click = Play", "P = Profile"])
            elif self.screen_name == GAME_OVER:
                self._draw_game_over()

        pygame.display.flip()

    def _draw_run(self):
        screen = self.screen
        white = (255, 255, 255)

        for obstacle in self.session.run.obstacles:
            self._draw_obstacle(obstacle)

        ball = self.session.ball
        pygame.draw.circle(screen, white, (int(PLAYER_X), int(ball.y)), BALL_RADIUS)

        score_text = self.large_font.render(f"Score: {self.session.run.pipes_passed}", True, white)
        screen.blit(score_text, (SCREEN_WIDTH // 2 - score_text.get_width() // 2, 50))

        if self.xp_text and self.xp_text_timer > 0:
            rise = (XP_TEXT_SECONDS - self.xp_text_timer) / XP_TEXT_SECONDS * 70
            xp_surf = self.font.render(self.xp_text, True, (0, 255, 0))
            screen.blit(xp_surf, (PLAYER_X - xp_surf.get_width() // 2, ball.y - 50 - rise))

    def _draw_obstacle(self, obstacle: Obstacle):
        color, text_color = MILESTONE_COLORS.get(obstacle.milestone_tag, (PIPE_COLOR, None))
        rect = pygame.Rect(
            int(obstacle.x - obstacle.width / 2), int(obstacle.top),
            int(obstacle.width), int(obstacle.height))
        pygame.draw.rect(self.screen, color, rect)

        if obstacle.milestone_tag is not None:
            label = self.font.render(str(obstacle.milestone_tag), True, text_color)
            self.screen.blit(label, (rect.centerx - label.get_width() // 2,
                                     rect.centery - label.get_height() // 2))

    def _draw_game_over(self):
        report = self.session.report
        lines = ["Game Over"]
        if report is not None:
            lines += [
                f"Score: {report.score}",
                f"Time: {report.playtime_text}",
                f"Pipes: {report.pipes_crossed}",
                "",
            ] + report.summary_lines()
        lines += ["", "Space / Click = Play again", "P = Profile"]
        self._draw_lines(lines)

    def _draw_profile(self):
        summary = self.session.describe_profile()
        white = (255, 255, 255)
        needed = summary.xp_for_next_level if summary.xp_for_next_level is not None else "MAX"
        lines = [
            summary.name,
            f"Level {summary.level} - {summary.rank}",
            f"XP: {summary.xp_in_level} / {needed}",
            "",
            "",
            f"Total XP: {summary.total_xp}",
            f"Playtime: {summary.total_playtime_seconds // 60} minutes",
            f"Pipes crossed: {summary.total_pipes_crossed}",
            f"Best run: {summary.highest_pipes_in_run} pipes",
            "",
            "Ranks:",
        ] + [
            f"{'[x]' if achieved else '[ ]'} {name} (Level {threshold})"
            for name, threshold, achieved in summary.ranks
        ] + ["", "P = Back"]
        self._draw_lines(lines, top=60)

        bar = pygame.Rect(40, 60 + 4 * 28, SCREEN_WIDTH - 80, 14)
        pygame.draw.rect(self.screen, (80, 80, 80), bar)
        fill = bar.copy()
        fill.width = int(bar.width * summary.xp_fraction)
        pygame.draw.rect(self.screen, (0, 200, 0), fill)
        pygame.draw.rect(self.screen, white, bar, 1)

    def _draw_lines(self, lines: List[str], top: int = 160):
        for i, line in enumerate(lines):
            font = self.large_font if i == 0 else self.font
            surf = font.render(line, True, (255, 255, 255))
            self.screen.blit(surf, (SCREEN_WIDTH // 2 - surf.get_width() // 2, top + i * 28))


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    session = GameSession(ProfileStore(DB_FILE))
    FlappyBallClient(session).run()


if __name__ == "__main__":
    main()
