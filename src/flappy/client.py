"""
client.py

pygame front end: fixed-timestep simulation loop, input adapter and
game-over wiring to the scoreboard.
"""

import logging
from typing import Optional

import pygame

from .constants import SCREEN_WIDTH, SCREEN_HEIGHT, TICK_TIME, RENDER_FPS
from .data_models import Phase
from .engine import SimulationEngine
from .name_entry import NameEntry
from .renderer import Renderer
from .scoreboard import ScoreReporter

logger = logging.getLogger(__name__)

ACTION_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
CLICK_BUTTONS = (1, 2, 3)


def is_action_event(event: pygame.event.Event) -> bool:
    """Key press, pointer press and touch all mean the same thing."""
    if event.type == pygame.KEYDOWN:
        return event.key in ACTION_KEYS
    if event.type == pygame.MOUSEBUTTONDOWN:
        # pygame also synthesizes mouse events from touches; 4 and up are wheel/extra buttons
        return event.button in CLICK_BUTTONS and not getattr(event, "touch", False)
    return event.type == pygame.FINGERDOWN


class FlappyClient:
    def __init__(self, reporter: ScoreReporter, engine: Optional[SimulationEngine] = None):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Flappy Liberal")

        self.engine = engine or SimulationEngine()
        self.reporter = reporter
        self.renderer = Renderer()
        self.name_entry = NameEntry()

        # Time Management
        self.clock = pygame.time.Clock()
        self.tick_timer = 0.0
        self.running = True

    def run(self):
        """The main client execution loop."""
        try:
            while self.running:
                delta_time = self.clock.tick(RENDER_FPS) / 1000.0

                for event in pygame.event.get():
                    self.handle_event(event)

                # --- Simulation Loop (Fixed Timestep) ---
                self.tick_timer += delta_time
                while self.tick_timer >= TICK_TIME:
                    self.tick_timer -= TICK_TIME
                    self.tick()

                self.draw()
        finally:
            self.reporter.close(timeout=1.0)
            pygame.quit()

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
            return

        if self.name_entry.active and event.type == pygame.KEYDOWN:
            if event.key in CONFIRM_KEYS:
                self._submit_initials()
                return
            if event.key == pygame.K_BACKSPACE:
                self.name_entry.backspace()
                return
            char = getattr(event, "unicode", "")
            if char.isalpha():
                self.name_entry.type_char(char)
                return

        if is_action_event(event):
            self.action()

    def action(self):
        """Flap, or start a new game and forget everything from the last one."""
        if self.engine.phase is not Phase.RUNNING:
            self.name_entry.cancel()
            self.reporter.new_game()
        self.engine.apply_action()

    def tick(self):
        """One fixed simulation step."""
        was_running = self.engine.phase is Phase.RUNNING
        self.engine.step()
        if not was_running:
            return

        self.renderer.advance()
        if self.engine.phase is Phase.ENDED:
            self._on_game_over()

    def _on_game_over(self):
        score = self.engine.score
        if score > 0:
            self.name_entry.open(score)
        self.reporter.refresh()

    def _submit_initials(self):
        score = self.name_entry.score
        name = self.name_entry.confirm()
        if name:
            logger.info("Submitting %d for %s", score, name)
            self.reporter.submit(name, score)

    def draw(self):
        self.renderer.draw(
            self.screen,
            self.engine.snapshot(),
            leaderboard=self.reporter.fetch_leaderboard(),
            name_entry=self.name_entry,
        )
        pygame.display.flip()
