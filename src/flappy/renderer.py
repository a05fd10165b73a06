"""
renderer.py: Draws a simulation snapshot with pygame primitives.
"""

from typing import List, Optional, Tuple

import pygame

from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, GROUND_HEIGHT, PLAY_HEIGHT,
    CLOUD_SPEED, GROUND_SPEED, GROUND_TILE_WIDTH
)
from .data_models import Phase, Snapshot
from .name_entry import NameEntry

SKY = (110, 198, 247)
CLOUD = (255, 255, 255)
GROUND = (185, 122, 86)
GRASS = (106, 177, 80)
DIRT = (141, 90, 54)
PIPE = (60, 160, 60)
PIPE_EDGE = (30, 100, 30)
BIRD = (255, 235, 59)
BIRD_EDGE = (191, 166, 0)
WHITE = (255, 255, 255)
SHADE = (0, 0, 0, 140)

# (width, height, y)
CLOUDS = [(60, 20, 80), (40, 16, 50), (60, 20, 120)]


class Renderer:
    """Owns the scenery scroll offsets; everything else comes from the snapshot."""

    def __init__(self):
        self.cloud_offset = 0.0
        self.ground_offset = 0.0
        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 26)

    def advance(self):
        """Scrolls the clouds and ground by one tick."""
        self.cloud_offset += CLOUD_SPEED
        if self.cloud_offset > SCREEN_WIDTH + 120:
            self.cloud_offset = 0.0
        self.ground_offset += GROUND_SPEED
        if self.ground_offset > GROUND_TILE_WIDTH:
            self.ground_offset = 0.0

    def draw(self, screen: pygame.Surface, snapshot: Snapshot,
             leaderboard: Optional[List[Tuple[str, int]]] = None,
             name_entry: Optional[NameEntry] = None):
        self._draw_background(screen)
        self._draw_pipes(screen, snapshot)
        self._draw_ground(screen)
        self._draw_bird(screen, snapshot)

        if snapshot.phase is Phase.IDLE:
            self._draw_message(screen, "Flappy Liberal", "Press Space, Enter, or Tap to Start")
        else:
            self._draw_score(screen, snapshot)

        if snapshot.phase is Phase.ENDED:
            self._draw_message(screen, "LIBERAL", "Press Space, Enter, or Tap to Restart")
            if name_entry is not None and name_entry.active:
                self._draw_name_entry(screen, name_entry)
            if leaderboard:
                self._draw_leaderboard(screen, leaderboard)

    def _draw_background(self, screen):
        screen.fill(SKY)
        for i, (w, h, y) in enumerate(CLOUDS):
            x = (60 + i * 120 - self.cloud_offset) % (SCREEN_WIDTH + 120)
            if x < -w:
                x += SCREEN_WIDTH + 120
            pygame.draw.rect(screen, CLOUD, (int(x), y, w, h))

    def _draw_ground(self, screen):
        tiles = SCREEN_WIDTH // GROUND_TILE_WIDTH + 2
        for i in range(tiles):
            x = int(i * GROUND_TILE_WIDTH - self.ground_offset)
            pygame.draw.rect(screen, GROUND, (x, PLAY_HEIGHT, GROUND_TILE_WIDTH, GROUND_HEIGHT))
            pygame.draw.rect(screen, GRASS, (x, PLAY_HEIGHT, GROUND_TILE_WIDTH, 8))
            pygame.draw.rect(screen, DIRT, (x, PLAY_HEIGHT + 16, GROUND_TILE_WIDTH, 8))

    def _draw_pipes(self, screen, snapshot):
        for pipe in snapshot.pipes:
            x = int(pipe.x)
            top = pygame.Rect(x, 0, pipe.width, pipe.gap_top)
            bottom = pygame.Rect(x, pipe.gap_bottom, pipe.width, PLAY_HEIGHT - pipe.gap_bottom)
            for rect in (top, bottom):
                pygame.draw.rect(screen, PIPE, rect)
                pygame.draw.rect(screen, PIPE_EDGE, rect, 3)

    def _draw_bird(self, screen, snapshot):
        bird = snapshot.player
        if bird is None:
            return
        center = (int(bird.x), int(bird.y))
        pygame.draw.circle(screen, BIRD, center, bird.size // 2)
        pygame.draw.circle(screen, BIRD_EDGE, center, bird.size // 2, 3)

    def _draw_score(self, screen, snapshot):
        score_text = self.large_font.render(str(snapshot.score), True, WHITE)
        screen.blit(score_text, (SCREEN_WIDTH // 2 - score_text.get_width() // 2, 60))
        best = self.font.render(f"Best: {snapshot.high_score}", True, WHITE)
        screen.blit(best, (10, 10))

    def _draw_message(self, screen, title, subtitle):
        box = pygame.Surface((SCREEN_WIDTH - 40, 120), pygame.SRCALPHA)
        box.fill(SHADE)
        screen.blit(box, (20, SCREEN_HEIGHT // 3 - 20))

        title_surf = self.large_font.render(title, True, WHITE)
        screen.blit(title_surf, (SCREEN_WIDTH // 2 - title_surf.get_width() // 2, SCREEN_HEIGHT // 3))
        sub_surf = self.font.render(subtitle, True, WHITE)
        screen.blit(sub_surf, (SCREEN_WIDTH // 2 - sub_surf.get_width() // 2, SCREEN_HEIGHT // 3 + 55))

    def _draw_name_entry(self, screen, name_entry):
        slots = name_entry.text.ljust(name_entry.length, "_")
        prompt = self.font.render(f"Enter your initials: {slots}", True, WHITE)
        screen.blit(prompt, (SCREEN_WIDTH // 2 - prompt.get_width() // 2, SCREEN_HEIGHT // 2 + 10))

    def _draw_leaderboard(self, screen, leaderboard):
        y = int(SCREEN_HEIGHT * 0.65)
        title = self.font.render("High Scores:", True, WHITE)
        screen.blit(title, (SCREEN_WIDTH // 2 - title.get_width() // 2, y))
        for i, (name, score) in enumerate(leaderboard):
            txt = self.font.render(f"{i + 1}. {name} - {score}", True, WHITE)
            screen.blit(txt, (SCREEN_WIDTH // 2 - txt.get_width() // 2, y + 26 * (i + 1)))
