"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

from typing import Iterable

from .constants import (
    GRAVITY, FLAP_STRENGTH, BIRD_HITBOX_RATIO, PIPE_WIDTH, PLAY_HEIGHT
)
from .data_models import Player, Pipe


class PhysicsCore:
    """
    Per-tick physics shared by the simulation engine.
    All quantities are in pixels and pixels per tick.
    """

    PLAY_HEIGHT = PLAY_HEIGHT

    def apply_gravity_and_movement(self, y: float, velocity: float) -> tuple[float, float]:
        """
        Advances one tick: velocity first, then position (semi-implicit Euler).
        """
        velocity += GRAVITY
        y += velocity
        return y, velocity

    def flap(self) -> float:
        """Returns the instantaneous velocity after a flap."""
        return FLAP_STRENGTH

    @staticmethod
    def hitbox_radius(player: Player) -> float:
        return player.size / 2 * BIRD_HITBOX_RATIO

    def hits_pipe(self, player: Player, pipe: Pipe) -> bool:
        r = self.hitbox_radius(player)
        within_x = player.x + r > pipe.x and player.x - r < pipe.x + PIPE_WIDTH
        outside_gap = player.y - r < pipe.gap_top or player.y + r > pipe.gap_bottom
        return within_x and outside_gap

    def out_of_bounds(self, player: Player) -> bool:
        """Lower hitbox edge below the ground line or upper edge above the top."""
        r = self.hitbox_radius(player)
        return player.y + r > self.PLAY_HEIGHT or player.y - r < 0

    def check_collision(self, player: Player, pipes: Iterable[Pipe]) -> bool:
        """Checks for collisions with any pipe, the ground or the ceiling."""
        if any(self.hits_pipe(player, pipe) for pipe in pipes):
            return True
        return self.out_of_bounds(player)
