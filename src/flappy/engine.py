"""
engine.py: The single-player simulation engine.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .constants import (
    SCREEN_WIDTH, PIPE_SPEED, PIPE_WIDTH, PIPE_INTERVAL, MIN_GAP_Y, MAX_GAP_Y
)
from .data_models import Phase, Player, Pipe, PlayerView, PipeView, Snapshot
from .physics_core import PhysicsCore

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine(PhysicsCore):
    """
    Owns the whole game state and advances it one fixed tick at a time.
    Inherits kinematics and collision from PhysicsCore.

    ``rng`` is anything with ``randint(a, b)``; pass a seeded
    ``random.Random`` (or a stub) to make gap placement reproducible.
    """
    rng: Any = field(default_factory=random.Random)

    _phase: Phase = field(default=Phase.IDLE, init=False)
    _frame: int = field(default=0, init=False)
    _score: int = field(default=0, init=False)
    _high_score: int = field(default=0, init=False)
    _player: Optional[Player] = field(default=None, init=False)
    _pipes: List[Pipe] = field(default_factory=list, init=False)

    # ---------- Read accessors ----------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def player(self) -> Optional[Player]:
        return self._player

    @property
    def pipes(self) -> List[Pipe]:
        """The live pipe list, oldest first. Do not hold on to it across ticks."""
        return self._pipes

    def snapshot(self) -> Snapshot:
        """Immutable copy of the render readout."""
        player_view = None
        if self._player is not None:
            p = self._player
            player_view = PlayerView(p.x, p.y, p.vy, p.size, self.hitbox_radius(p))
        return Snapshot(
            phase=self._phase,
            frame=self._frame,
            score=self._score,
            high_score=self._high_score,
            player=player_view,
            pipes=tuple(PipeView(pipe.x, pipe.gap_top, pipe.gap_bottom) for pipe in self._pipes),
        )

    # ---------- Control ----------

    def apply_action(self):
        """Flap while running; otherwise start a fresh game."""
        if self._phase is Phase.RUNNING:
            self._player.vy = self.flap()
        else:
            self.reset()
            self._phase = Phase.RUNNING
            logger.info("Game started (best so far: %d)", self._high_score)

    def reset(self):
        """Puts a new bird at the start position with a single fresh pipe."""
        self._player = Player()
        self._pipes = []
        self._score = 0
        self._frame = 0
        self._spawn_pipe()

    def _spawn_pipe(self):
        """Adds a new pipe at the right edge with a random gap."""
        gap_y = self.rng.randint(MIN_GAP_Y, MAX_GAP_Y)
        self._pipes.append(Pipe(x=float(SCREEN_WIDTH), gap_y=gap_y))
        logger.debug("Spawned pipe at frame %d with gap_y=%d", self._frame, gap_y)

    def _end_game(self):
        if self._phase is Phase.ENDED:
            return
        self._phase = Phase.ENDED
        logger.info("Game over at frame %d with score %d", self._frame, self._score)

    def step(self):
        """
        The main simulation step. Does nothing unless the game is running.
        """
        if self._phase is not Phase.RUNNING:
            return

        self._frame += 1

        # 1. Bird physics
        player = self._player
        player.y, player.vy = self.apply_gravity_and_movement(player.y, player.vy)

        # 2. Spawn and move pipes
        if self._frame % PIPE_INTERVAL == 0:
            self._spawn_pipe()

        for pipe in self._pipes:
            pipe.x -= PIPE_SPEED

        # 3. Score: pipes leave strictly in spawn order, so only the oldest is checked
        if self._pipes and self._pipes[0].x + PIPE_WIDTH < 0:
            self._pipes.pop(0)
            self._score += 1
            self._high_score = max(self._high_score, self._score)

        # 4. Collisions
        if self.check_collision(player, self._pipes):
            self._end_game()
