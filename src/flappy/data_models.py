"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .constants import BIRD_X, BIRD_START_Y, BIRD_SIZE, PIPE_WIDTH, PIPE_GAP


class Phase(str, Enum):
    """Lifecycle stage of a game."""
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class Player:
    """The live, mutable bird."""
    x: float = float(BIRD_X)
    y: float = float(BIRD_START_Y)
    vy: float = 0.0
    size: int = BIRD_SIZE


@dataclass
class Pipe:
    """A scrolling obstacle. gap_y is the top edge of the opening."""
    x: float
    gap_y: int

    @property
    def gap_top(self) -> int:
        return self.gap_y

    @property
    def gap_bottom(self) -> int:
        return self.gap_y + PIPE_GAP


# ---------- Read-only views handed to the renderer and other threads ----------

@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    vy: float
    size: int
    hitbox_radius: float


@dataclass(frozen=True)
class PipeView:
    x: float
    gap_top: int
    gap_bottom: int
    width: int = PIPE_WIDTH


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of everything a frame needs to draw."""
    phase: Phase
    frame: int
    score: int
    high_score: int
    player: Optional[PlayerView]
    pipes: Tuple[PipeView, ...]
