import os

# Headless pygame for the client and renderer tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from flappy.engine import SimulationEngine


class FixedGap:
    """Random source stub: every pipe gets the same gap."""

    def __init__(self, gap_y):
        self.gap_y = gap_y
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.gap_y


# Bird hovers between y=262.5 and y=322.5, inside a gap at 220..380
HOVER_GAP_Y = 220
HOVER_CEILING = 320


def hover(engine, ticks):
    """Steps the engine, flapping whenever the bird sinks below the hover line."""
    for _ in range(ticks):
        player = engine.player
        if player.y > HOVER_CEILING and player.vy > 0:
            engine.apply_action()
        engine.step()


@pytest.fixture
def rng():
    return FixedGap(HOVER_GAP_Y)


@pytest.fixture
def engine(rng):
    return SimulationEngine(rng=rng)


@pytest.fixture
def running_engine(engine):
    engine.apply_action()
    return engine
