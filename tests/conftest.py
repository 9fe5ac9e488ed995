import random

import pytest

from solo_snake.game import GameEngine
from solo_snake.score_store import MemoryScoreStore


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def engine(store):
    return GameEngine(store, rng=random.Random(7))


@pytest.fixture
def playing(engine):
    """An engine that has been started, with food parked away from the snake's row."""
    engine.start()
    engine.food = (0, 0)
    return engine
