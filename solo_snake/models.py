"""Data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import DIRECTIONS, OPPOSITES

Cell = tuple[int, int]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        return Direction(OPPOSITES[self.value])

    @property
    def vector(self) -> Cell:
        return DIRECTIONS[self.value]


class Lifecycle(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to the presentation side."""

    state: Lifecycle
    snake: tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    level: int
    high_score: int
    paused: bool
    grid_size: int
    direction: Direction
    interval_ms: int

    def head(self):
        return self.snake[0] if self.snake else None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "snake": [[x, y] for x, y in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "level": self.level,
            "high_score": self.high_score,
            "paused": self.paused,
            "grid_size": self.grid_size,
            "direction": self.direction.value,
            "interval_ms": self.interval_ms,
        }
