"""Core game state and logic."""

import logging
import random
from typing import Callable, Optional

from .constants import GRID_SIZE, HIGH_SCORE_KEY
from .errors import BoardFullError, ScoreStoreError, UnknownIntentError
from .geometry import initial_snake, random_food, next_head, has_self_collision
from .levels import points_for_food, level_threshold, tick_interval_ms
from .models import Cell, Direction, GameSnapshot, Lifecycle

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-player snake on a wrapping grid.

    All mutation goes through the intent methods and :meth:`tick`. Callers are
    expected to serialize those calls (the service runs them on one event loop).
    """

    def __init__(self, store, grid_size: int = GRID_SIZE, rng: Optional[random.Random] = None,
                 on_high_score: Optional[Callable[[int], None]] = None):
        self.store = store
        self.grid_size = grid_size
        self.rng = rng or random.Random()
        self.on_high_score = on_high_score or self.write_high_score
        self.high_score = self._read_high_score()

        self.state = Lifecycle.NOT_STARTED
        self.epoch = 0
        self.snake: list[Cell] = []
        self.food: Optional[Cell] = None
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.score = 0
        self.level = 1
        self.paused = False
        self.reset_run()

    def _read_high_score(self) -> int:
        try:
            return self.store.get(HIGH_SCORE_KEY) or 0
        except ScoreStoreError as e:
            logger.warning("High score unavailable, starting from 0: %s", e)
            return 0

    def write_high_score(self, value: int):
        try:
            self.store.set(HIGH_SCORE_KEY, value)
        except ScoreStoreError as e:
            logger.error("Failed to persist high score %d: %s", value, e)

    @property
    def runnable(self) -> bool:
        return self.state is Lifecycle.PLAYING and not self.paused

    @property
    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.level)

    def reset_run(self):
        self.score = 0
        self.level = 1
        self.snake = initial_snake()
        self.food = random_food(self.snake, self.grid_size, self.rng)
        self.direction = Direction.RIGHT
        self.pending_direction = Direction.RIGHT
        self.paused = False

    def _transition(self, new_state: Lifecycle):
        logger.info("Game %s -> %s (score=%d, level=%d)",
                    self.state.value, new_state.value, self.score, self.level)
        self.state = new_state
        self.epoch += 1

    # ── Intents ────────────────────────────────────────────────────

    def start(self) -> bool:
        if self.state is not Lifecycle.NOT_STARTED:
            return False
        self.reset_run()
        self._transition(Lifecycle.PLAYING)
        return True

    def restart(self) -> bool:
        if self.state is not Lifecycle.GAME_OVER:
            return False
        self.reset_run()
        self._transition(Lifecycle.PLAYING)
        return True

    def reset(self) -> bool:
        if self.state is not Lifecycle.PLAYING:
            return False
        self.reset_run()
        self._transition(Lifecycle.NOT_STARTED)
        return True

    def continue_game(self) -> bool:
        if self.state is not Lifecycle.LEVEL_COMPLETE:
            return False
        self.paused = False
        self._transition(Lifecycle.PLAYING)
        return True

    def toggle_pause(self) -> bool:
        if self.state is not Lifecycle.PLAYING:
            return False
        self.paused = not self.paused
        self.epoch += 1
        logger.info("Game %s", "paused" if self.paused else "resumed")
        return True

    def set_direction(self, direction: Direction) -> bool:
        if self.state is not Lifecycle.PLAYING:
            return False
        # No reversing into the neck
        if direction is self.direction.opposite:
            logger.debug("Ignoring reversal to %s", direction.value)
            return False
        self.pending_direction = direction
        return True

    def apply_intent(self, name: str, direction: Optional[Direction] = None) -> bool:
        """Dispatch an intent by its wire name."""
        if name == "set_direction":
            if direction is None:
                raise UnknownIntentError("set_direction needs a direction")
            return self.set_direction(direction)
        handlers = {
            "start": self.start,
            "restart": self.restart,
            "reset": self.reset,
            "continue": self.continue_game,
            "toggle_pause": self.toggle_pause,
        }
        handler = handlers.get(name)
        if handler is None:
            raise UnknownIntentError(f"unknown intent {name!r}")
        return handler()

    # ── Simulation ─────────────────────────────────────────────────

    def _end_life(self):
        if self.score > self.high_score:
            self.high_score = self.score
            logger.info("New high score: %d", self.high_score)
            self.on_high_score(self.high_score)
        self._transition(Lifecycle.GAME_OVER)

    def tick(self) -> bool:
        """Advance the game by one step. Returns False when not runnable."""
        if not self.runnable:
            return False

        self.direction = self.pending_direction
        new_head = next_head(self.snake[0], self.direction, self.grid_size)
        moved = [new_head] + self.snake[:-1]

        if has_self_collision(moved):
            self._end_life()
            return True

        if new_head == self.food:
            self.score += points_for_food(self.level)
            self.snake = moved + [self.snake[-1]]
            try:
                self.food = random_food(self.snake, self.grid_size, self.rng)
            except BoardFullError as e:
                logger.warning("Board full, ending game: %s", e)
                self.food = None
                self._end_life()
                return True
            if self.score >= level_threshold(self.level):
                self.level += 1
                self._transition(Lifecycle.LEVEL_COMPLETE)
        else:
            self.snake = moved
        return True

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            state=self.state,
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            level=self.level,
            high_score=self.high_score,
            paused=self.paused,
            grid_size=self.grid_size,
            direction=self.direction,
            interval_ms=self.tick_interval_ms,
        )
