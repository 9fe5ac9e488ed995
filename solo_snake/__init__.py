"""Single-player snake on a wrapping grid: engine, tick driver and service shell."""

from .errors import SnakeGameError, BoardFullError, ConfigError, ScoreStoreError, UnknownIntentError
from .game import GameEngine
from .models import Direction, GameSnapshot, Lifecycle
from .score_store import JsonScoreStore, MemoryScoreStore

__all__ = [
    "GameEngine",
    "Direction", "GameSnapshot", "Lifecycle",
    "JsonScoreStore", "MemoryScoreStore",
    "SnakeGameError", "BoardFullError", "ConfigError", "ScoreStoreError", "UnknownIntentError",
]
