"""Runtime settings read from the environment (and a local .env file)."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import GRID_SIZE, INITIAL_SNAKE
from .errors import ConfigError

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8765


@dataclass
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    grid_size: int = GRID_SIZE
    high_score_path: Optional[str] = None
    log_level: str = "INFO"


def _int_env(environ, name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(environ=None, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()
    if environ is None:
        environ = os.environ

    # The starting snake has to fit on the board
    min_grid = max(max(x, y) for x, y in INITIAL_SNAKE) + 1
    grid_size = _int_env(environ, "SNAKE_GRID_SIZE", GRID_SIZE)
    if grid_size < min_grid:
        raise ConfigError(f"SNAKE_GRID_SIZE must be at least {min_grid}, got {grid_size}")

    port = _int_env(environ, "SNAKE_PORT", DEFAULT_PORT)
    if not 0 < port < 65536:
        raise ConfigError(f"SNAKE_PORT out of range: {port}")

    log_level = environ.get("SNAKE_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"unknown SNAKE_LOG_LEVEL {log_level!r}")

    return Settings(
        host=environ.get("SNAKE_HOST", DEFAULT_HOST),
        port=port,
        grid_size=grid_size,
        high_score_path=environ.get("SNAKE_HIGH_SCORE_PATH") or None,
        log_level=log_level,
    )
