"""Scoring and level speed rules."""

from .constants import (
    POINTS_PER_FOOD, POINTS_PER_LEVEL,
    BASE_INTERVAL_MS, INTERVAL_STEP_MS, MAX_SPEEDUP_MS, MIN_INTERVAL_MS,
)


def points_for_food(level: int) -> int:
    return POINTS_PER_FOOD * level


def level_threshold(level: int) -> int:
    """Score at which ``level`` is complete."""
    return POINTS_PER_LEVEL * level


def tick_interval_ms(level: int) -> int:
    speedup = min(level * INTERVAL_STEP_MS, MAX_SPEEDUP_MS)
    return max(MIN_INTERVAL_MS, BASE_INTERVAL_MS - speedup)
