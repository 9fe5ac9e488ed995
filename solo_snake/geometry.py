"""Grid helpers: starting layout, food placement, movement and collision."""

import random

from .constants import INITIAL_SNAKE, MAX_FOOD_ATTEMPTS
from .errors import BoardFullError
from .models import Cell, Direction


def initial_snake() -> list[Cell]:
    return list(INITIAL_SNAKE)


def random_food(occupied, grid_size: int, rng=random) -> Cell:
    """Pick a uniformly random cell that is not in ``occupied``.

    Draws random coordinates up to ``MAX_FOOD_ATTEMPTS`` times. A crowded board
    falls back to choosing among the free cells directly, and a board with no
    free cell raises ``BoardFullError``.
    """
    occupied = set(occupied)

    attempts = 0
    while attempts < MAX_FOOD_ATTEMPTS:
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in occupied:
            return cell
        attempts += 1

    free = [
        (x, y)
        for x in range(grid_size)
        for y in range(grid_size)
        if (x, y) not in occupied
    ]
    if not free:
        raise BoardFullError(f"all {grid_size * grid_size} cells are occupied")
    return rng.choice(free)


def next_head(head: Cell, direction: Direction, grid_size: int) -> Cell:
    dx, dy = direction.vector
    hx, hy = head
    return ((hx + dx) % grid_size, (hy + dy) % grid_size)


def has_self_collision(snake) -> bool:
    return snake[0] in snake[1:]
