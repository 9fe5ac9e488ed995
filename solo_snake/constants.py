"""Game constants."""

GRID_SIZE = 20
INITIAL_SNAKE = [(5, 10), (4, 10), (3, 10)]

POINTS_PER_FOOD = 10
POINTS_PER_LEVEL = 100

BASE_INTERVAL_MS = 150
INTERVAL_STEP_MS = 10
MAX_SPEEDUP_MS = 100
MIN_INTERVAL_MS = 50

MAX_FOOD_ATTEMPTS = 500
HIGH_SCORE_KEY = "high_score"

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}
