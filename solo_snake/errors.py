"""Exceptions raised by the game core and its adapters."""


class SnakeGameError(Exception):
    pass


class ConfigError(SnakeGameError):
    pass


class ScoreStoreError(SnakeGameError):
    """The high score could not be read from or written to the store."""


class BoardFullError(SnakeGameError):
    """No free cell is left for food."""


class UnknownIntentError(SnakeGameError):
    pass
