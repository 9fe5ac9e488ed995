import pytest

from solo_snake.config import Settings, load_settings
from solo_snake.errors import ConfigError


def test_defaults():
    assert load_settings(environ={}, dotenv=False) == Settings()


def test_reads_environment():
    settings = load_settings(environ={
        "SNAKE_HOST": "127.0.0.1",
        "SNAKE_PORT": "9000",
        "SNAKE_GRID_SIZE": "30",
        "SNAKE_HIGH_SCORE_PATH": "/tmp/scores.json",
        "SNAKE_LOG_LEVEL": "debug",
    }, dotenv=False)
    assert settings.host == "127.0.0.1"
    assert settings.port == 9000
    assert settings.grid_size == 30
    assert settings.high_score_path == "/tmp/scores.json"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("environ", [
    {"SNAKE_GRID_SIZE": "ten"},
    {"SNAKE_GRID_SIZE": "8"},
    {"SNAKE_PORT": "70000"},
    {"SNAKE_LOG_LEVEL": "chatty"},
])
def test_invalid_values(environ):
    with pytest.raises(ConfigError):
        load_settings(environ=environ, dotenv=False)
