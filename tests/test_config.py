import pytest

from tictactoe.config import AppConfig


def test_defaults():
    config = AppConfig()
    assert config.ai_move_delay == 0.7
    assert config.default_difficulty == "Hard"
    assert config.server_port == 7860


def test_from_env_without_overrides():
    assert AppConfig.from_env({}) == AppConfig()


def test_from_env_overrides():
    config = AppConfig.from_env({
        "TTT_AI_DELAY": "0",
        "TTT_DIFFICULTY": "easy",
        "TTT_LOG_LEVEL": "debug",
        "TTT_SERVER_NAME": "0.0.0.0",
        "TTT_SERVER_PORT": "8080",
    })
    assert config.ai_move_delay == 0.0
    assert config.default_difficulty == "Easy"
    assert config.log_level == "DEBUG"
    assert config.server_name == "0.0.0.0"
    assert config.server_port == 8080


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TTT_SERVER_PORT", "9000")
    assert AppConfig.from_env().server_port == 9000


@pytest.mark.parametrize("env", [
    {"TTT_AI_DELAY": "soon"},
    {"TTT_AI_DELAY": "-1"},
    {"TTT_SERVER_PORT": "http"},
    {"TTT_DIFFICULTY": "impossible"},
])
def test_from_env_rejects_bad_values(env):
    with pytest.raises(ValueError):
        AppConfig.from_env(env)
