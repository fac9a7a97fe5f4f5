"""
App configuration for the tic-tac-toe play surface.

Defaults live on AppConfig; every field can be overridden from the
environment (see ENV_VARS), which is how the app is configured when deployed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DIFFICULTIES = ("Easy", "Hard")

ENV_VARS = {
    "ai_move_delay": "TTT_AI_DELAY",
    "default_difficulty": "TTT_DIFFICULTY",
    "log_level": "TTT_LOG_LEVEL",
    "server_name": "TTT_SERVER_NAME",
    "server_port": "TTT_SERVER_PORT",
}


@dataclass(frozen=True)
class AppConfig:
    # Pause before the AI answers a human move, in seconds
    ai_move_delay: float = 0.7
    default_difficulty: str = "Hard"
    log_level: str = "INFO"
    server_name: str = "127.0.0.1"
    server_port: int = 7860

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
        env = os.environ if environ is None else environ
        defaults = cls()

        delay_raw = env.get(ENV_VARS["ai_move_delay"])
        port_raw = env.get(ENV_VARS["server_port"])
        try:
            delay = float(delay_raw) if delay_raw else defaults.ai_move_delay
        except ValueError:
            raise ValueError(f"{ENV_VARS['ai_move_delay']} must be a number, got {delay_raw!r}")
        try:
            port = int(port_raw) if port_raw else defaults.server_port
        except ValueError:
            raise ValueError(f"{ENV_VARS['server_port']} must be an integer, got {port_raw!r}")
        if delay < 0:
            raise ValueError(f"{ENV_VARS['ai_move_delay']} must not be negative, got {delay}")

        difficulty = env.get(ENV_VARS["default_difficulty"], defaults.default_difficulty).capitalize()
        if difficulty not in DIFFICULTIES:
            raise ValueError(
                f"{ENV_VARS['default_difficulty']} must be one of {DIFFICULTIES}, got {difficulty!r}"
            )

        return cls(
            ai_move_delay=delay,
            default_difficulty=difficulty,
            log_level=env.get(ENV_VARS["log_level"], defaults.log_level).upper(),
            server_name=env.get(ENV_VARS["server_name"], defaults.server_name),
            server_port=port,
        )
