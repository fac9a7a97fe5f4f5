from __future__ import annotations

import random
from typing import Optional

from tictactoe.game.board import TicTacToeGameState

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def select_move(self, game_state: TicTacToeGameState) -> int:
        moves = game_state.legal_moves()
        assert moves, "No legal moves available"
        return self._rng.choice(moves)
