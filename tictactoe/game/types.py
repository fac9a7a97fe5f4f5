from __future__ import annotations

import enum
from typing import Optional, Union


class Player(enum.Enum):
    X = 1
    O = 2

    @property
    def other(self) -> Player:
        return Player.O if self is Player.X else Player.X

    def __str__(self) -> str:
        return self.name


# A board cell: EMPTY (None) or a player's mark
Cell = Optional[Player]

# Marks accepted by the engine; the game layer always uses Player
Mark = Union[Player, str]
