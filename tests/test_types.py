from tictactoe.game.types import Player


def test_player_other():
    assert Player.X.other is Player.O
    assert Player.O.other is Player.X


def test_player_str():
    assert str(Player.X) == "X"
    assert str(Player.O) == "O"
