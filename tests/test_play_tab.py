from tictactoe.game.types import Player
from tictactoe.ui.play_tab import (
    MODE_VS_AI,
    MODE_VS_PLAYER,
    GameSession,
    GameStats,
    _apply_human_move,
    _new_game,
    _undo_move,
)


def _session(**kwargs) -> GameSession:
    return GameSession(ai_delay=0.0, **kwargs)


class TestNewGame:
    def test_as_x(self):
        session = _session()
        result = _new_game(MODE_VS_AI, "Hard", "X", session)
        assert session.human_player is Player.X
        assert len(session.game.moves) == 0  # no AI opening move
        assert "You are X" in result[5]

    def test_as_o_ai_goes_first(self):
        session = _session()
        result = _new_game(MODE_VS_AI, "Hard", "O", session)
        assert session.human_player is Player.O
        assert len(session.game.moves) == 1
        assert session.game.moves[0].player is Player.X
        assert session.game.moves[0].index == 4
        assert session.game.current_player is Player.O
        assert "You are O" in result[5]

    def test_random_assigns_valid_color(self):
        session = _session()
        colors_seen = set()
        for _ in range(50):
            _new_game(MODE_VS_AI, "Easy", "Random", session)
            colors_seen.add(session.human_player)
        assert colors_seen == {Player.X, Player.O}

    def test_two_player_mode_has_no_ai_move(self):
        session = _session()
        result = _new_game(MODE_VS_PLAYER, "Hard", "O", session)
        assert len(session.game.moves) == 0
        assert "Two players" in result[5]

    def test_unknown_choices_fall_back(self):
        session = _session()
        _new_game("Arena", "Nightmare", "X", session)
        assert session.mode == MODE_VS_AI
        assert session.difficulty == "Hard"


class TestHumanMove:
    def test_ai_replies(self):
        session = _session()
        _new_game(MODE_VS_AI, "Hard", "X", session)
        result = _apply_human_move("A1", session)
        assert len(session.game.moves) == 2
        # Only the center holds against a corner opening
        assert session.game.moves[1].index == 4
        assert session.game.current_player is Player.X
        assert result[1] == "Your turn (X)"
        assert result[5] == ""

    def test_hard_ai_blocks(self):
        session = _session()
        _new_game(MODE_VS_AI, "Hard", "X", session)
        _apply_human_move("A1", session)  # AI takes B2
        _apply_human_move("B1", session)  # X threatens C1
        assert session.game.get(2) is Player.O

    def test_invalid_coordinate(self):
        session = _session()
        result = _apply_human_move("Z9", session)
        assert "Invalid cell" in result[1]
        assert len(session.game.moves) == 0

    def test_occupied_cell(self):
        session = _session(mode=MODE_VS_PLAYER)
        _apply_human_move("B2", session)
        result = _apply_human_move("B2", session)
        assert "already taken" in result[1]
        assert len(session.game.moves) == 1

    def test_two_player_turns(self):
        session = _session(mode=MODE_VS_PLAYER)
        result = _apply_human_move("A1", session)
        assert len(session.game.moves) == 1
        assert result[1] == "Player O's turn"

    def test_moves_after_game_over_are_ignored(self):
        session = _session(mode=MODE_VS_PLAYER)
        for coord in ("A1", "A2", "B1", "B2", "C1"):
            _apply_human_move(coord, session)
        assert session.game.is_over
        _apply_human_move("C3", session)
        assert len(session.game.moves) == 5


class TestStats:
    def test_two_player_win_is_not_scored_for_ai(self):
        session = _session(mode=MODE_VS_PLAYER)
        for coord in ("A1", "A2", "B1", "B2", "C1"):
            _apply_human_move(coord, session)
        assert session.game_over_banner == "X wins!"
        assert session.stats == GameStats(total_moves=5)

    def test_ai_win_counted(self):
        session = _session()
        for idx in (0, 3, 1, 4, 8, 5):
            session.play(idx)
        assert session.game.winner is Player.O
        assert session.stats.ai_wins == 1
        assert session.stats.ai_win_rate == 100.0
        assert session.game_over_banner == "AI wins!"

    def test_player_win_counted(self):
        session = _session()
        for idx in (0, 3, 1, 4, 2):
            session.play(idx)
        assert session.stats.player_wins == 1
        assert session.game_over_banner == "You win!"

    def test_draw_counted(self):
        session = _session()
        for idx in (0, 1, 2, 4, 3, 5, 7, 6, 8):
            session.play(idx)
        assert session.stats.draws == 1
        assert session.game_over_banner == "Draw!"
        assert session.status_text == "Game over — Draw!"

    def test_stats_survive_new_game(self):
        session = _session()
        for idx in (0, 3, 1, 4, 2):
            session.play(idx)
        _new_game(MODE_VS_AI, "Hard", "X", session)
        assert session.stats.player_wins == 1

    def test_markdown(self):
        text = GameStats(ai_wins=1, player_wins=3, draws=2, total_moves=30).as_markdown()
        assert "AI Wins:** 1" in text
        assert "Draws:** 2" in text
        assert "25.0%" in text

    def test_win_rate_without_decisive_games(self):
        assert GameStats(draws=4).ai_win_rate == 0.0


class TestUndo:
    def test_nothing_to_undo(self):
        result = _undo_move(_session())
        assert result[1] == "Nothing to undo."

    def test_undo_move_pair(self):
        session = _session()
        _new_game(MODE_VS_AI, "Hard", "X", session)
        _apply_human_move("A1", session)
        _undo_move(session)
        assert len(session.game.moves) == 0
        assert session.game.current_player is Player.X

    def test_undo_as_o_keeps_ai_opening(self):
        session = _session()
        _new_game(MODE_VS_AI, "Hard", "O", session)
        _apply_human_move("A1", session)
        _undo_move(session)
        assert len(session.game.moves) == 1
        assert session.game.current_player is Player.O

    def test_undo_single_move_between_players(self):
        session = _session(mode=MODE_VS_PLAYER)
        _apply_human_move("A1", session)
        _apply_human_move("B2", session)
        _undo_move(session)
        assert len(session.game.moves) == 1

    def test_no_undo_after_game_over(self):
        session = _session(mode=MODE_VS_PLAYER)
        for coord in ("A1", "A2", "B1", "B2", "C1"):
            _apply_human_move(coord, session)
        result = _undo_move(session)
        assert "start a new game" in result[1]
        assert len(session.game.moves) == 5


def test_game_over_banner_empty_when_playing():
    assert _session().game_over_banner == ""


def test_status_on_ai_turn():
    session = _session(human_player=Player.O)
    assert session.status_text == "AI's turn (X)"
