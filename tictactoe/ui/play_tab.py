"""Play tab: Human vs AI or Human vs Human on an interactive SVG board."""

from __future__ import annotations

import logging
import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from tictactoe.agent.base import Agent
from tictactoe.agent.minimax_agent import MinimaxAgent
from tictactoe.agent.random_agent import RandomAgent
from tictactoe.config import DIFFICULTIES, AppConfig
from tictactoe.game.board import TicTacToeGameState, format_cell, parse_cell
from tictactoe.game.types import Player
from tictactoe.ui.board_component import render_board_svg

logger = logging.getLogger(__name__)

# Agents keep no state between moves, so sessions can share them
AGENT_CHOICES: dict[str, Agent] = {
    "Hard": MinimaxAgent(),
    "Easy": RandomAgent(),
}

MODE_VS_AI = "Player vs AI"
MODE_VS_PLAYER = "Player vs Player"
MODES = (MODE_VS_AI, MODE_VS_PLAYER)


@dataclass
class GameStats:
    """Scoreboard kept across the games of one browser session."""

    ai_wins: int = 0
    player_wins: int = 0
    draws: int = 0
    total_moves: int = 0

    @property
    def ai_win_rate(self) -> float:
        decisive = self.ai_wins + self.player_wins
        if decisive == 0:
            return 0.0
        return self.ai_wins / decisive * 100

    def as_markdown(self) -> str:
        return (
            f"**AI Wins:** {self.ai_wins} &nbsp; "
            f"**Your Wins:** {self.player_wins} &nbsp; "
            f"**Draws:** {self.draws} &nbsp; "
            f"**AI Win Rate:** {self.ai_win_rate:.1f}% &nbsp; "
            f"**Total Moves:** {self.total_moves}"
        )


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: TicTacToeGameState = field(default_factory=TicTacToeGameState)
    mode: str = MODE_VS_AI
    difficulty: str = "Hard"
    human_player: Player = field(default=Player.X)
    ai_delay: float = 0.0
    stats: GameStats = field(default_factory=GameStats)
    _turn_start: float = field(default_factory=_time.time)

    @property
    def agent(self) -> Agent:
        return AGENT_CHOICES[self.difficulty]

    @property
    def vs_ai(self) -> bool:
        return self.mode == MODE_VS_AI

    @property
    def is_ai_turn(self) -> bool:
        return (
            self.vs_ai
            and not self.game.is_over
            and self.game.current_player != self.human_player
        )

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = TicTacToeGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    def play(self, index: int, elapsed: Optional[float] = None) -> None:
        """Apply a move and update the scoreboard if it ends the game."""
        self.game.apply_move(index, elapsed=elapsed)
        self.stats.total_moves += 1
        if not self.game.is_over:
            return

        g = self.game
        if g.winner is None:
            self.stats.draws += 1
        elif self.vs_ai:
            if g.winner == self.human_player:
                self.stats.player_wins += 1
            else:
                self.stats.ai_wins += 1
        logger.info("game over after %d moves: %s", len(g.moves), self.game_over_banner)

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is None:
            return "Draw!"
        if not self.vs_ai:
            return f"{g.winner} wins!"
        return "You win!" if g.winner == self.human_player else "AI wins!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            return f"Game over — {self.game_over_banner}"
        if not self.vs_ai:
            return f"Player {g.current_player}'s turn"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI's turn ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "—"
            rows.append([str(i + 1), str(move.player), format_cell(move.index), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = not session.game.is_over and not session.is_ai_turn
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, message: Optional[str] = None) -> tuple:
    return (
        _make_board_html(session),
        message if message is not None else session.status_text,
        session.move_history_table,
        session.stats.as_markdown(),
        session,
    )


def _ai_reply(session: GameSession) -> None:
    """Let the AI move if it is its turn."""
    if not session.is_ai_turn:
        return
    if session.ai_delay > 0:
        _time.sleep(session.ai_delay)
    t0 = _time.time()
    ai_move = session.agent.select_move(session.game)
    session.play(ai_move, elapsed=_time.time() - t0)
    session.mark_turn_start()


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.is_ai_turn:
        return _outputs(session, "Wait — it's the AI's turn.") + ("",)

    index = parse_cell(coord_text)
    if index is None:
        return _outputs(session, f"Invalid cell: '{coord_text}'. Use format like B2.") + ("",)

    if not session.game.is_empty(index):
        return _outputs(session, f"{format_cell(index)} is already taken.") + ("",)

    session.play(index, elapsed=session.elapsed_since_turn_start())
    session.mark_turn_start()
    _ai_reply(session)

    return _outputs(session) + ("",)


def _new_game(mode: str, difficulty: str, color_choice: str, session: GameSession):
    """Start a new game. color_choice is 'X', 'O', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.X, Player.O])
    elif color_choice == "O":
        human = Player.O
    else:
        human = Player.X

    session.mode = mode if mode in MODES else MODE_VS_AI
    session.difficulty = difficulty if difficulty in AGENT_CHOICES else "Hard"
    session.reset(human_player=human)
    logger.info("new game: %s, %s, human plays %s", session.mode, session.difficulty, human)

    # X moves first, so the AI opens when the human took O
    _ai_reply(session)

    if session.vs_ai:
        info = f"You are {human}."
    else:
        info = "Two players, X moves first."
    return _outputs(session) + (info,)


def _undo_move(session: GameSession):
    """Undo the last move pair (AI + human), or a single move between players."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")
    if session.game.is_over:
        return _outputs(session, "Game is over — start a new game.")

    last = session.game.undo_move()
    if session.vs_ai and last is not None and last.player != session.human_player:
        session.game.undo_move()
    # The AI replays its opening move if that was all there was to undo
    _ai_reply(session)
    session.mark_turn_start()
    return _outputs(session)


def build_play_tab(config: Optional[AppConfig] = None) -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""
    config = config or AppConfig()

    session_state = gr.State(
        GameSession(difficulty=config.default_difficulty, ai_delay=config.ai_move_delay)
    )

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(TicTacToeGameState()),
                label="Board",
            )
            stats_md = gr.Markdown(GameStats().as_markdown())
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (X)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are X.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            mode_choice = gr.Radio(choices=list(MODES), value=MODE_VS_AI, label="Mode")
            difficulty_choice = gr.Radio(
                choices=list(DIFFICULTIES),
                value=config.default_difficulty,
                label="Difficulty",
            )
            color_choice = gr.Radio(
                choices=["X", "O", "Random"],
                value="X",
                label="Play as",
            )
            new_game_btn = gr.Button("New Game", variant="primary")
            undo_btn = gr.Button("Undo")

            gr.Markdown("### Enter Move")
            cell_input = gr.Textbox(
                label="Cell (e.g. B2)",
                placeholder="B2",
                elem_id="cell-input",
                lines=1,
            )
            cell_submit = gr.Button("Submit Move", elem_id="cell-submit")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Cell", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    # Outputs shared by all callbacks
    board_outputs = [board_html, status_text, move_table, stats_md, session_state]

    cell_submit.click(
        fn=_apply_human_move,
        inputs=[cell_input, session_state],
        outputs=board_outputs + [cell_input],
    )

    new_game_btn.click(
        fn=_new_game,
        inputs=[mode_choice, difficulty_choice, color_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )
