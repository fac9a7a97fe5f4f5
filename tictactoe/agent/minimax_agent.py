"""Minimax agent: exhaustive alpha-beta search over the 3x3 board.

Components, leaves first:
  1. Fork detection: does a move open two lines the owner can finish next turn
  2. Move ordering: immediate win > block > fork potential > positional weight
  3. Transposition: base-3 board key -> search value, scoped to one search
  4. Alpha-beta: full-depth minimax with depth-biased terminal scores
  5. Root selection: search every ordered candidate, keep the first best one

All mutable search state lives in a SearchContext built for one top-level call
and dropped when it returns, so agents can be shared between game sessions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from tictactoe.agent.base import Agent
from tictactoe.game.board import (
    CELL_COUNT,
    EMPTY,
    WINNING_LINES,
    TicTacToeGameState,
    empty_cells,
    has_winner,
    validate_board,
)
from tictactoe.game.errors import NoLegalMoveError
from tictactoe.game.types import Mark

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------

# Terminal value of a win found at depth 0; each extra ply shaves one off
WIN_SCORE = 10

# Move-ordering scores
WIN_PRIORITY = 1000
BLOCK_PRIORITY = 900
FORK_BONUS = 300

# Positional weights: center 4, corners 3, edges 2
POSITION_VALUES: tuple[int, ...] = (
    3, 2, 3,
    2, 4, 2,
    3, 2, 3,
)

INF = math.inf


# ---------------------------------------------------------------------------
# Fork detection and move ordering
# ---------------------------------------------------------------------------

def creates_fork(board: Sequence, move: int, owner: Mark) -> bool:
    """Return True if `owner` at `move` leaves two or more open threats.

    A threat is a line holding exactly one `owner` mark and two empty cells.
    """
    scratch = list(board)
    scratch[move] = owner
    threats = 0
    for line in WINNING_LINES:
        cells = [scratch[i] for i in line]
        owned = sum(1 for c in cells if c is not EMPTY and c == owner)
        empty = sum(1 for c in cells if c is EMPTY)
        if owned == 1 and empty == 2:
            threats += 1
    return threats >= 2


def move_score(board: Sequence, move: int, owner: Mark, opponent: Mark) -> int:
    """Heuristic ordering score for `owner` playing at `move`."""
    scratch = list(board)
    scratch[move] = owner
    if has_winner(scratch):
        return WIN_PRIORITY
    scratch[move] = opponent
    if has_winner(scratch):
        return BLOCK_PRIORITY

    score = POSITION_VALUES[move]
    if creates_fork(board, move, owner):
        score += FORK_BONUS
    return score


def ordered_moves(board: Sequence, owner: Mark, opponent: Mark) -> list[int]:
    """Empty cells sorted best-first; equal scores keep ascending index order."""
    scores = {m: move_score(board, m, owner, opponent) for m in empty_cells(board)}
    # Stable sort: equal scores stay in index order
    return sorted(scores, key=lambda m: -scores[m])


# ---------------------------------------------------------------------------
# Transposition cache
# ---------------------------------------------------------------------------

def encode_board(board: Sequence, owner: Mark, opponent: Mark) -> int:
    """Pack the 9 cells into one base-3 integer (EMPTY=0, owner=1, opponent=2)."""
    key = 0
    for cell in board:
        if cell is EMPTY:
            digit = 0
        elif cell == owner:
            digit = 1
        else:
            digit = 2
        key = key * 3 + digit
    return key


class TranspositionCache:
    """Board key -> search value for the boards seen in one search.

    The first value stored for a key stays authoritative until clear().
    """

    def __init__(self) -> None:
        self._entries: dict[int, int] = {}

    def get(self, key: int) -> Optional[int]:
        return self._entries.get(key)

    def put(self, key: int, value: int) -> None:
        self._entries.setdefault(key, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: int) -> bool:
        return key in self._entries


# ---------------------------------------------------------------------------
# Alpha-beta search
# ---------------------------------------------------------------------------

@dataclass
class SearchStats:
    nodes: int = 0
    cache_hits: int = 0
    cutoffs: int = 0


@dataclass
class SearchResult:
    move: int
    score: int
    stats: SearchStats = field(default_factory=SearchStats)


class SearchContext:
    """State owned by one top-level search: a private board and the cache.

    The owner is always the maximizing side.
    """

    def __init__(
        self,
        board: Sequence,
        owner: Mark,
        opponent: Mark,
        cache: Optional[TranspositionCache] = None,
    ) -> None:
        self.board = list(board)
        self.owner = owner
        self.opponent = opponent
        self.cache = cache if cache is not None else TranspositionCache()
        self.stats = SearchStats()

    def evaluate(self, depth: int, maximizing: bool, alpha: float, beta: float) -> int:
        """Minimax value of self.board with `maximizing` telling whose turn it is.

        A completed line always belongs to the side that just moved, so it
        scores negative when the maximizer is to move and positive otherwise.
        """
        board = self.board
        key = encode_board(board, self.owner, self.opponent)
        cached = self.cache.get(key)
        if cached is not None:
            self.stats.cache_hits += 1
            return cached

        self.stats.nodes += 1
        if has_winner(board):
            return -WIN_SCORE + depth if maximizing else WIN_SCORE - depth
        if all(cell is not EMPTY for cell in board):
            return 0

        orig_alpha, orig_beta = alpha, beta
        mark = self.owner if maximizing else self.opponent
        best = -INF if maximizing else INF

        for i in range(CELL_COUNT):
            if board[i] is not EMPTY:
                continue
            board[i] = mark
            try:
                score = self.evaluate(depth + 1, not maximizing, alpha, beta)
            finally:
                board[i] = EMPTY

            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if beta <= alpha:
                self.stats.cutoffs += 1
                break

        # Values that fell outside the window are only bounds; keep exact ones
        if orig_alpha < best < orig_beta:
            self.cache.put(key, best)
        return best


# ---------------------------------------------------------------------------
# Root move selection
# ---------------------------------------------------------------------------

def search(
    board: Sequence,
    owner: Mark,
    opponent: Mark,
    cache: Optional[TranspositionCache] = None,
) -> SearchResult:
    """Search every candidate for `owner` and return the best one with its score.

    Raises InvalidBoardError / InvariantViolationError for a malformed board
    and NoLegalMoveError when no cell is empty. The caller's board is never
    modified.
    """
    cells = validate_board(board, owner, opponent)
    candidates = ordered_moves(cells, owner, opponent)
    if not candidates:
        raise NoLegalMoveError("No empty cell left to play")

    ctx = SearchContext(cells, owner, opponent, cache)
    ctx.cache.clear()

    best_score = -INF
    best_move = candidates[0]
    for move in candidates:
        ctx.board[move] = owner
        try:
            score = ctx.evaluate(0, False, -INF, INF)
        finally:
            ctx.board[move] = EMPTY
        # Strict comparison: the first candidate in heuristic order wins ties
        if score > best_score:
            best_score = score
            best_move = move

    logger.debug(
        "best move %d for %s (score %d, %d nodes, %d cache hits, %d cutoffs, %d cached)",
        best_move, owner, best_score, ctx.stats.nodes, ctx.stats.cache_hits,
        ctx.stats.cutoffs, len(ctx.cache),
    )
    return SearchResult(move=best_move, score=int(best_score), stats=ctx.stats)


def compute_best_move(
    board: Sequence,
    owner: Mark,
    opponent: Mark,
    cache: Optional[TranspositionCache] = None,
) -> int:
    """Return the index of the best empty cell for `owner` to play."""
    return search(board, owner, opponent, cache).move


# ---------------------------------------------------------------------------
# MinimaxAgent
# ---------------------------------------------------------------------------

class MinimaxAgent(Agent):
    """Perfect-play agent ("Hard"): full-depth alpha-beta for the side to move."""

    @property
    def name(self) -> str:
        return "MinimaxAgent"

    def select_move(self, game_state: TicTacToeGameState) -> int:
        assert not game_state.is_over, "Game is already over"
        owner = game_state.current_player
        return compute_best_move(game_state.cells, owner, owner.other)
