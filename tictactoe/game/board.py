from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import InvalidBoardError, InvariantViolationError
from .types import Cell, Mark, Player

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

EMPTY: Cell = None

# Column labels A-C, rows 1-3 counted from the top
COL_LABELS = "ABC"

WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


def parse_cell(text: str) -> Optional[int]:
    """Parse a coordinate string like 'B2' into a cell index (0-8).

    Column is a letter A-C, row is a number 1-3 (1 = top row).
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) != 2:
        return None
    col_char, row_char = text[0], text[1]
    if col_char not in COL_LABELS or row_char not in "123":
        return None
    return (int(row_char) - 1) * BOARD_SIZE + COL_LABELS.index(col_char)


def format_cell(index: int) -> str:
    """Format a cell index as a coordinate string like 'B2'."""
    row, col = divmod(index, BOARD_SIZE)
    return f"{COL_LABELS[col]}{row + 1}"


def winning_line(board: Sequence) -> Optional[tuple[int, int, int]]:
    """Return the first line holding three equal non-empty marks, if any."""
    for a, b, c in WINNING_LINES:
        if board[a] is not EMPTY and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def has_winner(board: Sequence) -> bool:
    return winning_line(board) is not None


def winner(board: Sequence) -> Optional[Mark]:
    line = winning_line(board)
    return board[line[0]] if line is not None else None


def empty_cells(board: Sequence) -> list[int]:
    return [i for i, cell in enumerate(board) if cell is EMPTY]


def is_full(board: Sequence) -> bool:
    return all(cell is not EMPTY for cell in board)


def validate_board(board: Sequence, owner: Mark, opponent: Mark) -> list:
    """Check a caller-supplied board and return a private copy of it.

    Raises InvalidBoardError for a wrong length, a cell that is neither
    EMPTY nor one of the two marks, or a bad mark pair. Raises
    InvariantViolationError when both marks have a completed line.
    """
    if owner is EMPTY or opponent is EMPTY or owner == opponent:
        raise InvalidBoardError(
            f"Marks must be two distinct non-empty values, got {owner!r} and {opponent!r}"
        )
    cells = list(board)
    if len(cells) != CELL_COUNT:
        raise InvalidBoardError(f"Board must have {CELL_COUNT} cells, got {len(cells)}")
    for i, cell in enumerate(cells):
        if cell is not EMPTY and cell != owner and cell != opponent:
            raise InvalidBoardError(f"Cell {i} holds unknown value {cell!r}")

    winners = {
        cells[a] for a, b, c in WINNING_LINES
        if cells[a] is not EMPTY and cells[a] == cells[b] == cells[c]
    }
    if len(winners) > 1:
        raise InvariantViolationError("Both players have a completed line")
    return cells


@dataclass
class Move:
    index: int
    player: Player
    elapsed: Optional[float] = None  # seconds spent choosing the move

    def __str__(self) -> str:
        return f"{self.player}: {format_cell(self.index)}"


class TicTacToeGameState:
    """Full game state for 3x3 tic-tac-toe. X always moves first."""

    def __init__(self) -> None:
        self._cells: list[Cell] = [EMPTY] * CELL_COUNT
        self.current_player = Player.X
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Immutable snapshot of the board, suitable for the engine."""
        return tuple(self._cells)

    def get(self, index: int) -> Cell:
        return self._cells[index]

    def is_empty(self, index: int) -> bool:
        return self._cells[index] is EMPTY

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    @property
    def winning_line(self) -> Optional[tuple[int, int, int]]:
        return winning_line(self._cells)

    def legal_moves(self) -> list[int]:
        if self._is_over:
            return []
        return empty_cells(self._cells)

    def apply_move(self, index: int, elapsed: Optional[float] = None) -> None:
        """Place a mark for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert 0 <= index < CELL_COUNT, f"Cell {index} is off the board"
        assert self.is_empty(index), f"Cell {format_cell(index)} is occupied"

        player = self.current_player
        self._cells[index] = player
        self.moves.append(Move(index=index, player=player, elapsed=elapsed))

        if has_winner(self._cells):
            self._winner = player
            self._is_over = True
        elif is_full(self._cells):
            self._is_over = True

        self.current_player = player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self._cells[move.index] = EMPTY
        self.current_player = move.player
        self._winner = None
        self._is_over = False
        return move
