"""Errors raised when the engine is handed an unusable board."""


class TicTacToeError(ValueError):
    """Base class for engine precondition failures."""


class InvalidBoardError(TicTacToeError):
    """Board has the wrong length, an unknown cell value, or bad marks."""


class NoLegalMoveError(TicTacToeError):
    """A move was requested on a board without empty cells."""


class InvariantViolationError(TicTacToeError):
    """Both players have a completed line on the same board."""
