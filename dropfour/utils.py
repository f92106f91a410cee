"""
utils.py - Constants, enumerations and shared helpers for the dropfour rules engine

This module provides the game constants, the token and outcome enumerations, the match
configuration record, and the win/tie detection functions that operate on a plain cell
matrix. Keeping detection here lets the controller, the console host and the tests share
one implementation.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
MIN_SIZE = CONNECT_N  # Smallest grid side on which a line can still be made

DEFAULT_PLAYER_ONE = "Player One"
DEFAULT_PLAYER_TWO = "Player Two"


class InvalidGridConfig(ValueError):
    """Raised when a grid or match is configured with unusable dimensions."""


class Token(IntEnum):
    """Cell states. A non-empty cell holds the token of the player who dropped there."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> "Token":
        """Get the opposing player's token."""
        if self == Token.ONE:
            return Token.TWO
        elif self == Token.TWO:
            return Token.ONE
        return Token.EMPTY

    def __str__(self):
        if self == Token.EMPTY:
            return "."
        elif self == Token.ONE:
            return "X"
        else:
            return "O"


PLAYER_TOKENS = (Token.ONE, Token.TWO)


class MatchOutcome(Enum):
    """State of a match."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        """Check if the match has reached a terminal state."""
        return self != MatchOutcome.IN_PROGRESS


class Direction(Enum):
    """Directions scanned by win detection."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# Direction vectors (row, col); row 0 is the top of the grid
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def validate_dimensions(rows, columns) -> Tuple[int, int]:
    """
    Check grid dimensions and return them as plain ints.

    Raises:
        InvalidGridConfig: if either side is not an integer or is smaller than MIN_SIZE
    """
    for label, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidGridConfig(f"{label} must be an integer, got {value!r}")
        if value < MIN_SIZE:
            raise InvalidGridConfig(
                f"{label} must be at least {MIN_SIZE} to allow {CONNECT_N} in a row, got {value}"
            )
    return int(rows), int(columns)


@dataclass(frozen=True)
class MatchConfig:
    """Construction parameters for a match: board size and player names."""
    rows: int = ROWS
    columns: int = COLS
    player_one_name: str = DEFAULT_PLAYER_ONE
    player_two_name: str = DEFAULT_PLAYER_TWO

    def validate(self) -> "MatchConfig":
        validate_dimensions(self.rows, self.columns)
        for name in (self.player_one_name, self.player_two_name):
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"player names must be non-empty strings, got {name!r}")
        return self


def is_valid_position(cells: np.ndarray, row: int, col: int) -> bool:
    """
    Check if a position is within the matrix boundaries.

    Args:
        cells: The cell matrix
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    rows, cols = cells.shape
    return 0 <= row < rows and 0 <= col < cols


def count_window(cells: np.ndarray, row: int, col: int,
                 d_row: int, d_col: int, token: int) -> int:
    """
    Count matching cells in the window of CONNECT_N steps starting at (row, col).

    Stops at the first step that leaves the matrix or hits a different value.
    """
    count = 0
    for step in range(CONNECT_N):
        r = row + d_row * step
        c = col + d_col * step
        if not is_valid_position(cells, r, c) or cells[r, c] != token:
            break
        count += 1
    return count


def check_win(cells: np.ndarray, token: int) -> bool:
    """
    Check whether ``token`` owns CONNECT_N consecutive cells anywhere in the matrix.

    Every cell holding the token is tried as the start of a window in each of the four
    directions. Lines are found several times from different offsets, which is harmless.

    Args:
        cells: The cell matrix (row 0 is the top)
        token: Player token to look for

    Returns:
        True if a full line exists, False otherwise
    """
    if token == Token.EMPTY:
        return False

    rows, cols = cells.shape
    for row in range(rows):
        for col in range(cols):
            if cells[row, col] != token:
                continue
            for d_row, d_col in DIRECTION_VECTORS.values():
                if count_window(cells, row, col, d_row, d_col, token) == CONNECT_N:
                    return True
    return False


def check_tie(cells: np.ndarray) -> bool:
    """True when no empty cell remains. Callers check for a win first."""
    return not np.any(cells == Token.EMPTY)


def render_board_ascii(cells: np.ndarray) -> str:
    """
    Render a cell matrix as ASCII art.

    Args:
        cells: The cell matrix

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    rows, cols = cells.shape
    border = "+" + "-" * (cols * 2 + 1) + "+"
    result = [border]

    for row in range(rows):
        line = " ".join(str(Token(int(cells[row, col]))) for col in range(cols))
        result.append(f"| {line} |")

    result.append(border)
    result.append("  " + " ".join(str(col % 10) for col in range(cols)))

    return "\n".join(result)
