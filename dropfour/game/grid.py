"""
grid.py - Grid representation and the gravity-drop rule

This module implements the Grid class which holds cell occupancy for a match and resolves
where a dropped token comes to rest. It knows nothing about turns or winners; the match
controller in rules.py layers those on top.
"""

import numpy as np
from typing import List, Optional, Tuple

from dropfour.debug import debug
from dropfour.utils import (ROWS, COLS, PLAYER_TOKENS, Token,
                            render_board_ascii, validate_dimensions)


class Grid:
    """
    Fixed-size matrix of cell states.

    Row 0 is the top row and column 0 the leftmost column. Occupied cells in a column
    always form a contiguous block resting on the bottom row, and the only way to change
    a cell is drop_token().
    """

    def __init__(self, rows: int = ROWS, columns: int = COLS):
        """
        Initialize an empty grid.

        Args:
            rows: Number of rows (at least 4)
            columns: Number of columns (at least 4)

        Raises:
            InvalidGridConfig: if the dimensions cannot hold a line of four
        """
        self._rows, self._columns = validate_dimensions(rows, columns)
        self._cells = np.zeros((self._rows, self._columns), dtype=np.int8)
        self._last_drop: Optional[Tuple[int, int]] = None
        debug.debug(f"Initializing new {self._rows}x{self._columns} grid", "grid")

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._columns

    @property
    def last_drop(self) -> Optional[Tuple[int, int]]:
        """(row, column) of the most recent accepted drop, or None."""
        return self._last_drop

    def copy(self) -> 'Grid':
        """
        Create an independent copy of the grid.

        Returns:
            A new Grid instance with the same cells
        """
        debug.trace("Creating grid copy", "grid")
        new_grid = Grid(self._rows, self._columns)
        new_grid._cells = self._cells.copy()
        new_grid._last_drop = self._last_drop
        return new_grid

    def snapshot(self) -> np.ndarray:
        """
        Get a read-only copy of the full cell matrix.

        Returns:
            2D numpy array of token values (0 empty, 1 or 2 occupied), row 0 at the top
        """
        view = self._cells.copy()
        view.flags.writeable = False
        return view

    def is_valid_column(self, column: int) -> bool:
        """Check that column is an index in [0, columns)."""
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            return False
        return 0 <= column < self._columns

    def is_column_full(self, column: int) -> bool:
        """
        Check if a column has no empty cell left.

        Args:
            column: A column index in [0, columns)

        Returns:
            True if the top cell of the column is occupied

        Raises:
            ValueError: if column is not a valid index
        """
        if not self.is_valid_column(column):
            raise ValueError(f"column must be in [0, {self._columns}), got {column!r}")
        return bool(self._cells[0, column] != Token.EMPTY)

    def valid_columns(self) -> List[int]:
        """
        Get a list of columns that can still accept a token.

        Returns:
            List of column indices, left to right
        """
        return [col for col in range(self._columns) if not self.is_column_full(col)]

    def empty_count(self) -> int:
        return int(np.count_nonzero(self._cells == Token.EMPTY))

    def is_full(self) -> bool:
        return self.empty_count() == 0

    def drop_token(self, column: int, token: int) -> bool:
        """
        Drop a token into a column. It comes to rest in the lowest empty cell.

        The column is scanned from row 0 downwards and the last empty cell seen is the
        one occupied. Because a column never has a gap below a token, that is always the
        cell directly on top of the existing stack.

        Args:
            column: The column to drop into (0-indexed)
            token: The player token to place (1 or 2)

        Returns:
            True if the token was placed, False if the column is out of range or full.
            Nothing changes on rejection.

        Raises:
            ValueError: if token is not a player token
        """
        if token not in PLAYER_TOKENS:
            raise ValueError(f"token must be one of {[int(t) for t in PLAYER_TOKENS]}, got {token!r}")

        if not self.is_valid_column(column):
            debug.debug(f"Rejected drop: column {column!r} out of range", "grid")
            return False

        landing_row = None
        for row in range(self._rows):
            if self._cells[row, column] == Token.EMPTY:
                landing_row = row

        if landing_row is None:
            debug.debug(f"Rejected drop: column {column} is full", "grid")
            return False

        self._cells[landing_row, column] = token
        self._last_drop = (landing_row, int(column))
        debug.trace(f"Placed token {int(token)} at ({landing_row}, {column})", "grid")
        return True

    def render(self) -> str:
        """
        Render the grid as a string.

        Returns:
            String representation of the grid
        """
        return render_board_ascii(self._cells)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, columns={self._columns}, empty={self.empty_count()})"
