"""
Tests for the Grid and its gravity-drop rule
"""

import numpy as np
import pytest

from dropfour.game.grid import Grid
from dropfour.utils import ROWS, COLS, InvalidGridConfig, Token


class TestGridCreation:
    def test_default_grid_is_empty(self, grid):
        assert grid.shape == (ROWS, COLS)
        assert grid.empty_count() == ROWS * COLS
        assert not grid.snapshot().any()
        assert grid.last_drop is None

    def test_custom_dimensions(self):
        grid = Grid(rows=5, columns=9)
        assert grid.rows == 5
        assert grid.columns == 9
        assert grid.snapshot().shape == (5, 9)

    @pytest.mark.parametrize("rows,columns", [(3, 7), (6, 3), (1, 1)])
    def test_too_small_grid_refused(self, rows, columns):
        with pytest.raises(InvalidGridConfig):
            Grid(rows, columns)


class TestDropToken:
    def test_token_lands_on_bottom_row(self, grid):
        assert grid.drop_token(3, Token.ONE)
        snap = grid.snapshot()
        assert snap[ROWS - 1, 3] == Token.ONE
        assert np.count_nonzero(snap) == 1
        assert grid.last_drop == (ROWS - 1, 3)

    def test_tokens_stack_upwards(self, grid):
        grid.drop_token(2, Token.ONE)
        grid.drop_token(2, Token.TWO)
        snap = grid.snapshot()
        assert snap[ROWS - 1, 2] == Token.ONE
        assert snap[ROWS - 2, 2] == Token.TWO
        assert grid.last_drop == (ROWS - 2, 2)

    @pytest.mark.parametrize("drops", range(1, ROWS + 1))
    def test_gravity_fills_bottom_rows_without_gaps(self, grid, drops):
        for _ in range(drops):
            assert grid.drop_token(0, Token.ONE)
        column = grid.snapshot()[:, 0]
        assert list(column[:ROWS - drops]) == [0] * (ROWS - drops)
        assert list(column[ROWS - drops:]) == [1] * drops

    def test_full_column_rejected(self, grid):
        for _ in range(ROWS):
            assert grid.drop_token(0, Token.ONE)
        assert grid.is_column_full(0)

        before = grid.snapshot()
        assert grid.drop_token(0, Token.ONE) is False
        assert np.array_equal(grid.snapshot(), before)
        assert grid.last_drop == (0, 0)

    @pytest.mark.parametrize("column", [-1, COLS, COLS + 5, 100])
    def test_out_of_range_column_rejected(self, grid, column):
        grid.drop_token(1, Token.TWO)
        before = grid.snapshot()
        assert grid.drop_token(column, Token.ONE) is False
        assert np.array_equal(grid.snapshot(), before)
        assert grid.last_drop == (ROWS - 1, 1)

    @pytest.mark.parametrize("column", [None, "3", 2.0])
    def test_non_integer_column_rejected(self, grid, column):
        assert grid.drop_token(column, Token.ONE) is False
        assert grid.empty_count() == ROWS * COLS

    def test_numpy_integer_column_accepted(self, grid):
        assert grid.drop_token(np.int64(4), Token.TWO)
        assert grid.snapshot()[ROWS - 1, 4] == Token.TWO

    @pytest.mark.parametrize("token", [0, 3, -1])
    def test_invalid_token_raises(self, grid, token):
        with pytest.raises(ValueError):
            grid.drop_token(0, token)
        assert grid.empty_count() == ROWS * COLS


class TestGridQueries:
    def test_valid_columns_skip_full_ones(self, grid):
        for _ in range(ROWS):
            grid.drop_token(4, Token.TWO)
        assert grid.valid_columns() == [0, 1, 2, 3, 5, 6]

    def test_is_valid_column(self, grid):
        assert grid.is_valid_column(0)
        assert grid.is_valid_column(COLS - 1)
        assert not grid.is_valid_column(-1)
        assert not grid.is_valid_column(COLS)

    @pytest.mark.parametrize("column", [-1, COLS, None])
    def test_is_column_full_rejects_bad_index(self, grid, column):
        for _ in range(ROWS):
            grid.drop_token(COLS - 1, Token.ONE)
        with pytest.raises(ValueError):
            grid.is_column_full(column)

    def test_is_column_full(self, grid):
        assert grid.is_column_full(0) is False
        for _ in range(ROWS):
            grid.drop_token(0, Token.TWO)
        assert grid.is_column_full(0) is True

    def test_is_full(self):
        grid = Grid(4, 4)
        for col in range(4):
            for _ in range(4):
                grid.drop_token(col, Token.ONE)
        assert grid.is_full()
        assert grid.valid_columns() == []

    def test_snapshot_is_read_only(self, grid):
        snap = grid.snapshot()
        with pytest.raises(ValueError):
            snap[0, 0] = Token.ONE

    def test_snapshot_is_detached_from_later_drops(self, grid):
        snap = grid.snapshot()
        grid.drop_token(0, Token.ONE)
        assert snap[ROWS - 1, 0] == Token.EMPTY

    def test_copy_is_independent(self, grid):
        grid.drop_token(0, Token.ONE)
        clone = grid.copy()
        clone.drop_token(0, Token.TWO)
        assert grid.snapshot()[ROWS - 2, 0] == Token.EMPTY
        assert clone.snapshot()[ROWS - 2, 0] == Token.TWO
        assert clone.last_drop == (ROWS - 2, 0)

    def test_render_shows_tokens(self, grid):
        grid.drop_token(0, Token.ONE)
        grid.drop_token(1, Token.TWO)
        lines = str(grid).splitlines()
        assert lines[ROWS] == "| X O . . . . . |"
        assert "empty=40" in repr(grid)
