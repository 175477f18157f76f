import numpy as np
import pytest

from block_drop.game import GameGrid


def _fill_row(grid, y, skip=()):
    for x in range(grid.width):
        if x not in skip:
            grid.set_cell(x, y, x % 3)


def test_new_grid_is_empty():
    grid = GameGrid(12, 15)
    assert grid.cells.shape == (15, 12)
    assert grid.decorations.shape == (15, 12)
    assert grid.filled_count() == 0
    assert grid.decoration_at(0, 0) is None


def test_set_cell_stores_occupancy_and_decoration():
    grid = GameGrid(12, 15)
    grid.set_cell(4, 7, 9)
    assert grid.is_occupied(4, 7)
    assert grid.decoration_at(4, 7) == 9
    assert not grid.is_occupied(5, 7)


def test_set_cell_outside_raises():
    grid = GameGrid(12, 15)
    with pytest.raises(IndexError):
        grid.set_cell(12, 0, 1)
    with pytest.raises(IndexError):
        grid.set_cell(0, -1, 1)


def test_columns_off_the_sides_are_walls():
    grid = GameGrid(12, 15)
    assert grid.is_occupied(-1, 3)
    assert grid.is_occupied(12, 3)


def test_clear_full_rows_returns_zero_when_nothing_full():
    grid = GameGrid(12, 15)
    _fill_row(grid, 14, skip=(5,))
    before = grid.clone_state()
    assert grid.clear_full_rows() == 0
    assert np.array_equal(grid.cells, before)


def test_clear_full_rows_shifts_rows_above_down():
    grid = GameGrid(12, 15)
    _fill_row(grid, 14)
    grid.set_cell(2, 13, 7)
    assert grid.clear_full_rows() == 1
    assert grid.cells.shape == (15, 12)
    assert grid.is_occupied(2, 14)
    assert grid.decoration_at(2, 14) == 7
    assert grid.filled_count() == 1
    assert not grid.cells[0].any()


def test_clear_non_adjacent_rows():
    grid = GameGrid(12, 15)
    _fill_row(grid, 14)
    grid.set_cell(0, 13, 1)
    _fill_row(grid, 12)
    grid.set_cell(1, 11, 2)
    assert grid.clear_full_rows() == 2
    assert grid.is_occupied(0, 14)
    assert grid.is_occupied(1, 13)
    assert grid.filled_count() == 2


def test_clear_full_rows_preserves_height_and_order():
    rng = np.random.default_rng(7)
    for _ in range(25):
        grid = GameGrid(6, 10)
        grid.cells = (rng.random((10, 6)) < 0.8).astype(np.int8)
        grid.decorations = np.where(grid.cells != 0, rng.integers(0, 5, (10, 6)), -1).astype(np.int16)
        full = np.all(grid.cells != 0, axis=1)
        kept = [row.copy() for row, is_full in zip(grid.cells, full) if not is_full]

        cleared = grid.clear_full_rows()

        assert cleared == int(full.sum())
        assert grid.cells.shape == (10, 6)
        assert grid.decorations.shape == (10, 6)
        assert not grid.cells[:cleared].any()
        assert [list(r) for r in grid.cells[cleared:]] == [list(r) for r in kept]
        # decoration present iff occupied
        assert np.array_equal(grid.decorations != -1, grid.cells != 0)


def test_reset_clears_both_matrices():
    grid = GameGrid(12, 15)
    _fill_row(grid, 3)
    grid.reset()
    assert grid.filled_count() == 0
    assert (grid.decorations == -1).all()
