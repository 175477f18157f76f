from __future__ import annotations

from typing import Optional

import numpy as np


NO_DECORATION = -1


class GameGrid:
    """Committed (landed) cells of the board.

    Two parallel matrices of shape ``(rows, cols)`` are kept in lockstep:
    ``cells`` holds occupancy (0 empty, 1 filled) and ``decorations`` holds the
    decoration id of every filled cell, ``NO_DECORATION`` elsewhere.
    Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)
        self.decorations = np.full((self.height, self.width), NO_DECORATION, dtype=np.int16)

    def reset(self) -> None:
        self.cells.fill(0)
        self.decorations.fill(NO_DECORATION)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        # Columns off either side count as wall
        if x < 0 or x >= self.width:
            return True
        return bool(self.cells[y, x])

    def decoration_at(self, x: int, y: int) -> Optional[int]:
        value = int(self.decorations[y, x])
        return None if value == NO_DECORATION else value

    def set_cell(self, x: int, y: int, decoration: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside a {self.width}x{self.height} grid")
        self.cells[y, x] = 1
        self.decorations[y, x] = int(decoration)

    def clear_full_rows(self) -> int:
        """Remove every full row and refill from the top. Returns rows removed."""
        full_rows = np.where(np.all(self.cells != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        kept_cells = np.delete(self.cells, full_rows, axis=0)
        kept_decorations = np.delete(self.decorations, full_rows, axis=0)
        self.cells = np.vstack((np.zeros((num, self.width), dtype=np.int8), kept_cells))
        self.decorations = np.vstack(
            (np.full((num, self.width), NO_DECORATION, dtype=np.int16), kept_decorations)
        )
        return num

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()

    def clone_decorations(self) -> np.ndarray:
        return self.decorations.copy()
