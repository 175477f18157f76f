from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .grid import NO_DECORATION


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray

# Pieces never rotate, so each type has exactly one shape
BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


@dataclass
class Piece:
    """The falling piece: a shape, its top-left origin and one decoration per filled cell."""

    kind: TetrominoType
    x: int
    y: int
    decorations: np.ndarray

    def shape(self) -> Shape:
        return BASE_SHAPES[self.kind]

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def decorated_cells(self) -> List[Tuple[int, int, int]]:
        """Absolute ``(x, y, decoration)`` for every filled cell at the current origin."""
        s = self.shape()
        h, w = s.shape
        out: List[Tuple[int, int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    out.append((self.x + dx, self.y + dy, int(self.decorations[dy, dx])))
        return out

    def decoration_at(self, dx: int, dy: int) -> Optional[int]:
        value = int(self.decorations[dy, dx])
        return None if value == NO_DECORATION else value


def decorate(shape: Shape, rng: random.Random, decoration_count: int) -> np.ndarray:
    """Draw an independent decoration id for each filled cell of ``shape``."""
    out = np.full(shape.shape, NO_DECORATION, dtype=np.int16)
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                out[dy, dx] = rng.randrange(decoration_count)
    return out


class PieceFactory:
    def __init__(self, rng: random.Random, spawn_x: int, spawn_y: int, decoration_count: int) -> None:
        self.rng = rng
        self.spawn_x = spawn_x
        self.spawn_y = spawn_y
        self.decoration_count = decoration_count

    def spawn(self) -> Piece:
        kind = self.rng.choice(list(TetrominoType))
        return self.make(kind)

    def make(self, kind: TetrominoType) -> Piece:
        decorations = decorate(BASE_SHAPES[kind], self.rng, self.decoration_count)
        return Piece(kind=kind, x=self.spawn_x, y=self.spawn_y, decorations=decorations)
