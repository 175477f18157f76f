"""Game module for block_drop.

Exports the core game engine and supporting classes:
- GameGrid: Occupancy and decoration matrices with line clearing
- Piece: The falling piece, its origin and per-cell decorations
- PieceFactory: Seeded random spawner over the shape catalog
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear, placement and hard-drop scoring
- DropTimer: Cancellable recurring drop tick
- GameSession: Lifecycle, movement and landing for one game
"""

from .grid import GameGrid
from .pieces import Piece, PieceFactory, TetrominoType, BASE_SHAPES
from .rules import ScoringRules
from .timer import DropTimer
from .core import Action, GameConfig, GameSession, GameSnapshot, GameState, collides

__all__ = [
    "GameGrid",
    "Piece",
    "PieceFactory",
    "TetrominoType",
    "BASE_SHAPES",
    "ScoringRules",
    "DropTimer",
    "Action",
    "GameConfig",
    "GameSession",
    "GameSnapshot",
    "GameState",
    "collides",
]
