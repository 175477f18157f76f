from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Piece, PieceFactory, TetrominoType
from .rules import ScoringRules
from .timer import DropTimer

logger = logging.getLogger(__name__)

# Widest and tallest shapes in the catalog
MAX_PIECE_WIDTH = 4
MAX_PIECE_HEIGHT = 2


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    NONE = 4


class GameState(Enum):
    PAUSED = "paused"
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    cols: int = 12
    rows: int = 15
    spawn_x: int = 3
    spawn_y: int = 0
    tick_ms: int = 700
    decoration_count: int = 10
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cols < MAX_PIECE_WIDTH or self.rows < MAX_PIECE_HEIGHT:
            raise ValueError(f"board {self.cols}x{self.rows} is too small for the piece catalog")
        if not 0 <= self.spawn_x <= self.cols - MAX_PIECE_WIDTH:
            raise ValueError(f"spawn_x={self.spawn_x} does not fit a {self.cols}-column board")
        if self.spawn_y + MAX_PIECE_HEIGHT > self.rows:
            raise ValueError(f"spawn_y={self.spawn_y} does not fit a {self.rows}-row board")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.decoration_count < 1:
            raise ValueError("at least one decoration is required")


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of a session handed to renderers and agents."""

    cells: np.ndarray
    decorations: np.ndarray
    piece_kind: Optional[TetrominoType]
    piece_cells: Tuple[Tuple[int, int, int], ...]
    score: int
    lines_cleared_total: int
    state: GameState

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER


def collides(piece: Piece, grid: GameGrid) -> bool:
    """True if any filled cell of ``piece`` is off the sides/bottom or on a filled grid cell.

    Cells above the top row only collide with the side walls.
    """
    for x, y in piece.cells():
        if x < 0 or x >= grid.width or y >= grid.height:
            return True
        if y >= 0 and grid.is_occupied(x, y):
            return True
    return False


Listener = Callable[["GameSession"], None]


class GameSession:
    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.factory = PieceFactory(
            self.rng, self.config.spawn_x, self.config.spawn_y, self.config.decoration_count
        )
        self.timer = DropTimer(self.config.tick_ms, self._on_tick, clock)
        self.score = 0
        self.lines_cleared_total = 0
        self.state = GameState.PAUSED
        self.current_piece: Optional[Piece] = None
        self._listeners: List[Listener] = []
        self.restart()

    # Lifecycle

    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def restart(self) -> None:
        self.timer.stop()
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.state = GameState.PAUSED
        logger.info("New game, waiting for start")
        self._spawn_piece()
        self._notify()

    def start(self) -> None:
        if self.state is not GameState.PAUSED:
            return
        self.state = GameState.RUNNING
        self.timer.start()
        logger.info("Game running")
        self._notify()

    def pause(self) -> None:
        if self.state is not GameState.RUNNING:
            return
        self.timer.stop()
        self.state = GameState.PAUSED
        logger.info("Game paused at score %d", self.score)
        self._notify()

    def toggle_pause(self) -> GameState:
        if self.state is GameState.PAUSED:
            self.start()
        elif self.state is GameState.RUNNING:
            self.pause()
        return self.state

    def update(self) -> int:
        """Advance the drop timer from the host loop. Returns ticks fired."""
        return self.timer.update()

    def _on_tick(self) -> None:
        self.attempt_move(0, 1)

    def _end_game(self) -> None:
        self.timer.stop()
        self.state = GameState.GAME_OVER
        logger.info("Game over with score %d (%d lines)", self.score, self.lines_cleared_total)

    # Movement

    def attempt_move(self, dx: int, dy: int) -> bool:
        if self.state is not GameState.RUNNING:
            logger.debug("Ignoring move (%d, %d) while %s", dx, dy, self.state.value)
            return False
        piece = self.current_piece
        assert piece is not None
        piece.x += dx
        piece.y += dy
        moved = True
        if collides(piece, self.grid):
            piece.x -= dx
            piece.y -= dy
            moved = False
            if dy > 0:
                self._land()
        self._notify()
        return moved

    def hard_drop(self) -> int:
        if self.state is not GameState.RUNNING:
            logger.debug("Ignoring hard drop while %s", self.state.value)
            return 0
        piece = self.current_piece
        assert piece is not None
        start_y = piece.y
        while True:
            piece.y += 1
            if collides(piece, self.grid):
                piece.y -= 1
                break
        distance = piece.y - start_y
        self._land(bonus=self.rules.hard_drop_bonus(distance))
        self._notify()
        return distance

    def step(self, action: Action) -> None:
        if action == Action.LEFT:
            self.attempt_move(-1, 0)
        elif action == Action.RIGHT:
            self.attempt_move(1, 0)
        elif action == Action.SOFT_DROP:
            self.attempt_move(0, 1)
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

    # Placement

    def _spawn_piece(self) -> None:
        self.current_piece = self.factory.spawn()
        if collides(self.current_piece, self.grid):
            self._end_game()

    def _merge(self) -> None:
        assert self.current_piece is not None
        for x, y, decoration in self.current_piece.decorated_cells():
            # Cells still above the board are lost
            if y >= 0:
                self.grid.set_cell(x, y, decoration)

    def _land(self, bonus: int = 0) -> None:
        self._merge()
        # Topped out: the piece came to rest before fully entering the board
        if any(y < 0 for _, y in self.current_piece.cells()):
            self._end_game()
            return
        self.score += bonus
        lines = self.grid.clear_full_rows()
        if lines:
            logger.debug("Cleared %d line(s)", lines)
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_placement(lines)
        self._spawn_piece()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Views

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        return GameSnapshot(
            cells=self.grid.clone_state(),
            decorations=self.grid.clone_decorations(),
            piece_kind=piece.kind if piece is not None else None,
            piece_cells=tuple(piece.decorated_cells()) if piece is not None else (),
            score=self.score,
            lines_cleared_total=self.lines_cleared_total,
            state=self.state,
        )

    def get_state(self) -> np.ndarray:
        # Grid copy with the falling piece overlaid as 2
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    state[y, x] = 2
        return state
