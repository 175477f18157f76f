from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from block_drop.game import GameSnapshot, GameState
from block_drop.game.grid import NO_DECORATION
from .assets import DecorationCatalog

Color = Tuple[int, int, int]

# Flat fallback per occupancy value while block images are unavailable
PALETTE: Tuple[Color, ...] = (
    (0, 0, 0),
    (247, 147, 26),
    (101, 66, 50),
)
BORDER: Color = (26, 26, 26)
BACKGROUND: Color = (10, 10, 14)
TEXT: Color = (255, 255, 255)


@dataclass
class RenderConfig:
    cell_size: int = 30
    margin: int = 20
    button_height: int = 48


@dataclass
class Button:
    label: str
    command: str
    rect: pygame.Rect


def _color_for_value(v: int) -> Color:
    return PALETTE[v] if 0 <= v < len(PALETTE) else (200, 200, 200)


class Renderer:
    def __init__(self, cols: int, rows: int, config: Optional[RenderConfig] = None,
                 catalog: Optional[DecorationCatalog] = None) -> None:
        self.cols = cols
        self.rows = rows
        self.config = config or RenderConfig()
        self.catalog = catalog
        self._font: Optional[pygame.font.Font] = None
        self.buttons = self._layout_buttons()

    @property
    def board_size(self) -> Tuple[int, int]:
        return self.cols * self.config.cell_size, self.rows * self.config.cell_size

    @property
    def board_origin(self) -> Tuple[int, int]:
        # Header strip above the board holds the score
        return self.config.margin, self.config.margin * 2

    @property
    def window_size(self) -> Tuple[int, int]:
        w, h = self.board_size
        m = self.config.margin
        return w + m * 2, h + m * 4 + self.config.button_height * 2

    def _layout_buttons(self) -> List[Button]:
        w, h = self.board_size
        m = self.config.margin
        bh = self.config.button_height
        top = self.board_origin[1] + h + m
        third = w // 3
        half = w // 2
        return [
            Button("Left", "left", pygame.Rect(m, top, third - 4, bh - 4)),
            Button("Drop", "drop", pygame.Rect(m + third, top, third - 4, bh - 4)),
            Button("Right", "right", pygame.Rect(m + third * 2, top, third - 4, bh - 4)),
            Button("Start", "pause", pygame.Rect(m, top + bh, half - 4, bh - 4)),
            Button("Restart", "restart", pygame.Rect(m + half, top + bh, half - 4, bh - 4)),
        ]

    def button_at(self, pos: Tuple[int, int]) -> Optional[str]:
        for button in self.buttons:
            if button.rect.collidepoint(pos):
                return button.command
        return None

    def _font_for(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _draw_block(self, surf: pygame.Surface, x: int, y: int, value: int, decoration: Optional[int]) -> None:
        size = self.config.cell_size
        rect = pygame.Rect(x * size, y * size, size, size)
        image = self.catalog.image(decoration) if self.catalog is not None else None
        if image is not None:
            surf.blit(image, rect)
        else:
            pygame.draw.rect(surf, _color_for_value(value), rect)
        pygame.draw.rect(surf, BORDER, rect, 1)

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        surf = pygame.Surface(self.board_size)
        surf.fill(PALETTE[0])
        h, w = snapshot.cells.shape
        for y in range(h):
            for x in range(w):
                if snapshot.cells[y, x]:
                    decoration = int(snapshot.decorations[y, x])
                    self._draw_block(surf, x, y, 1, None if decoration == NO_DECORATION else decoration)
        for x, y, decoration in snapshot.piece_cells:
            if 0 <= y < h and 0 <= x < w:
                self._draw_block(surf, x, y, 1, decoration)
        return surf

    def _draw_buttons(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font = self._font_for()
        for button in self.buttons:
            label = button.label
            if button.command == "pause":
                label = "Pause" if snapshot.state is GameState.RUNNING else "Start"
            pygame.draw.rect(screen, PALETTE[2], button.rect)
            pygame.draw.rect(screen, PALETTE[1], button.rect, 2)
            text = font.render(label, True, TEXT)
            screen.blit(text, text.get_rect(center=button.rect.center))

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        m = self.config.margin
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(snapshot), self.board_origin)
        font = self._font_for()
        score = font.render(f"Score: {snapshot.score}", True, TEXT)
        screen.blit(score, (m, m // 2))
        self._draw_buttons(screen, snapshot)
        if snapshot.game_over:
            text = font.render("Game Over - press R to restart", True, TEXT)
            w, h = self.board_size
            ox, oy = self.board_origin
            screen.blit(text, text.get_rect(center=(ox + w // 2, oy + h // 2)))
        pygame.display.flip()
