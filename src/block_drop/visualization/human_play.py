from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional

import pygame

from block_drop.game import GameConfig, GameSession
from .assets import DecorationCatalog
from .renderer import Renderer, RenderConfig

logger = logging.getLogger(__name__)


COMMANDS: Dict[str, Callable[[GameSession], object]] = {
    "left": lambda game: game.attempt_move(-1, 0),
    "right": lambda game: game.attempt_move(1, 0),
    "down": lambda game: game.attempt_move(0, 1),
    "drop": lambda game: game.hard_drop(),
    "pause": lambda game: game.toggle_pause(),
    "restart": lambda game: game.restart(),
}

KEY_TO_COMMAND: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "drop",
    pygame.K_SPACE: "drop",
    pygame.K_p: "pause",
    pygame.K_RETURN: "pause",
    pygame.K_r: "restart",
}


def dispatch(game: GameSession, command: Optional[str]) -> bool:
    """Run a named command against the session. Returns False for unknown commands."""
    if command is None or command not in COMMANDS:
        return False
    COMMANDS[command](game)
    return True


def command_for_event(event: pygame.event.Event, renderer: Renderer) -> Optional[str]:
    if event.type == pygame.KEYDOWN:
        return KEY_TO_COMMAND.get(event.key)
    # SDL also emits a mouse event for every tap; FINGERDOWN already covers it
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
        return renderer.button_at(event.pos)
    if event.type == pygame.FINGERDOWN:
        w, h = pygame.display.get_surface().get_size()
        return renderer.button_at((int(event.x * w), int(event.y * h)))
    return None


def run(config: Optional[GameConfig] = None, assets: Optional[str] = None, cell_size: int = 30) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = GameSession(config, clock=pygame.time.get_ticks)
        catalog = DecorationCatalog(assets, count=game.config.decoration_count, cell_size=cell_size)
        renderer = Renderer(game.config.cols, game.config.rows, RenderConfig(cell_size=cell_size), catalog)

        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Block Drop")
        catalog.load()

        dirty = True

        def request_redraw(_: GameSession) -> None:
            nonlocal dirty
            dirty = True

        game.add_listener(request_redraw)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    dispatch(game, command_for_event(event, renderer))

            # Gravity
            game.update()

            if dirty:
                renderer.draw(screen, game.snapshot())
                dirty = False

            clock.tick(60)
        logger.info("Quit with score %d", game.score)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Drop")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=700)
    p.add_argument("--assets", type=str, default=None, help="directory holding block_image_N.jpeg skins")
    p.add_argument("--decorations", type=int, default=10)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = GameConfig(tick_ms=args.tick_ms, decoration_count=args.decorations, random_seed=args.seed)
    run(config, assets=args.assets, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
