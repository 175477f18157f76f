import pytest

pygame = pytest.importorskip("pygame")

from block_drop.game import GameConfig, GameSession, GameState
from block_drop.visualization.assets import DecorationCatalog
from block_drop.visualization.human_play import build_parser, command_for_event, dispatch
from block_drop.visualization.renderer import Renderer


@pytest.fixture
def screen():
    pygame.init()
    renderer = Renderer(12, 15)
    surf = pygame.display.set_mode(renderer.window_size)
    yield surf
    pygame.quit()


def test_dispatch_maps_commands(session):
    assert dispatch(session, "pause")
    assert session.state is GameState.RUNNING
    x = session.current_piece.x
    assert dispatch(session, "left")
    assert session.current_piece.x == x - 1
    assert dispatch(session, "drop")
    assert session.score >= 10
    assert dispatch(session, "restart")
    assert session.score == 0 and session.state is GameState.PAUSED
    assert not dispatch(session, "rotate")
    assert not dispatch(session, None)


def test_keys_and_buttons_resolve_to_commands(screen):
    renderer = Renderer(12, 15)
    key = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE)
    assert command_for_event(key, renderer) == "drop"
    for button in renderer.buttons:
        click = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=button.rect.center)
        assert command_for_event(click, renderer) == button.command
    miss = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0))
    assert command_for_event(miss, renderer) is None


def test_catalog_without_assets_falls_back(tmp_path):
    catalog = DecorationCatalog(str(tmp_path), count=3)
    assert catalog.load() == 0
    assert catalog.image(0) is None
    assert catalog.image(None) is None
    assert catalog.path_for(0).endswith("block_image_1.jpeg")


def test_catalog_needs_one_entry():
    with pytest.raises(ValueError):
        DecorationCatalog(None, count=0)


def test_renderer_draws_flat_colours_without_images(screen, session):
    renderer = Renderer(12, 15, catalog=DecorationCatalog(None))
    session.start()
    session.hard_drop()
    renderer.draw(screen, session.snapshot())
    (ox, oy), size = renderer.board_origin, renderer.config.cell_size
    x, y = next((x, y) for y in range(15) for x in range(12) if session.grid.is_occupied(x, y))
    color = screen.get_at((ox + x * size + size // 2, oy + y * size + size // 2))
    assert tuple(color)[:3] == (247, 147, 26)


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.tick_ms == 700
    config = GameConfig(tick_ms=args.tick_ms, random_seed=args.seed)
    assert GameSession(config).state is GameState.PAUSED


def _tap_events(renderer, command):
    button = next(b for b in renderer.buttons if b.command == command)
    w, h = renderer.window_size
    cx, cy = button.rect.center
    finger = pygame.event.Event(pygame.FINGERDOWN, x=(cx + 0.5) / w, y=(cy + 0.5) / h, touch_id=0, finger_id=0)
    synthetic = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=button.rect.center, touch=True)
    return [finger, synthetic]


def test_single_tap_runs_command_once(screen, session):
    renderer = Renderer(12, 15)
    for event in _tap_events(renderer, "pause"):
        dispatch(session, command_for_event(event, renderer))
    assert session.state is GameState.RUNNING

    for event in _tap_events(renderer, "drop"):
        dispatch(session, command_for_event(event, renderer))
    assert session.grid.filled_count() == 4


def _write_skin(tmp_path, index, color):
    surf = pygame.Surface((16, 16))
    surf.fill(color)
    pygame.image.save(surf, str(tmp_path / f"block_image_{index}.jpeg"))


def test_catalog_loads_existing_images(screen, tmp_path):
    _write_skin(tmp_path, 1, (30, 90, 220))
    catalog = DecorationCatalog(str(tmp_path), count=2, cell_size=30)
    assert catalog.load() == 1
    image = catalog.image(0)
    assert image is not None
    assert image.get_size() == (30, 30)
    assert catalog.image(1) is None


def test_renderer_draws_loaded_image(screen, session, tmp_path):
    for index in range(1, 11):
        _write_skin(tmp_path, index, (30, 90, 220))
    catalog = DecorationCatalog(str(tmp_path), count=10)
    assert catalog.load() == 10
    renderer = Renderer(12, 15, catalog=catalog)
    session.start()
    session.hard_drop()
    renderer.draw(screen, session.snapshot())
    (ox, oy), size = renderer.board_origin, renderer.config.cell_size
    x, y = next((x, y) for y in range(15) for x in range(12) if session.grid.is_occupied(x, y))
    r, g, b = tuple(screen.get_at((ox + x * size + size // 2, oy + y * size + size // 2)))[:3]
    # jpeg is lossy, so compare loosely
    assert abs(r - 30) < 20 and abs(g - 90) < 20 and abs(b - 220) < 20
