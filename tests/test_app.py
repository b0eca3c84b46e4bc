import io

import pygame
import pytest

from totoro_long.app import (
    TEXTURE_NAMES,
    TILE,
    Renderer,
    load_textures,
    main,
    translate_key,
)
from totoro_long.game import KEY_ESCAPE, Direction, Game, Outcome
from totoro_long.mapfile import MSG_NO_COLLECTIBLE, MSG_NOT_BER, GameMap
from totoro_long.xpm import XpmError

COLOURS = {
    "background": (10, 20, 30),
    "door": (40, 50, 60),
    "acorn": (70, 80, 90),
    "tree": (100, 110, 120),
    "totoro": (130, 140, 150),
    "totoro_with_door": (160, 170, 180),
}


def _textures():
    surfaces = {}
    for name, colour in COLOURS.items():
        surface = pygame.Surface((TILE, TILE))
        surface.fill(colour)
        surfaces[name] = surface
    return surfaces


def _game(rows):
    return Game(GameMap.from_lines(line + "\n" for line in rows), stream=io.StringIO())


def _colour_at(screen, row, col):
    return tuple(screen.get_at((col * TILE + 5, row * TILE + 5)))[:3]


def test_translate_escape():
    assert translate_key(pygame.K_ESCAPE) == KEY_ESCAPE


def test_translate_letters_unchanged():
    assert translate_key(pygame.K_w) == 119
    assert translate_key(pygame.K_d) == 100


def test_renderer_requires_all_textures():
    textures = _textures()
    del textures["acorn"]
    with pytest.raises(KeyError):
        Renderer(pygame.Surface((TILE, TILE)), textures)


def test_draw_initial_board():
    game = _game(["11111", "1PCE1", "11111"])
    screen = pygame.Surface((game.width * TILE, game.height * TILE))
    Renderer(screen, _textures()).draw(game)
    assert _colour_at(screen, 0, 0) == COLOURS["tree"]
    assert _colour_at(screen, 1, 1) == COLOURS["totoro"]
    assert _colour_at(screen, 1, 2) == COLOURS["acorn"]
    assert _colour_at(screen, 1, 3) == COLOURS["door"]


def test_draw_follows_moves_over_exit():
    game = _game(["1111111", "1PCE0C1", "1111111"])
    screen = pygame.Surface((game.width * TILE, game.height * TILE))
    renderer = Renderer(screen, _textures())

    assert game.move(Direction.RIGHT) is Outcome.MOVED
    renderer.draw(game)
    assert _colour_at(screen, 1, 1) == COLOURS["background"]
    assert _colour_at(screen, 1, 2) == COLOURS["totoro"]

    assert game.move(Direction.RIGHT) is Outcome.MOVED
    renderer.draw(game)
    assert _colour_at(screen, 1, 3) == COLOURS["totoro_with_door"]

    assert game.move(Direction.RIGHT) is Outcome.MOVED
    renderer.draw(game)
    assert _colour_at(screen, 1, 3) == COLOURS["door"]
    assert _colour_at(screen, 1, 4) == COLOURS["totoro"]


def _write_texture(path, colour):
    r, g, b = colour
    path.write_text(
        "static char *t[] = {\n"
        '"2 2 1 1",\n'
        f'"x c #{r:02X}{g:02X}{b:02X}",\n'
        '"xx",\n'
        '"xx"\n'
        "};\n"
    )


def test_load_textures(tmp_path):
    for name, colour in COLOURS.items():
        _write_texture(tmp_path / f"{name}.xpm", colour)
    textures = load_textures(tmp_path)
    assert set(textures) == set(TEXTURE_NAMES)
    for name, surface in textures.items():
        assert surface.get_size() == (2, 2)
        assert tuple(surface.get_at((1, 1)))[:3] == COLOURS[name]


def test_load_textures_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_textures(tmp_path)


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text("111\n1P1\n111\n")
    assert main([str(path)]) == 1
    assert MSG_NOT_BER in capsys.readouterr().err


def test_main_reports_map_problems(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text("11111\n1P0E1\n11111\n")
    assert main([str(path)]) == 1
    assert MSG_NO_COLLECTIBLE in capsys.readouterr().err