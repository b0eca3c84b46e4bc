"""The windowed game: textures, drawing and the event loop."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union

import pygame

from .game import KEY_ESCAPE, PLAYER_ON_EXIT, Game, Outcome
from .mapfile import COLLECTIBLE, FLOOR, WALL, MapError, load_map
from .xpm import XpmError, XpmImage, load_xpm

TILE = 64
TITLE = "Asude"
TEXTURE_NAMES = ("background", "door", "acorn", "tree", "totoro", "totoro_with_door")
DEFAULT_TEXTURES = Path("textures")

PathLike = Union[str, "os.PathLike[str]"]


def _to_surface(image: XpmImage) -> "pygame.Surface":
    surface = pygame.Surface((image.width, image.height))
    for y in range(image.height):
        for x in range(image.width):
            surface.set_at((x, y), image.rgb(x, y))
    return surface


def load_textures(directory: PathLike = DEFAULT_TEXTURES) -> Dict[str, "pygame.Surface"]:
    """Load every game texture from ``<directory>/<name>.xpm``."""
    base = Path(directory)
    return {name: _to_surface(load_xpm(base / f"{name}.xpm")) for name in TEXTURE_NAMES}


def translate_key(key: int) -> int:
    """Map a pygame key code to the key symbol the game understands."""
    return KEY_ESCAPE if key == pygame.K_ESCAPE else key


class Renderer:
    """Draws a game onto a surface, one 64-pixel tile per cell."""

    _TILE_TEXTURES = {
        WALL: "tree",
        FLOOR: "background",
        COLLECTIBLE: "acorn",
        PLAYER_ON_EXIT: "totoro_with_door",
    }

    def __init__(self, screen: "pygame.Surface", textures: Mapping[str, "pygame.Surface"]) -> None:
        missing = [name for name in TEXTURE_NAMES if name not in textures]
        if missing:
            raise KeyError(f"missing textures: {', '.join(missing)}")
        self.screen = screen
        self.textures = dict(textures)

    def _blit(self, name: str, position: Tuple[int, int]) -> None:
        row, col = position
        self.screen.blit(self.textures[name], (col * TILE, row * TILE))

    def draw(self, game: Game) -> None:
        """Draw the player, the door and then every other tile."""
        self._blit("totoro", game.player)
        if game.door is not None:
            self._blit("door", game.door)
        for row, col, char in game.cells():
            name = self._TILE_TEXTURES.get(char)
            if name is not None:
                self._blit(name, (row, col))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the map named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write("Usage: totoro_long map.ber\n")
        return 1
    try:
        game_map = load_map(args[0])
    except MapError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    game = Game(game_map)
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width * TILE, game.height * TILE))
        pygame.display.set_caption(TITLE)
        try:
            textures = load_textures(DEFAULT_TEXTURES)
        except XpmError as exc:
            sys.stderr.write(f"{exc}\n")
            return 1
        renderer = Renderer(screen, textures)
        renderer.draw(game)
        pygame.display.flip()
        while not game.finished:
            event = pygame.event.wait()
            if event.type == pygame.QUIT:
                game.quit()
            elif event.type == pygame.KEYDOWN:
                if game.press_key(translate_key(event.key)) is Outcome.MOVED:
                    renderer.draw(game)
                    pygame.display.flip()
    finally:
        pygame.quit()
    return 0