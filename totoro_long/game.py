"""Game state and movement rules for a loaded map."""

from __future__ import annotations

import enum
from typing import Iterator, Optional, TextIO, Tuple

from .mapfile import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap
from .printf import print_formatted

PLAYER_ON_EXIT = "S"
KEY_ESCAPE = 65307

Position = Tuple[int, int]


class Direction(enum.Enum):
    """A step on the grid as a (row, column) offset."""

    UP = (-1, 0)
    LEFT = (0, -1)
    DOWN = (1, 0)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Position:
        return self.value


KEY_DIRECTIONS = {
    119: Direction.UP,  # w
    97: Direction.LEFT,  # a
    115: Direction.DOWN,  # s
    100: Direction.RIGHT,  # d
}


class Outcome(enum.Enum):
    """What a key press or a move did to the game."""

    IGNORED = "ignored"
    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    QUIT = "quit"


class Game:
    """A running game: a mutable grid, the player and the move counter."""

    def __init__(self, game_map: GameMap, stream: Optional[TextIO] = None) -> None:
        player = game_map.player
        if player is None:
            raise ValueError("map has no player")
        self._grid = [list(row) for row in game_map.rows]
        self.player: Position = player
        self.door: Optional[Position] = game_map.exit
        self.collectibles_left = game_map.count(COLLECTIBLE)
        self.moves = 0
        self.outcome: Optional[Outcome] = None
        self._stream = stream

    @property
    def height(self) -> int:
        return len(self._grid)

    @property
    def width(self) -> int:
        return len(self._grid[0]) if self._grid else 0

    @property
    def finished(self) -> bool:
        return self.outcome in (Outcome.WON, Outcome.QUIT)

    def _say(self, fmt: str, *args: object) -> None:
        print_formatted(fmt, *args, stream=self._stream)

    def _finish(self, outcome: Outcome) -> Outcome:
        self.outcome = outcome
        return outcome

    def _check_running(self) -> None:
        if self.finished:
            raise RuntimeError("the game is over")

    def tile_at(self, row: int, col: int) -> str:
        """Character at a grid position; IndexError outside the grid."""
        if not (0 <= row < self.height and 0 <= col < len(self._grid[row])):
            raise IndexError(f"position ({row}, {col}) is outside the map")
        return self._grid[row][col]

    def cells(self) -> Iterator[tuple[int, int, str]]:
        """Every (row, column, character) of the grid in reading order."""
        for row_index, row in enumerate(self._grid):
            for col_index, char in enumerate(row):
                yield row_index, col_index, char

    def _step_to(self, target: Position, tile: str) -> None:
        pr, pc = self.player
        tr, tc = target
        if tile == EXIT:
            self._grid[pr][pc] = FLOOR
            self._grid[tr][tc] = PLAYER_ON_EXIT
        elif self._grid[pr][pc] == PLAYER_ON_EXIT:
            self._grid[pr][pc] = EXIT
            self._grid[tr][tc] = PLAYER
        else:
            self._grid[pr][pc] = FLOOR
            self._grid[tr][tc] = PLAYER
        self.player = target

    def move(self, direction: Direction) -> Outcome:
        """Try to move the player one step; count and report the move."""
        self._check_running()
        dr, dc = direction.delta
        target = (self.player[0] + dr, self.player[1] + dc)
        try:
            tile = self.tile_at(*target)
        except IndexError:
            tile = WALL
        if tile == WALL:
            return Outcome.BLOCKED
        if tile in (FLOOR, COLLECTIBLE, EXIT):
            if tile == EXIT and self.collectibles_left == 0:
                self.moves += 1
                self._say("You Win! Moves: %d\n", self.moves)
                return self._finish(Outcome.WON)
            self._step_to(target, tile)
            if tile == COLLECTIBLE:
                self.collectibles_left -= 1
        self.moves += 1
        self._say("moves: %d\n", self.moves)
        return Outcome.MOVED

    def press_key(self, keycode: int) -> Outcome:
        """Handle a key symbol: escape quits, w/a/s/d move."""
        self._check_running()
        if keycode == KEY_ESCAPE:
            self._say("You lost! Moves: %d\n", self.moves)
            return self._finish(Outcome.QUIT)
        direction = KEY_DIRECTIONS.get(keycode)
        if direction is None:
            return Outcome.IGNORED
        return self.move(direction)

    def quit(self) -> Outcome:
        """End the game as lost, as when the window is closed."""
        return self.press_key(KEY_ESCAPE)