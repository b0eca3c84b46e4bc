"""Reading and validating ``.ber`` map files."""

from __future__ import annotations

import os
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple, Union

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
ALLOWED = frozenset(WALL + FLOOR + COLLECTIBLE + EXIT + PLAYER)

MSG_NOT_BER = "File is not .ber!"
MSG_EMPTY_FILE = "There is a empty .ber file"
MSG_EMPTY_LINE = "There is a empty line"
MSG_NOT_RECTANGLE = "Not Rectangle / One line"
MSG_OPEN = "fd error"
MSG_BAD_CHAR = "There is character rather than C 0 1 E P"
MSG_EXIT_COUNT = "There is no exit/ Too much exit point"
MSG_PLAYER_COUNT = "There is no player/ Too much player"
MSG_NO_COLLECTIBLE = "There is no collectible"
MSG_NO_PATH = "There is no valid path"
MSG_WALLS = "Walls are missing on the sides"

Position = Tuple[int, int]
PathLike = Union[str, "os.PathLike[str]"]


class MapError(Exception):
    """Raised when a map file cannot be used."""

    def __init__(self, message: str, problems: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.problems = tuple(problems) or (message,)


def check_file_name(path: PathLike) -> str:
    """Return the path as a string, raising if it does not end in ``.ber``."""
    name = os.fspath(path)
    if not name.endswith(".ber"):
        raise MapError(MSG_NOT_BER)
    return name


def read_lines(path: PathLike) -> list[str]:
    """Read a file as lines split on ``\\n``, each keeping its newline."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise MapError(MSG_OPEN) from exc
    *complete, tail = text.split("\n")
    lines = [part + "\n" for part in complete]
    if tail:
        lines.append(tail)
    return lines


def check_layout(lines: Sequence[str]) -> int:
    """Check for empty lines and a rectangular shape; return the row width.

    Every line must be as long as the first one, counting its newline; a
    final line without a newline is one character shorter. A single line
    whose newline is missing therefore counts as not rectangular.
    """
    if not lines:
        raise MapError(MSG_EMPTY_FILE)
    expected = len(lines[0])
    empty_line = False
    not_rectangle = False
    for line in lines:
        if line.startswith("\n"):
            empty_line = True
        if line.endswith("\n"):
            if len(line) != expected:
                not_rectangle = True
        elif len(line) + 1 != expected:
            not_rectangle = True
    if empty_line:
        raise MapError(MSG_EMPTY_LINE)
    if not_rectangle:
        raise MapError(MSG_NOT_RECTANGLE)
    return expected - 1


def reachable_cells(grid: Sequence[str], start: Position) -> set[Position]:
    """Cells reachable from ``start`` by orthogonal steps avoiding walls."""

    def open_cell(row: int, col: int) -> bool:
        return 0 <= row < len(grid) and 0 <= col < len(grid[row]) and grid[row][col] != WALL

    if not open_cell(*start):
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        row, col = queue.popleft()
        for nxt in ((row + 1, col), (row, col + 1), (row - 1, col), (row, col - 1)):
            if nxt not in seen and open_cell(*nxt):
                seen.add(nxt)
                queue.append(nxt)
    return seen


@dataclass(frozen=True)
class GameMap:
    """A rectangular grid of map characters."""

    rows: Tuple[str, ...]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "GameMap":
        """Build a map from raw file lines after checking their layout."""
        lines = list(lines)
        width = check_layout(lines)
        return cls(tuple(line[:width] for line in lines))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def _cells(self) -> Iterator[tuple[int, int, str]]:
        for row_index, row in enumerate(self.rows):
            for col_index, char in enumerate(row):
                yield row_index, col_index, char

    def find(self, char: str) -> Position | None:
        """Position of the last ``char`` in reading order, or None."""
        found = None
        for row, col, cell in self._cells():
            if cell == char:
                found = (row, col)
        return found

    def count(self, char: str) -> int:
        """Number of cells holding ``char``."""
        return sum(row.count(char) for row in self.rows)

    @property
    def player(self) -> Position | None:
        return self.find(PLAYER)

    @property
    def exit(self) -> Position | None:
        return self.find(EXIT)

    def _walls_closed(self) -> bool:
        if not self.rows:
            return False
        top, bottom = self.rows[0], self.rows[-1]
        if any(ch != WALL for ch in top + bottom):
            return False
        return all(row and row[0] == WALL and row[-1] == WALL for row in self.rows)

    def problems(self) -> list[str]:
        """All reasons the map is unplayable, in reporting order."""
        bad_char = any(char not in ALLOWED for _, _, char in self._cells())
        exits = self.count(EXIT)
        players = self.count(PLAYER)
        collectibles = self.count(COLLECTIBLE)
        reached = reachable_cells(self.rows, self.player or (0, 0))
        blocked = any(
            char in (EXIT, COLLECTIBLE) and (row, col) not in reached
            for row, col, char in self._cells()
        )

        found = []
        if bad_char:
            found.append(MSG_BAD_CHAR)
        if exits != 1:
            found.append(MSG_EXIT_COUNT)
        if players != 1:
            found.append(MSG_PLAYER_COUNT)
        if collectibles == 0:
            found.append(MSG_NO_COLLECTIBLE)
        if blocked or exits == 0 or players == 0:
            found.append(MSG_NO_PATH)
        if not self._walls_closed():
            found.append(MSG_WALLS)
        return found

    def validate(self) -> "GameMap":
        """Return the map itself, or raise MapError listing every problem."""
        found = self.problems()
        if found:
            raise MapError("\n".join(found), found)
        return self


def load_map(path: PathLike) -> GameMap:
    """Read, check and validate a ``.ber`` map file."""
    name = check_file_name(path)
    lines = read_lines(name)
    if not lines:
        raise MapError(MSG_EMPTY_FILE)
    return GameMap.from_lines(lines).validate()