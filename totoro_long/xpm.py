"""Reading XPM images into plain pixel grids."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .colors import TRANSPARENT, lookup_color

# Pixel value stored for the transparent colour "None".
TRANSPARENT_PIXEL = 0xFF000000

# Room for a two-word colour name, as a 64-byte buffer with its terminator.
_NAME_LIMIT = 63

_WORD_SPLIT = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")

PathLike = Union[str, "os.PathLike[str]"]


class XpmError(Exception):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: rows of 0xAARRGGBB pixel values."""

    width: int
    height: int
    pixels: Tuple[Tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Raw pixel value at column ``x`` of row ``y``."""
        return self.pixels[y][x]

    def rgb(self, x: int, y: int) -> Tuple[int, int, int]:
        """Red, green and blue of a pixel, ignoring the top byte."""
        value = self.pixel(x, y)
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def split_words(text: str) -> List[str]:
    """Words of ``text`` separated by runs of spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _blank(text: str, opener: str, closer: str) -> str:
    parts = []
    quoted = False
    index = 0
    while index < len(text):
        char = text[index]
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(opener, index):
            end = text.find(closer, index + len(opener))
            end = len(text) if end == -1 else end + len(closer)
            parts.append(" " * (end - index))
            index = end
            continue
        parts.append(char)
        index += 1
    return "".join(parts)


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The result has the same length as ``text``.
    """
    return _blank(_blank(text, "/*", "*/"), "//", "\n")


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def _hex(text: str) -> int:
    match = _HEX_PREFIX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def text_to_rgb(name: str, end: Optional[str] = None) -> int:
    """Colour value of an XPM colour word, optionally joined with the next word.

    ``#RRGGBB`` is read as hexadecimal; otherwise the name is looked up
    ignoring case. Unknown names give 0.
    """
    if name.startswith("#"):
        return _hex(name[1:])
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _next_line(rows: Iterator[str], what: str) -> str:
    try:
        return next(rows)
    except StopIteration:
        raise XpmError(f"missing {what} line") from None


def _read_palette(rows: Iterator[str], count: int, cpp: int) -> Dict[str, int]:
    direct = cpp <= 2
    palette: Dict[str, int] = {}
    for _ in range(count):
        line = _next_line(rows, "colour")
        words = split_words(line[cpp:])
        try:
            key_index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if key_index + 1 >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        following = words[key_index + 2] if key_index + 2 < len(words) else None
        value = text_to_rgb(words[key_index + 1], following)
        key = line[:cpp]
        if direct:
            palette[key] = value
        else:
            palette.setdefault(key, value)
    return palette


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM strings: a header, the colour table, then pixel rows."""
    rows = iter(lines)
    words = split_words(_next_line(rows, "header"))
    if len(words) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("header values must be positive")

    palette = _read_palette(rows, ncolors, cpp)

    pixels = []
    for _ in range(height):
        line = _next_line(rows, "pixel")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        keys = (line[start:start + cpp] for start in range(0, width * cpp, cpp))
        values = (palette.get(key, 0) for key in keys)
        pixels.append(tuple(TRANSPARENT_PIXEL if v == TRANSPARENT else v for v in values))
    return XpmImage(width, height, tuple(pixels))


def load_xpm(path: PathLike) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}") from exc
    return parse_xpm(quoted_strings(strip_comments(text)))