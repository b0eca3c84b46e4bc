"""A small printf supporting %c %s %p %d %i %u %x %X and %%."""

from __future__ import annotations

import sys
from typing import Iterator, Optional, TextIO

_UINT32 = 1 << 32


def _signed32(value: int) -> int:
    value %= _UINT32
    return value - _UINT32 if value >= 1 << 31 else value


def _char(value: object) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("%c needs a single character")
        return value
    return chr(int(value) % 256)


def _pointer(value: object) -> str:
    if value is None or int(value) == 0:
        return "(nil)"
    return "0x" + format(int(value) % (1 << 64), "x")


def _convert(kind: str, args: Iterator[object]) -> str:
    if kind == "%":
        return "%"
    if kind not in "cspdiuxX" or not kind:
        return ""
    try:
        value = next(args)
    except StopIteration:
        raise ValueError(f"not enough arguments for %{kind}") from None
    if kind == "c":
        return _char(value)
    if kind == "s":
        return "(null)" if value is None else str(value)
    if kind == "p":
        return _pointer(value)
    if kind in "di":
        return str(_signed32(int(value)))
    if kind == "u":
        return str(int(value) % _UINT32)
    return format(int(value) % _UINT32, kind)


def format_string(fmt: str, *args: object) -> str:
    """Format ``fmt`` with ``args``; unknown conversions produce nothing."""
    values = iter(args)
    parts = []
    chars = iter(fmt)
    for char in chars:
        if char == "%":
            parts.append(_convert(next(chars, ""), values))
        else:
            parts.append(char)
    return "".join(parts)


def print_formatted(fmt: str, *args: object, stream: Optional[TextIO] = None) -> int:
    """Write the formatted text to ``stream`` (stdout by default); return its length."""
    text = format_string(fmt, *args)
    (stream if stream is not None else sys.stdout).write(text)
    return len(text)