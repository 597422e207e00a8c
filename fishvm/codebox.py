"""Program grid ("codebox") for the fish VM."""

from __future__ import annotations

import logging
from typing import List, Union

from .errors import EmptyProgram, OutOfBounds

LOGGER = logging.getLogger("fishvm.codebox")

FILL_BYTE = 0x20  # ' '


def _normalise_source(source: Union[str, bytes]) -> bytes:
    if isinstance(source, str):
        source = source.encode("utf-8")
    return bytes(source)


def split_rows(source: Union[str, bytes]) -> List[bytes]:
    """Split program text into rows.

    A carriage return before a line break is dropped, as is one newline
    terminating the final row.
    """
    data = _normalise_source(source)
    if data.endswith(b"\n"):
        data = data[:-1]
    return [line.rstrip(b"\r") for line in data.split(b"\n")]


class CodeBox:
    """Rectangular, space-padded grid of instruction bytes.

    Rows are ``bytearray`` objects so ``p`` can overwrite single cells in
    place; nothing else mutates the grid after loading.
    """

    def __init__(self, rows: List[bytes]) -> None:
        width = max((len(row) for row in rows), default=0)
        if not rows or width == 0:
            raise EmptyProgram("cannot accept a program of length 0 (no room for the fish to survive)")
        self.width = width
        self.height = len(rows)
        self.cells: List[bytearray] = [
            bytearray(row) + bytearray([FILL_BYTE]) * (width - len(row)) for row in rows
        ]

    @classmethod
    def from_source(cls, source: Union[str, bytes]) -> "CodeBox":
        data = _normalise_source(source)
        if not data.strip():
            raise EmptyProgram("cannot accept an empty or whitespace-only program")
        box = cls(split_rows(data))
        LOGGER.debug("loaded %dx%d codebox", box.width, box.height)
        return box

    def __repr__(self) -> str:
        return f"CodeBox(width={self.width}, height={self.height})"

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise OutOfBounds(f"cell ({x},{y}) outside {self.width}x{self.height} codebox")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return self.cells[y][x]

    def put(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        self.cells[y][x] = value & 0xFF

    def row_text(self, y: int) -> str:
        return self.cells[y].decode("latin-1")

    def lines(self) -> List[str]:
        return [self.row_text(y) for y in range(self.height)]


__all__ = ["CodeBox", "FILL_BYTE", "split_rows"]
