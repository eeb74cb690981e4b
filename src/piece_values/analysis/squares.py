"""Square algebra: coordinates, validation, and ray walking."""

from __future__ import annotations

import functools
from collections.abc import Iterator
from dataclasses import dataclass

import chess

__all__ = [
    "InvalidSquare",
    "Square",
    "parse_square",
    "walk",
    "ALL_SQUARES",
    "CENTER_SQUARES",
    "DIAGONAL_DIRS",
    "LINE_DIRS",
]


class InvalidSquare(ValueError):
    """Raised for a coordinate outside a1-h8."""


@functools.total_ordering
@dataclass(frozen=True)
class Square:
    file: int  # 0-7, a-h
    rank: int  # 0-7, 1-8

    def __post_init__(self):
        if not (0 <= self.file <= 7 and 0 <= self.rank <= 7):
            raise InvalidSquare(f"Square off the board: file={self.file} rank={self.rank}")

    @classmethod
    def from_index(cls, index: chess.Square) -> Square:
        return cls(chess.square_file(index), chess.square_rank(index))

    @property
    def index(self) -> chess.Square:
        """python-chess square index (a1=0 ... h8=63)."""
        return chess.square(self.file, self.rank)

    @property
    def name(self) -> str:
        return chess.FILE_NAMES[self.file] + chess.RANK_NAMES[self.rank]

    @property
    def file_name(self) -> str:
        return chess.FILE_NAMES[self.file]

    @property
    def rank_number(self) -> int:
        return self.rank + 1

    def offset(self, file_step: int, rank_step: int) -> Square | None:
        """Neighbouring square, or None if the step leaves the board."""
        f, r = self.file + file_step, self.rank + rank_step
        if 0 <= f <= 7 and 0 <= r <= 7:
            return Square(f, r)
        return None

    def _scan_key(self) -> tuple[int, int]:
        # Board scan order: rank 8 first, then a->h within the rank
        return (-self.rank, self.file)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Square):
            return NotImplemented
        return self._scan_key() < other._scan_key()

    def __str__(self) -> str:
        return self.name


def parse_square(s: str) -> Square:
    """Parse 'e4' style coordinates. Raises InvalidSquare on anything else."""
    if not isinstance(s, str) or len(s) != 2:
        raise InvalidSquare(f"Invalid square: {s!r}")
    file_char, rank_char = s[0].lower(), s[1]
    if file_char not in chess.FILE_NAMES or rank_char not in chess.RANK_NAMES:
        raise InvalidSquare(f"Invalid square: {s!r}")
    return Square(chess.FILE_NAMES.index(file_char), chess.RANK_NAMES.index(rank_char))


def walk(origin: Square, file_step: int, rank_step: int) -> Iterator[Square]:
    """Yield squares along a ray from origin (exclusive) until the board edge.

    Each call returns a fresh generator, so rays can be restarted freely.
    """
    if file_step == 0 and rank_step == 0:
        raise ValueError("walk() needs a non-zero step")
    f = origin.file + file_step
    r = origin.rank + rank_step
    while 0 <= f <= 7 and 0 <= r <= 7:
        yield Square(f, r)
        f += file_step
        r += rank_step


ALL_SQUARES: list[Square] = sorted(Square(f, r) for f in range(8) for r in range(8))

CENTER_SQUARES: frozenset[Square] = frozenset(
    parse_square(name) for name in ("d4", "e4", "d5", "e5")
)

# (up-right, down-left) and (up-left, down-right): each pair is one diagonal line
DIAGONAL_DIRS: list[tuple[int, int]] = [(1, 1), (-1, -1), (-1, 1), (1, -1)]
LINE_DIRS: list[tuple[int, int]] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
