"""Pawn structure predicates: passed, isolated, doubled, defended, center control."""

from __future__ import annotations

from piece_values.analysis.snapshot import Color, PieceKind, PositionSnapshot
from piece_values.analysis.squares import CENTER_SQUARES, Square, walk

__all__ = [
    "is_passed_pawn",
    "is_isolated_pawn",
    "is_doubled_pawn",
    "count_defending_pawns",
    "count_central_control",
    "is_in_opponent_half",
    "is_close_to_promotion",
    "has_other_pawns",
]


def _adjacent_files(square: Square) -> list[int]:
    return [f for f in (square.file - 1, square.file + 1) if 0 <= f <= 7]


def is_passed_pawn(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """No enemy pawn ahead on this file or either adjacent file."""
    enemy = color.opponent
    for f in [square.file, *_adjacent_files(square)]:
        start = Square(f, square.rank)
        for sq in walk(start, 0, color.forward):
            if snapshot.has(sq, PieceKind.PAWN, enemy):
                return False
    return True


def is_isolated_pawn(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """No friendly pawn anywhere on either adjacent file."""
    for f in _adjacent_files(square):
        for r in range(8):
            if snapshot.has(Square(f, r), PieceKind.PAWN, color):
                return False
    return True


def is_doubled_pawn(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """A friendly pawn stands somewhere ahead on the same file."""
    return any(
        snapshot.has(sq, PieceKind.PAWN, color)
        for sq in walk(square, 0, color.forward)
    )


def count_defending_pawns(square: Square, color: Color, snapshot: PositionSnapshot) -> int:
    """Friendly pawns diagonally behind (0-2)."""
    count = 0
    for file_step in (-1, 1):
        sq = square.offset(file_step, -color.forward)
        if sq is not None and snapshot.has(sq, PieceKind.PAWN, color):
            count += 1
    return count


def count_central_control(square: Square, color: Color, snapshot: PositionSnapshot) -> int:
    """How many of the pawn's two capture squares are central (0-2)."""
    count = 0
    for file_step in (-1, 1):
        sq = square.offset(file_step, color.forward)
        if sq is not None and sq in CENTER_SQUARES:
            count += 1
    return count


def is_in_opponent_half(square: Square, color: Color) -> bool:
    # rank >= 5 for white, <= 4 for black
    return square.rank >= 4 if color is Color.WHITE else square.rank <= 3


def is_close_to_promotion(square: Square, color: Color) -> bool:
    # rank >= 6 for white, <= 3 for black
    return square.rank >= 5 if color is Color.WHITE else square.rank <= 2


def has_other_pawns(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    return any(sq != square for sq in snapshot.pieces(PieceKind.PAWN, color))
