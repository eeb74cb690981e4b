"""Bishop diagonals, rook files, and piece-pair predicates."""

from __future__ import annotations

import itertools

from piece_values.analysis.snapshot import Color, PieceKind, PositionSnapshot
from piece_values.analysis.squares import DIAGONAL_DIRS, LINE_DIRS, Square, walk

__all__ = [
    "OPEN_DIAGONAL_MIN_SQUARES",
    "BLOCKING_SCAN_DEPTH",
    "count_free_squares",
    "is_diagonal_open",
    "has_open_diagonal",
    "is_diagonal_immediately_blocked",
    "are_both_diagonals_blocked",
    "is_open_column",
    "is_semi_open_column",
    "is_rook_connected",
    "has_bishop_pair",
]

OPEN_DIAGONAL_MIN_SQUARES = 4
BLOCKING_SCAN_DEPTH = 2


def count_free_squares(square: Square, direction: tuple[int, int], snapshot: PositionSnapshot) -> int:
    """Empty squares along a ray before the first piece or the edge."""
    df, dr = direction
    count = 0
    for sq in walk(square, df, dr):
        if not snapshot.is_empty(sq):
            break
        count += 1
    return count


def is_diagonal_open(square: Square, direction: tuple[int, int], snapshot: PositionSnapshot) -> bool:
    return count_free_squares(square, direction, snapshot) >= OPEN_DIAGONAL_MIN_SQUARES


def has_open_diagonal(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """At least one of the four diagonal rays is open."""
    return any(is_diagonal_open(square, d, snapshot) for d in DIAGONAL_DIRS)


def is_diagonal_immediately_blocked(
    square: Square,
    color: Color,
    direction: tuple[int, int],
    snapshot: PositionSnapshot,
) -> bool:
    """Own pawn within the first two squares of the ray, before any other piece."""
    df, dr = direction
    for sq in itertools.islice(walk(square, df, dr), BLOCKING_SCAN_DEPTH):
        piece = snapshot.piece_at(sq)
        if piece is None:
            continue
        return piece.kind is PieceKind.PAWN and piece.color is color
    return False


def are_both_diagonals_blocked(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """Each diagonal line has at least one immediately blocked ray."""
    up_right, down_left, up_left, down_right = (
        is_diagonal_immediately_blocked(square, color, d, snapshot) for d in DIAGONAL_DIRS
    )
    return (up_right or down_left) and (up_left or down_right)


def _other_file_squares(square: Square) -> list[Square]:
    return [Square(square.file, r) for r in range(8) if r != square.rank]


def is_open_column(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """No pawn of either color elsewhere on the file."""
    for sq in _other_file_squares(square):
        piece = snapshot.piece_at(sq)
        if piece is not None and piece.kind is PieceKind.PAWN:
            return False
    return True


def is_semi_open_column(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """No friendly pawn elsewhere on the file. Also true on fully open files."""
    return not any(
        snapshot.has(sq, PieceKind.PAWN, color) for sq in _other_file_squares(square)
    )


def is_rook_connected(square: Square, color: Color, snapshot: PositionSnapshot) -> bool:
    """Another friendly rook on the same rank or file with nothing in between."""
    for df, dr in LINE_DIRS:
        for sq in walk(square, df, dr):
            piece = snapshot.piece_at(sq)
            if piece is None:
                continue
            if piece.kind is PieceKind.ROOK and piece.color is color:
                return True
            break
    return False


def has_bishop_pair(color: Color, snapshot: PositionSnapshot) -> bool:
    """Two or more bishops, regardless of square color."""
    return len(snapshot.pieces(PieceKind.BISHOP, color)) >= 2
