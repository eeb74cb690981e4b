"""Read-only board view over python-chess."""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import chess

from piece_values.analysis.squares import Square, parse_square

__all__ = [
    "Color",
    "PieceKind",
    "Piece",
    "PositionSnapshot",
]

logger = logging.getLogger(__name__)


class Color(enum.Enum):
    WHITE = "white"
    BLACK = "black"

    @classmethod
    def from_chess(cls, color: chess.Color) -> Color:
        return cls.WHITE if color == chess.WHITE else cls.BLACK

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Rank step toward promotion."""
        return 1 if self is Color.WHITE else -1


class PieceKind(enum.Enum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


_KIND_BY_TYPE: dict[chess.PieceType, PieceKind] = {
    chess.PAWN: PieceKind.PAWN,
    chess.KNIGHT: PieceKind.KNIGHT,
    chess.BISHOP: PieceKind.BISHOP,
    chess.ROOK: PieceKind.ROOK,
    chess.QUEEN: PieceKind.QUEEN,
    chess.KING: PieceKind.KING,
}


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    @classmethod
    def from_chess(cls, piece: chess.Piece) -> Piece | None:
        kind = _KIND_BY_TYPE.get(piece.piece_type)
        if kind is None:
            return None
        return cls(kind, Color.from_chess(piece.color))

    @classmethod
    def from_symbol(cls, symbol: str) -> Piece | None:
        """'P' -> white pawn, 'n' -> black knight. None for anything else."""
        try:
            return cls.from_chess(chess.Piece.from_symbol(symbol))
        except (ValueError, KeyError):
            return None


@dataclass(frozen=True)
class PositionSnapshot:
    """What occupies each square, frozen for one analysis pass."""

    placement: Mapping[Square, Piece] = field(default_factory=dict)
    turn: Color = Color.WHITE

    def __post_init__(self):
        # Copy so the caller's dict can't change underneath us
        object.__setattr__(self, "placement", MappingProxyType(dict(self.placement)))

    @classmethod
    def from_board(cls, board: chess.Board) -> PositionSnapshot:
        placement = {}
        for idx, cp in board.piece_map().items():
            piece = Piece.from_chess(cp)
            if piece is None:
                logger.debug("Ignoring unrecognized piece %r on %s", cp, chess.square_name(idx))
                continue
            placement[Square.from_index(idx)] = piece
        return cls(placement=placement, turn=Color.from_chess(board.turn))

    @classmethod
    def from_fen(cls, fen: str) -> PositionSnapshot:
        """Build from a FEN. Raises ValueError for malformed FEN."""
        return cls.from_board(chess.Board(fen))

    @classmethod
    def from_symbols(cls, pieces: Mapping[str, str], turn: Color = Color.WHITE) -> PositionSnapshot:
        """Build from {"e4": "P", "d5": "p"}; unknown symbols are dropped."""
        placement = {}
        for name, symbol in pieces.items():
            piece = Piece.from_symbol(symbol)
            if piece is None:
                logger.debug("Ignoring unrecognized piece symbol %r on %s", symbol, name)
                continue
            placement[parse_square(name)] = piece
        return cls(placement=placement, turn=turn)

    def piece_at(self, square: Square) -> Piece | None:
        return self.placement.get(square)

    def occupied_squares(self) -> frozenset[Square]:
        return frozenset(self.placement)

    def side_to_move(self) -> Color:
        return self.turn

    def is_empty(self, square: Square) -> bool:
        return square not in self.placement

    def has(self, square: Square, kind: PieceKind, color: Color) -> bool:
        piece = self.placement.get(square)
        return piece is not None and piece.kind is kind and piece.color is color

    def pieces(self, kind: PieceKind, color: Color) -> list[Square]:
        """Squares holding the given piece, in scan order."""
        return sorted(
            sq for sq, p in self.placement.items() if p.kind is kind and p.color is color
        )
