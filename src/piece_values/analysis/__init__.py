"""Pure-function piece valuation package.

Everything works on an immutable PositionSnapshot taken from a chess.Board.
No engine search, no side effects: each call recomputes from scratch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import chess

# Re-export everything so `from piece_values.analysis import X` works
from piece_values.analysis.squares import *  # noqa: F401,F403
from piece_values.analysis.snapshot import *  # noqa: F401,F403
from piece_values.analysis.pawns import *  # noqa: F401,F403
from piece_values.analysis.structure import *  # noqa: F401,F403
from piece_values.analysis.valuation import *  # noqa: F401,F403
from piece_values.analysis.legend import *  # noqa: F401,F403

# Explicit imports for orchestration logic
from piece_values.analysis.snapshot import Color, PositionSnapshot
from piece_values.analysis.squares import ALL_SQUARES, Square, parse_square
from piece_values.analysis.valuation import ValuationResult, round1, value_piece

logger = logging.getLogger(__name__)


@dataclass
class PositionReport:
    fen: str
    turn: str
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    values: dict[str, ValuationResult] = field(default_factory=dict)
    white_total: float = 0
    black_total: float = 0
    advantage: float = 0
    advantage_text: str = "Equal"

    def to_dict(self) -> dict:
        return {
            "fen": self.fen,
            "turn": self.turn,
            "is_check": self.is_check,
            "is_checkmate": self.is_checkmate,
            "is_stalemate": self.is_stalemate,
            "values": {name: v.to_dict() for name, v in self.values.items()},
            "white_total": self.white_total,
            "black_total": self.black_total,
            "advantage": self.advantage,
            "advantage_text": self.advantage_text,
        }


def analyze(snapshot: PositionSnapshot, square: Square | str) -> ValuationResult:
    """Value the piece on one square. Raises InvalidSquare for bad names."""
    if isinstance(square, str):
        square = parse_square(square)
    return value_piece(square, snapshot)


def analyze_all(snapshot: PositionSnapshot) -> dict[Square, ValuationResult]:
    """Value every occupied square, keyed in board scan order (a8..h1)."""
    occupied = snapshot.occupied_squares()
    logger.debug("Valuing %d occupied squares", len(occupied))
    return {sq: value_piece(sq, snapshot) for sq in ALL_SQUARES if sq in occupied}


def side_totals(snapshot: PositionSnapshot, values: dict[Square, ValuationResult]) -> dict[Color, float]:
    totals = {Color.WHITE: 0.0, Color.BLACK: 0.0}
    for sq, result in values.items():
        piece = snapshot.piece_at(sq)
        # Foreign color tags were valued as zero; leave them out of both sides
        if piece is not None and piece.color in totals:
            totals[piece.color] += result.total
    return {color: round1(total) for color, total in totals.items()}


def _advantage_text(advantage: float) -> str:
    if advantage > 0:
        return f"White +{advantage:g}"
    if advantage < 0:
        return f"Black +{abs(advantage):g}"
    return "Equal"


def analyze_position(board: chess.Board) -> PositionReport:
    snapshot = PositionSnapshot.from_board(board)
    values = analyze_all(snapshot)
    totals = side_totals(snapshot, values)
    advantage = round1(totals[Color.WHITE] - totals[Color.BLACK])
    return PositionReport(
        fen=board.fen(),
        turn=snapshot.side_to_move().value,
        is_check=board.is_check(),
        is_checkmate=board.is_checkmate(),
        is_stalemate=board.is_stalemate(),
        values={sq.name: v for sq, v in values.items()},
        white_total=totals[Color.WHITE],
        black_total=totals[Color.BLACK],
        advantage=advantage,
        advantage_text=_advantage_text(advantage),
    )
