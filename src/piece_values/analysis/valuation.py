"""Per-piece strategic valuation with an ordered explanation trace.

Each piece kind has a fixed rule list. A rule that fires adjusts the bonus or
penalty tally and appends one explanation line, so the trace always reads in
evaluation order with the base value first. Amounts are kept as Decimal while
tallying so the one-decimal totals come out exact.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from piece_values.analysis import pawns, structure
from piece_values.analysis.snapshot import Color, PieceKind, PositionSnapshot
from piece_values.analysis.squares import CENTER_SQUARES, Square

__all__ = [
    "BASE_VALUES",
    "ValuationResult",
    "round1",
    "value_piece",
]

logger = logging.getLogger(__name__)

BASE_VALUES: dict[PieceKind, int] = {
    PieceKind.PAWN: 1,
    PieceKind.KNIGHT: 3,
    PieceKind.BISHOP: 3,
    PieceKind.ROOK: 5,
    PieceKind.QUEEN: 9,
    PieceKind.KING: 0,  # kings never count toward material
}

_TENTH = Decimal("0.1")


def round1(value) -> float:
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(str(value)).quantize(_TENTH, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class ValuationResult:
    base: float = 0
    bonuses: float = 0
    penalties: float = 0
    total: float = 0
    explanation: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> ValuationResult:
        return cls()

    def to_dict(self) -> dict:
        d = asdict(self)
        d["explanation"] = list(self.explanation)
        return d


class _Tally:
    def __init__(self, base: int):
        self.base = Decimal(base)
        self.bonuses = Decimal(0)
        self.penalties = Decimal(0)
        self.lines = [f"Base: {base}"]

    def bonus(self, amount: str, reason: str) -> None:
        self.bonuses += Decimal(amount)
        self.lines.append(f"+{amount} ({reason})")

    def penalty(self, amount: str, reason: str) -> None:
        self.penalties += Decimal(amount)
        self.lines.append(f"-{amount} ({reason})")

    def result(self) -> ValuationResult:
        return ValuationResult(
            base=float(self.base),
            bonuses=round1(self.bonuses),
            penalties=round1(self.penalties),
            total=round1(self.base + self.bonuses - self.penalties),
            explanation=tuple(self.lines),
        )


def _value_pawn(sq: Square, color: Color, snap: PositionSnapshot, t: _Tally) -> None:
    if pawns.is_in_opponent_half(sq, color):
        t.bonus("0.5", "opponent half")

    if pawns.is_passed_pawn(sq, color, snap):
        t.bonus("0.5", "passed")
        if pawns.is_close_to_promotion(sq, color):
            t.bonus("1.0", "close to promotion")

    # One deduction at most; a lone pawn has nothing to be isolated from
    isolated = pawns.is_isolated_pawn(sq, color, snap) and pawns.has_other_pawns(sq, color, snap)
    if isolated or pawns.is_doubled_pawn(sq, color, snap):
        t.penalty("0.5", "isolated/doubled")

    if pawns.count_defending_pawns(sq, color, snap) > 0:
        t.bonus("0.3", "defended")

    controlled = pawns.count_central_control(sq, color, snap)
    if sq in CENTER_SQUARES:
        t.bonus("0.3", "on central square")
    elif controlled > 0:
        plural = "s" if controlled > 1 else ""
        t.bonus("0.3", f"controls {controlled} central square{plural}")

    if sq.file_name in ("d", "e"):
        t.bonus("0.5", "on d/e column")
    elif sq.file_name in ("c", "f"):
        t.bonus("0.3", "on c/f column")


def _value_knight(sq: Square, color: Color, snap: PositionSnapshot, t: _Tally) -> None:
    if sq in CENTER_SQUARES:
        t.bonus("1", "central")
    if sq.file_name in ("a", "h"):
        t.penalty("1", "edge")


def _value_bishop(sq: Square, color: Color, snap: PositionSnapshot, t: _Tally) -> None:
    if structure.has_open_diagonal(sq, color, snap):
        t.bonus("1", "open diagonal")
    if structure.are_both_diagonals_blocked(sq, color, snap):
        t.penalty("1", "both diagonals blocked")
    if structure.has_bishop_pair(color, snap):
        t.bonus("0.5", "bishop pair")


def _value_rook(sq: Square, color: Color, snap: PositionSnapshot, t: _Tally) -> None:
    # Every open file is also semi-open, so the open check must come first
    if structure.is_open_column(sq, color, snap):
        t.bonus("1", "open column")
    elif structure.is_semi_open_column(sq, color, snap):
        t.bonus("0.5", "semi-open column")

    seventh = 6 if color is Color.WHITE else 1
    if sq.rank == seventh:
        t.bonus("1", "7th rank")

    if structure.is_rook_connected(sq, color, snap):
        t.bonus("0.5", "connected rooks")


def _no_rules(sq: Square, color: Color, snap: PositionSnapshot, t: _Tally) -> None:
    pass


_RULES: dict[PieceKind, Callable[[Square, Color, PositionSnapshot, _Tally], None]] = {
    PieceKind.PAWN: _value_pawn,
    PieceKind.KNIGHT: _value_knight,
    PieceKind.BISHOP: _value_bishop,
    PieceKind.ROOK: _value_rook,
    PieceKind.QUEEN: _no_rules,
    PieceKind.KING: _no_rules,
}


def value_piece(square: Square, snapshot: PositionSnapshot) -> ValuationResult:
    """Value whatever stands on square. Empty squares get the zero result."""
    piece = snapshot.piece_at(square)
    if piece is None:
        return ValuationResult.empty()

    rules = _RULES.get(piece.kind)
    base = BASE_VALUES.get(piece.kind)
    if rules is None or base is None or not isinstance(piece.color, Color):
        logger.debug("No valuation rules for %r on %s", piece, square)
        return ValuationResult.empty()

    tally = _Tally(base)
    rules(square, piece.color, snapshot, tally)
    return tally.result()
