"""Human-readable summary of the valuation rules, one entry per piece kind."""

from dataclasses import asdict, dataclass

from piece_values.analysis.snapshot import PieceKind
from piece_values.analysis.valuation import BASE_VALUES

__all__ = ["LegendEntry", "LEGEND", "legend_as_dicts"]


@dataclass(frozen=True)
class LegendEntry:
    kind: str
    name: str
    symbol: str
    base: int
    rules: tuple[str, ...]


def _entry(kind: PieceKind, symbol: str, rules: list[str]) -> LegendEntry:
    return LegendEntry(
        kind=kind.value,
        name=kind.value.capitalize(),
        symbol=symbol,
        base=BASE_VALUES[kind],
        rules=tuple(rules),
    )


LEGEND: list[LegendEntry] = [
    _entry(PieceKind.PAWN, "♙", [
        "+0.5 if in opponent half",
        "+0.5 if passed",
        "+1.0 if passed & close to promotion",
        "-0.5 if isolated or doubled (applied once)",
        "+0.3 if defended by pawn",
        "+0.3 if on/controls central squares",
        "+0.5 if on d/e columns",
        "+0.3 if on c/f columns",
    ]),
    _entry(PieceKind.KNIGHT, "♘", [
        "+1 if on central squares",
        "-1 if on edge columns (A/H)",
    ]),
    _entry(PieceKind.BISHOP, "♗", [
        "+1 if has open diagonal (4+ squares)",
        "-1 if both diagonals blocked",
        "+0.5 if bishop pair",
    ]),
    _entry(PieceKind.ROOK, "♖", [
        "+1 if on open column (no pawns at all)",
        "+0.5 if on semi-open column (no own pawns)",
        "+1 if on 7th rank",
        "+0.5 if connected to other rook",
    ]),
    _entry(PieceKind.QUEEN, "♕", []),
    _entry(PieceKind.KING, "♔", []),
]


def legend_as_dicts() -> list[dict]:
    out = []
    for entry in LEGEND:
        d = asdict(entry)
        d["rules"] = list(entry.rules)
        out.append(d)
    return out
