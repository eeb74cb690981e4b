"""CLI utility for piece valuation of a single position.

Usage:
    python -m piece_values.cli [--fen FEN | --pgn FILE [--ply N]] [--square SQ]

Prints JSON: the full position report, or one square's valuation.
"""

from __future__ import annotations

import argparse
import io
import json
import sys

import chess
import chess.pgn

from piece_values.analysis import InvalidSquare, PositionSnapshot, analyze, analyze_position


def _board_from_pgn(path: str, ply: int | None) -> chess.Board:
    with open(path) as f:
        game = chess.pgn.read_game(io.StringIO(f.read()))
    if game is None or game.errors:
        raise ValueError(f"Invalid PGN in {path}")
    board = game.board()
    moves = list(game.mainline_moves())
    if ply is None:
        ply = len(moves)
    if not 0 <= ply <= len(moves):
        raise ValueError(f"Ply out of range: {ply} (game has {len(moves)})")
    for move in moves[:ply]:
        board.push(move)
    return board


def run(args: argparse.Namespace) -> dict:
    if args.pgn:
        board = _board_from_pgn(args.pgn, args.ply)
    else:
        board = chess.Board(args.fen)

    if args.square:
        result = analyze(PositionSnapshot.from_board(board), args.square)
        return {"square": args.square, **result.to_dict()}
    return analyze_position(board).to_dict()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Strategic piece values for a chess position",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--fen", default=chess.STARTING_FEN,
        help="Position FEN (quote the full string; default: starting position)",
    )
    source.add_argument(
        "--pgn", metavar="FILE",
        help="Read the game from a PGN file",
    )
    parser.add_argument(
        "--ply", type=int, default=None,
        help="With --pgn: number of half-moves to replay (default: all)",
    )
    parser.add_argument(
        "--square",
        help="Only value the piece on this square (e.g. e4)",
    )
    args = parser.parse_args(argv)
    if args.ply is not None and not args.pgn:
        parser.error("--ply requires --pgn")

    try:
        result = run(args)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    json.dump(result, sys.stdout, indent=2)
    print()


if __name__ == "__main__":
    main()
