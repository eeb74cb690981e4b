"""In-memory game sessions: free play, PGN import and move-by-move replay."""

from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass, field

import chess
import chess.pgn

from piece_values.analysis import PositionSnapshot, analyze_position

logger = logging.getLogger(__name__)


class PGNTooLarge(ValueError):
    """PGN text exceeds the configured size limit."""


@dataclass
class GameState:
    board: chess.Board = field(default_factory=chess.Board)
    sans: list[str] = field(default_factory=list)
    # Replay mode: the imported mainline and where we are in it
    start_board: chess.Board | None = None
    imported_moves: list[chess.Move] = field(default_factory=list)
    imported_sans: list[str] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    ply: int = 0

    @property
    def is_replay(self) -> bool:
        return bool(self.imported_moves)


def _game_status(board: chess.Board) -> str:
    if board.is_checkmate():
        return "checkmate"
    if board.is_stalemate():
        return "stalemate"
    if board.is_insufficient_material() or board.can_claim_draw():
        return "draw"
    return "playing"


def _parse_move(board: chess.Board, move_str: str) -> chess.Move:
    """Accept SAN or UCI. Null moves are never legal."""
    try:
        move = board.parse_san(move_str)
    except ValueError:
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError as e:
            raise ValueError(f"Invalid move format: {move_str}") from e
    if move not in board.legal_moves:
        raise ValueError(f"Illegal move: {move_str}")
    return move


class GameManager:
    def __init__(self, max_sessions: int = 1000, max_pgn_bytes: int = 100_000):
        self._max_sessions = max_sessions
        self._max_pgn_bytes = max_pgn_bytes
        self._sessions: dict[str, GameState] = {}

    def new_game(self) -> str:
        """Create a session at the starting position. Returns the session id."""
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = GameState()
        while len(self._sessions) > self._max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info("Evicted game session %s", oldest)
        logger.info("Created game session %s", session_id)
        return session_id

    def get_game(self, session_id: str) -> GameState | None:
        return self._sessions.get(session_id)

    def _require(self, session_id: str) -> GameState:
        state = self._sessions.get(session_id)
        if state is None:
            raise KeyError(f"Session not found: {session_id}")
        return state

    def make_move(self, session_id: str, move_str: str) -> dict:
        state = self._require(session_id)
        if state.is_replay:
            raise ValueError("Cannot play moves while replaying an imported game")
        move = _parse_move(state.board, move_str)
        state.sans.append(state.board.san(move))
        state.board.push(move)
        return self.state_dict(session_id)

    def undo(self, session_id: str) -> dict:
        """Take back the last move, or step back one ply when replaying."""
        state = self._require(session_id)
        if state.is_replay:
            return self.previous_move(session_id)
        if state.board.move_stack:
            state.board.pop()
            state.sans.pop()
        return self.state_dict(session_id)

    def import_pgn(self, session_id: str, pgn: str) -> dict:
        state = self._require(session_id)
        if len(pgn.encode("utf-8")) > self._max_pgn_bytes:
            logger.warning("Rejected PGN of %d bytes", len(pgn.encode("utf-8")))
            raise PGNTooLarge(f"PGN exceeds {self._max_pgn_bytes} bytes")

        game = chess.pgn.read_game(io.StringIO(pgn.strip()))
        if game is None or game.errors:
            logger.warning("Rejected invalid PGN for session %s", session_id)
            raise ValueError("Invalid PGN format")
        moves = list(game.mainline_moves())
        if not moves:
            raise ValueError("PGN contains no moves")

        start = game.board()
        sans = []
        replay = start.copy()
        for move in moves:
            sans.append(replay.san(move))
            replay.push(move)

        state.start_board = start
        state.imported_moves = moves
        state.imported_sans = sans
        state.headers = dict(game.headers)
        self._seek(state, 0)
        logger.info("Imported PGN with %d plies into session %s", len(moves), session_id)
        return self.state_dict(session_id)

    def _seek(self, state: GameState, ply: int) -> None:
        board = state.start_board.copy(stack=False)
        for move in state.imported_moves[:ply]:
            board.push(move)
        state.board = board
        state.ply = ply
        state.sans = state.imported_sans[:ply]

    def go_to(self, session_id: str, ply: int) -> dict:
        state = self._require(session_id)
        if not state.is_replay:
            raise ValueError("No imported game to navigate")
        if not 0 <= ply <= len(state.imported_moves):
            raise ValueError(f"Ply out of range: {ply}")
        self._seek(state, ply)
        return self.state_dict(session_id)

    def next_move(self, session_id: str) -> dict:
        state = self._require(session_id)
        if not state.is_replay:
            raise ValueError("No imported game to navigate")
        self._seek(state, min(state.ply + 1, len(state.imported_moves)))
        return self.state_dict(session_id)

    def previous_move(self, session_id: str) -> dict:
        state = self._require(session_id)
        if not state.is_replay:
            raise ValueError("No imported game to navigate")
        self._seek(state, max(state.ply - 1, 0))
        return self.state_dict(session_id)

    def snapshot(self, session_id: str) -> PositionSnapshot:
        return PositionSnapshot.from_board(self._require(session_id).board)

    def state_dict(self, session_id: str) -> dict:
        state = self._require(session_id)
        board = state.board
        return {
            "session_id": session_id,
            "fen": board.fen(),
            "status": _game_status(board),
            "mode": "replay" if state.is_replay else "play",
            "ply": len(state.sans),
            "total_plies": len(state.imported_moves) if state.is_replay else len(state.sans),
            "move_number": board.fullmove_number,
            "last_move_san": state.sans[-1] if state.sans else None,
            "headers": state.headers,
            "report": analyze_position(board).to_dict(),
        }
