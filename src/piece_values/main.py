import logging
import os
from contextlib import asynccontextmanager
from typing import Literal

import chess
from fastapi import FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from piece_values.analysis import InvalidSquare, PositionSnapshot, analyze, analyze_position, legend_as_dicts
from piece_values.config import Settings
from piece_values.game import GameManager, PGNTooLarge

logger = logging.getLogger(__name__)

settings = Settings()

games = GameManager(
    max_sessions=settings.max_sessions, max_pgn_bytes=settings.max_pgn_bytes,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger("piece_values").setLevel(settings.log_level.upper())
    logger.info("Piece values service starting")
    yield


app = FastAPI(title="Piece Values", lifespan=lifespan)


# --- Request/Response models ---

class AnalysisRequest(BaseModel):
    fen: str


class SquareRequest(BaseModel):
    fen: str
    square: str


class SessionRequest(BaseModel):
    session_id: str


class MoveRequest(BaseModel):
    session_id: str
    move: str


class ImportRequest(BaseModel):
    session_id: str
    pgn: str


class NavigateRequest(BaseModel):
    session_id: str
    action: Literal["next", "previous", "goto"]
    ply: int | None = None


def _board_from_fen(fen: str) -> chess.Board:
    try:
        return chess.Board(fen)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {fen}") from e


def _session_call(fn, *args):
    try:
        return fn(*args)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")
    except PGNTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# --- Endpoints ---

@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.get("/api/legend")
async def legend():
    return legend_as_dicts()


@app.post("/api/analysis/position")
async def analysis_position(req: AnalysisRequest):
    board = _board_from_fen(req.fen)
    return analyze_position(board).to_dict()


@app.post("/api/analysis/square")
async def analysis_square(req: SquareRequest):
    board = _board_from_fen(req.fen)
    try:
        result = analyze(PositionSnapshot.from_board(board), req.square)
    except InvalidSquare as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"square": req.square, **result.to_dict()}


@app.post("/api/game/new")
async def new_game():
    session_id = games.new_game()
    return games.state_dict(session_id)


@app.get("/api/game/{session_id}")
async def game_state(session_id: str):
    return _session_call(games.state_dict, session_id)


@app.post("/api/game/move")
async def game_move(req: MoveRequest):
    return _session_call(games.make_move, req.session_id, req.move)


@app.post("/api/game/undo")
async def game_undo(req: SessionRequest):
    return _session_call(games.undo, req.session_id)


@app.post("/api/game/import")
async def game_import(req: ImportRequest):
    return _session_call(games.import_pgn, req.session_id, req.pgn)


@app.post("/api/game/navigate")
async def game_navigate(req: NavigateRequest):
    if req.action == "next":
        return _session_call(games.next_move, req.session_id)
    if req.action == "previous":
        return _session_call(games.previous_move, req.session_id)
    if req.ply is None:
        raise HTTPException(status_code=400, detail="goto requires ply")
    return _session_call(games.go_to, req.session_id, req.ply)


# Mount static files last; catches all non-API routes
if settings.static_dir and os.path.isdir(settings.static_dir):
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
