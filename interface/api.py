"""FastAPI REST interface for the engine."""

import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import Optional

from engine.config import CONFIG
from engine.core.utils import render_board
from engine.main import Engine

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game; every request goes through the lock.
engine = Engine(depth=CONFIG.search.depth)
_board_lock = threading.Lock()


class PositionRequest(BaseModel):
    fen: str  # placement field; anything after the first space is ignored
    white_to_move: bool = True


class MoveRequest(BaseModel):
    move: str  # coordinate format e.g. "B2B4"


class SearchRequest(BaseModel):
    depth: Optional[int] = Field(None, ge=1)
    play: bool = False


def _winner() -> Optional[str]:
    if engine.winner is None:
        return None
    return "white" if engine.winner else "black"


@app.get("/board")
def get_board():
    with _board_lock:
        return {
            "fen": engine.board.board_fen(),
            "diagram": render_board(engine.board),
            "turn": "white" if engine.turn_white else "black",
            "legal_moves": engine.legal_moves(),
            "is_game_over": engine.game_over,
            "winner": _winner(),
            "history": list(engine.history),
        }


@app.post("/position")
def set_position(req: PositionRequest):
    with _board_lock:
        try:
            engine.load_fen(req.fen, req.white_to_move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": engine.board.board_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        if engine.game_over:
            raise HTTPException(status_code=400, detail="Game is already over")
        if not engine.make_move(req.move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"fen": engine.board.board_fen(), "move": req.move.upper(), "winner": _winner()}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        if engine.game_over:
            raise HTTPException(status_code=400, detail="Game is already over")
        depth = req.depth or CONFIG.search.depth
        try:
            best, score = engine.get_best_move(depth)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if req.play and best is not None:
            engine.make_move(best)
        return {
            "best_move": best,
            "score": score,
            "fen": engine.board.board_fen(),
            "winner": _winner(),
        }


@app.post("/reset")
def reset_board():
    with _board_lock:
        engine.reset()
        return {"fen": engine.board.board_fen()}
