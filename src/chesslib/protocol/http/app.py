from __future__ import annotations

import logging
import os
import random
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    chess_error_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ... import __version__
from ...engine.board import Board
from ...engine.errors import ChessError
from ...engine.game import Game
from ...engine.move import parse_move
from ...engine.perft import perft as perft_nodes


logger = logging.getLogger(__name__)

MAX_PERFT_DEPTH = 4


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="FEN string; startpos when omitted")
    seed: Optional[int] = Field(default=None, description="Seed for move sampling")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Four-character move string, e.g., e2e4")


class SampleRequest(BaseModel):
    count: int = Field(default=1, ge=-1, description="-1 returns every move")
    seed: Optional[int] = Field(default=None)


class SampleResponse(BaseModel):
    game_id: str
    moves: List[str]


class PerftRequest(BaseModel):
    fen: Optional[str] = None
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class GameState(BaseModel):
    game_id: str
    fen: str
    side_to_move: str
    board: List[str]
    moves: List[str]
    last_move: Optional[str]
    move_history: List[str]


def create_app(log_level: Union[int, str, None] = None) -> FastAPI:
    app = FastAPI(title="chesslib API", version=__version__)

    # Basic logging setup
    if log_level is None:
        log_level = os.environ.get("CHESSLIB_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ChessError, chess_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    # In-memory session store for games
    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        req = req or CreateGameRequest()
        try:
            game = Game.from_fen(req.fen, req.seed) if req.fen else Game.new(req.seed)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, bool]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"deleted": True}

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        old = _require_game(store, game_id)
        try:
            game = Game(board=Board.from_fen(req.fen), rng=old.rng)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        store.replace(game_id, game)
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            move = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            game.apply_move(move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/sample", response_model=SampleResponse)
    async def sample(game_id: str, req: SampleRequest) -> SampleResponse:
        game = _require_game(store, game_id)
        rng = random.Random(req.seed) if req.seed is not None else game.rng
        moves = game.board.sample_moves(req.count, rng)
        return SampleResponse(game_id=game_id, moves=moves)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        try:
            board = Board.from_fen(req.fen) if req.fen else Board.startpos()
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        return {"depth": req.depth, "nodes": perft_nodes(board, req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    history = game.move_history_text()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        side_to_move=game.board.side_to_move,
        board=game.board.glyph_rows(),
        moves=game.board.generate_move_strings(),
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
