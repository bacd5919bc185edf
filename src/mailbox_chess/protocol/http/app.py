from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
    rule_error_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.board import BoardState
from ...engine.errors import ChessRuleError
from ...engine.game import Game
from ...engine.move import parse_uci
from ...engine.notation import STARTPOS_FEN, algebraic_to_index, index_to_algebraic
from ...engine.perft import perft as perft_nodes
from ...engine.pieces import Color, PieceType


logger = logging.getLogger(__name__)

ColorName = Literal["white", "black"]
PieceName = Literal["pawn", "knight", "bishop", "rook", "queen", "king"]


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="Starting FEN (default: standard start)")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Long algebraic move, e.g. e2e4")


class PerftRequest(BaseModel):
    fen: str = Field(default=STARTPOS_FEN, description="FEN string")
    depth: int = Field(default=1, ge=0, le=5)


class GameState(BaseModel):
    game_id: str
    fen: str
    turn: ColorName
    legal_moves: List[str]
    last_move: Optional[str]
    move_history: List[str]


class PieceLocation(BaseModel):
    rank: int
    file: int
    square: str


class MoveOptionsResponse(BaseModel):
    square: str
    index: int
    quiet: List[int]
    captures: List[int]
    quiet_squares: List[str]
    capture_squares: List[str]


def create_app(log_level: str = "INFO") -> FastAPI:
    app = FastAPI(title="Mailbox Chess API", version="0.1.0")

    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.INFO))

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ChessRuleError, rule_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        game = Game.from_fen(req.fen) if req is not None and req.fen is not None else Game.new()
        game_id = store.create(game)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        with store.locked(game_id) as game:
            return _state(game_id, _require(game))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require(store.get(game_id))
        game = Game.from_fen(req.fen)
        try:
            store.replace(game_id, game)
        except KeyError:
            raise HTTPException(status_code=404, detail="game not found")
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        with store.locked(game_id) as game:
            game = _require(game)
            game.apply_move(parse_uci(req.move))
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        with store.locked(game_id) as game:
            game = _require(game)
            game.undo_move()
            return _state(game_id, game)

    @app.get("/api/games/{game_id}/pieces", response_model=List[PieceLocation])
    async def pieces(
        game_id: str,
        color: ColorName = Query(...),
        piece_type: PieceName = Query(..., alias="type"),
    ) -> List[PieceLocation]:
        with store.locked(game_id) as game:
            locations = _require(game).pieces_of(Color[color.upper()], PieceType[piece_type.upper()])
        return [
            PieceLocation(
                rank=rank,
                file=file,
                square=index_to_algebraic(BoardState.index_from_rank_file(rank, file)),
            )
            for rank, file in locations
        ]

    @app.get("/api/games/{game_id}/moves/{square}", response_model=MoveOptionsResponse)
    async def moves(game_id: str, square: str) -> MoveOptionsResponse:
        index = algebraic_to_index(square)
        with store.locked(game_id) as game:
            options = _require(game).moves_from(index)
        return MoveOptionsResponse(
            square=square,
            index=index,
            quiet=options.quiet,
            captures=options.captures,
            quiet_squares=[index_to_algebraic(i) for i in options.quiet],
            capture_squares=[index_to_algebraic(i) for i in options.captures],
        )

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        board = BoardState.from_fen(req.fen)
        return {"nodes": perft_nodes(board, req.depth), "depth": req.depth}

    return app


def _require(game: Optional[Game]) -> Game:
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _state(game_id: str, game: Game) -> GameState:
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        turn="white" if game.turn == Color.WHITE else "black",
        legal_moves=[m.to_uci() for m in game.legal_moves()],
        last_move=game.last_move(),
        move_history=game.move_history_uci(),
    )
