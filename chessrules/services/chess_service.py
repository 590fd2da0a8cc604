"""Orchestration of communication from the collaborators (board view, session clock) to the rules engine (and the reverse direction)."""

import logging
from typing import Optional

from chessrules.api.models import (
    CreateGameRequest,
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    TimeoutRequest,
)
from chessrules.chess.game import GameController
from chessrules.chess.pieces import Piece
from chessrules.chess.square import Square
from chessrules.core.config import GameSettings
from chessrules.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from chessrules.core.models import GameModel

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a single chess game."""

    def __init__(self, settings: Optional[GameSettings] = None) -> None:
        self.settings = settings if settings is not None else GameSettings()
        self.game: Optional[GameController] = None

    # -- Routes logic ---
    def new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a fresh game. Anything left out of the request falls back on the settings of the service."""

        # Only overwrite what the request actually contains (and validate the result again)
        overrides = request.model_dump(exclude_none=True)
        settings = GameSettings(**{**self.settings.model_dump(), **overrides})

        self.game = GameController(settings)
        logger.info(
            "New game: %s (white) vs %s (black)", settings.white_name, settings.black_name
        )
        return self._create_game_response(self.game.to_model())

    def get_game_state(self) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by the board view, to redraw after every move for instance.
        """
        game = self._fetch_game()
        return self._create_game_response(game.to_model())

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Squares the piece on the requested square may move to (keeping its own king safe)"""
        game = self._fetch_game()
        piece = self._fetch_piece(game, request.square)

        destinations = game.allowable_moves(piece) if game.start_piece_move(piece) else set()
        return LegalMovesResponse(
            square=request.square,
            color=piece.color,
            legal_moves=sorted(square.to_algebraic() for square in destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = self._fetch_game()
        if game.state.game_over:
            raise GameStateError(f"Game is over: {game.state.result}")

        piece = self._fetch_piece(game, request.from_square)
        if piece.color != game.state.turn:
            raise NotYourTurnError(f"It is {game.state.turn}'s turn, cannot move {piece!r}.")

        destination = Square.from_algebraic(request.to_square)
        if not game.request_move(piece, destination, request.promote_to):
            raise IllegalMoveError(
                f"Cannot move {piece!r} from {request.from_square} to {request.to_square}."
            )
        return self._create_game_response(game.to_model())

    def time_out(self, request: TimeoutRequest) -> GameResponse:
        """The session clock reports that a player ran out of time."""
        game = self._fetch_game()
        game.time_out(request.color)
        return self._create_game_response(game.to_model())

    # -- Internal helpers --
    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse"""
        return GameResponse(
            players=model.players,
            turn=model.turn,
            phase=model.phase,
            game_over=model.game_over,
            result=model.result,
            winner=model.winner,
            in_check=model.in_check,
            fen_state=model.board_fen,
            board=model.occupancy,
            allowable_squares=model.allowable_squares,
            move_history=model.moves_uci,
            captured=model.captured,
            time_remaining_ms=model.time_remaining_ms,
        )

    def _fetch_game(self) -> GameController:
        """Raise an error if no game was started yet."""
        if self.game is None:
            raise GameStateError("No game in progress. Start a new game first.")
        return self.game

    def _fetch_piece(self, game: GameController, algebraic: str) -> Piece:
        piece = game.piece_at(Square.from_algebraic(algebraic))
        if piece is None:
            raise IllegalMoveError(f"There is no piece on {algebraic}.")
        return piece
