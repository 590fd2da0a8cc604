"""
The GameController is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game:
turn order, asking the CheckmateDetector if a move is allowed, executing it, and declaring the end of the game.

NOTE: Illegal requests are answered with False / empty sets. Nothing in here raises on a bad move.
"""

import logging
from typing import Optional

from chessrules.chess.board import Board
from chessrules.chess.checkmate import CheckmateDetector
from chessrules.chess.fen import split_fen
from chessrules.chess.moves import Move
from chessrules.chess.pieces import Piece
from chessrules.chess.square import Square
from chessrules.chess.state import GameState
from chessrules.core.config import GameSettings
from chessrules.core.models import GameModel
from chessrules.core.shared_types import Color, PieceType

logger = logging.getLogger(__name__)


class GameController:
    def __init__(self, settings: Optional[GameSettings] = None, board: Optional[Board] = None) -> None:
        self.settings = settings if settings is not None else GameSettings()
        self.state = GameState.for_players(
            self.settings.white_name,
            self.settings.black_name,
            self.settings.time_budget_ms,
        )

        if board is None:
            board = self._create_board()
        self.board = board

        self.detector: Optional[CheckmateDetector] = None
        self.initialize_checkmate_detector()

    def _create_board(self) -> Board:
        """Standard starting position, unless the settings ask for a custom one"""
        if self.settings.starting_fen is None:
            return Board.starting_position()

        position, color_to_move = split_fen(self.settings.starting_fen)
        if color_to_move is not None:
            self.state.turn = color_to_move
        return Board.from_fen(position)

    def initialize_checkmate_detector(self) -> bool:
        """
        (Re)build the detector from the kings that are on the board right now.

        Without both kings the detector stays absent: no checks are reported and no move is accepted
        until this gets called again with both kings in place.
        """
        white_king = self.board.king(Color.WHITE)
        black_king = self.board.king(Color.BLACK)
        self.state.set_kings(white_king, black_king)

        if white_king is None or black_king is None:
            logger.warning(
                "Cannot initialize CheckmateDetector. White king: %s, Black king: %s",
                "OK" if white_king else "missing",
                "OK" if black_king else "missing",
            )
            self.detector = None
            return False

        self.detector = CheckmateDetector(self.board, white_king, black_king)
        self._update_check_status()
        return True

    # -- QUERIES FOR THE VIEW --
    @property
    def current_player(self) -> str:
        return self.state.players[self.state.turn].name

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.occupant(square)

    def start_piece_move(self, piece: Piece) -> bool:
        """May this piece be picked up? Only on your own turn, and only while the game is running."""
        if self.state.game_over:
            return False
        return piece.color == self.state.turn

    def legal_moves(self, piece: Piece) -> set[Square]:
        """Movement shape only. Might still expose your own king."""
        return piece.legal_moves(self.board)

    def allowable_squares(self) -> set[Square]:
        """Destinations of the side to move that keep its king safe"""
        if self.detector is None:
            return set()
        return self.detector.get_allowable_squares(self.state.is_white_turn)

    def allowable_moves(self, piece: Piece) -> set[Square]:
        """Where this piece can actually go: its legal moves that keep its king safe"""
        if self.detector is None:
            return set()
        return self.legal_moves(piece) & self.detector.allowable_moves(piece)

    # -- MOVES --
    def request_move(
        self,
        piece: Piece,
        destination: Square,
        promote_to: Optional[PieceType] = None,
    ) -> bool:
        """
        Attempt to make a move
        -----

        1. reject if it is not this piece's turn, or the game is over
        2. reject if the piece cannot move there, or the move would leave its own king attacked
        3. execute the move (capture / promotion happen here)
        4. switch turns, refresh the check status, and look for checkmate

        NOTE: The turn switches BEFORE looking for checkmate: it is the side that is now to move that can be mated.
        """
        if not self.start_piece_move(piece):
            logger.debug("Rejected %r: not its turn or game over (%s)", piece, self.state.phase)
            return False

        if self.detector is None:
            logger.warning("Rejected %r: no CheckmateDetector (is a king missing?)", piece)
            return False

        from_square = piece.square
        if from_square is None or self.board.occupant(from_square) is not piece:
            logger.debug("Rejected %r: piece is not on the board", piece)
            return False

        if destination not in piece.legal_moves(self.board):
            logger.debug("Rejected %r -> %s: not a legal move", piece, destination.to_algebraic())
            return False

        if not self.detector.test_move(piece, destination):
            logger.debug("Rejected %r -> %s: would leave king in check", piece, destination.to_algebraic())
            return False

        captured = self.board.occupant(destination)
        promotion = promote_to if promote_to is not None else self.settings.default_promotion
        if not piece.move(self.board, destination, promotion):
            return False

        # record what actually stands on the square (an invalid choice became a Queen)
        placed = self.board.occupant(destination)
        promoted_to = placed.type if placed is not None and placed is not piece else None
        self._record_move(
            Move(from_square, destination, promoted_to),
            piece.color,
            captured,
        )

        self.state.toggle_turn()
        self._update_check_status()
        self._update_game_status()
        return True

    def time_out(self, color: Color) -> None:
        """The session clock says: this color ran out of time. The opponent wins, whoever's turn it is."""
        winner = color.opposite
        logger.info("%s ran out of time", color.capitalize())
        self.state.end_game(f"{winner.capitalize()} wins on time", winner)

    # -- PRIVATE HELPERS ---
    def _record_move(self, move: Move, color: Color, captured: Optional[Piece]) -> None:
        self.state.moves.append(move)
        if captured is not None:
            self.state.players[color].captured.append(captured)
        logger.info("%s played %s", color.capitalize(), move.to_uci())

    def _update_check_status(self) -> None:
        assert self.detector is not None
        self.detector.update()
        self.state.in_check = {
            Color.WHITE: self.detector.white_in_check,
            Color.BLACK: self.detector.black_in_check,
        }

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly."""
        assert self.detector is not None
        if self.detector.check_mated(Color.BLACK):
            self.state.end_game("White wins by checkmate", Color.WHITE)
        elif self.detector.check_mated(Color.WHITE):
            self.state.end_game("Black wins by checkmate", Color.BLACK)

    # -- CONVERSION FOR THE SERVICE LAYER --
    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            board_fen=self.board.to_fen(),
            occupancy=self.board.occupancy_grid(),
            turn=str(self.state.turn),
            phase=str(self.state.phase),
            game_over=self.state.game_over,
            result=self.state.result,
            winner=str(self.state.winner) if self.state.winner else None,
            in_check={str(color): flag for color, flag in self.state.in_check.items()},
            allowable_squares=sorted(square.to_algebraic() for square in self.allowable_squares()),
            moves_uci=[move.to_uci() for move in self.state.moves],
            captured={
                str(color): [piece.to_fen() for piece in player.captured]
                for color, player in self.state.players.items()
            },
            players={str(color): player.name for color, player in self.state.players.items()},
            time_remaining_ms={
                str(color): player.time_remaining_ms for color, player in self.state.players.items()
            },
        )
