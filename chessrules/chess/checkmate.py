"""
Check / checkmate detection, and filtering moves down to the ones that keep your own king safe.
"""

import logging
from typing import Optional

from chessrules.chess.board import Board
from chessrules.chess.pieces import Piece
from chessrules.chess.square import Square
from chessrules.core.exceptions import InvalidConfigurationError
from chessrules.core.shared_types import Color, PieceType

logger = logging.getLogger(__name__)


class CheckmateDetector:
    """
    Answers "is this king attacked?" and "would this move leave my own king attacked?"
    ----

    The detector works on the live board, but never changes it: every candidate move is played on a copy.
    Both kings are required at construction time.
    """

    def __init__(self, board: Board, white_king: Optional[Piece], black_king: Optional[Piece]) -> None:
        if white_king is None or black_king is None:
            raise InvalidConfigurationError(
                "CheckmateDetector needs both kings. "
                f"white king: {'OK' if white_king else 'missing'}, black king: {'OK' if black_king else 'missing'}"
            )
        for color, king in [(Color.WHITE, white_king), (Color.BLACK, black_king)]:
            if king.type != PieceType.KING or king.color != color:
                raise InvalidConfigurationError(f"Expected the {color} king, got {king!r}")

        self.board = board
        self.kings: dict[Color, Piece] = {Color.WHITE: white_king, Color.BLACK: black_king}
        self.white_in_check = False
        self.black_in_check = False

    # -- ATTACK DETECTION --
    def is_attacked(self, square: Square, by_color: Color, board: Optional[Board] = None) -> bool:
        """
        Is the square within reach of any (live) piece of the given color?

        NOTE: Computed fresh every call. The position changes every move, so nothing is cached.
        """
        board = board if board is not None else self.board
        return any(square in piece.legal_moves(board) for piece in board.pieces_of(by_color))

    def in_check(self, color: Color) -> bool:
        king_square = self.kings[color].square
        if king_square is None:
            return False
        return self.is_attacked(king_square, color.opposite)

    # -- LEGALITY FILTER --
    def test_move(self, piece: Piece, destination: Square) -> bool:
        """
        Return True if, after playing the move, your own king is NOT attacked.
        ---

        plan:
        1. Copy the board
        2. make the candidate move on the copy
        3. determine if king is attacked on the new board

        NOTE: The live board is never touched, so a rejected move cannot leave anything behind.
        """
        if piece.square is None or self.board.occupant(piece.square) is not piece:
            return False

        king = self.kings[piece.color]
        if king.square is None:
            return False

        scratch = self.board.copy()
        scratch_piece = scratch.occupant(piece.square)
        scratch_king = scratch.occupant(king.square)
        assert scratch_piece is not None and scratch_king is not None

        if not scratch_piece.move(scratch, destination):
            return False

        assert scratch_king.square is not None
        return not self.is_attacked(scratch_king.square, piece.color.opposite, scratch)

    def allowable_moves(self, piece: Piece) -> set[Square]:
        """The moves of a single piece that survive the test above."""
        return {
            destination
            for destination in piece.legal_moves(self.board)
            if self.test_move(piece, destination)
        }

    def get_allowable_squares(self, for_white_turn: bool) -> set[Square]:
        """
        Every destination square (of any piece of the side to move) that does not leave that side's king attacked.

        NOTE: this is a union over all pieces. To know where one specific piece can go, intersect with its own legal moves
        (or use `allowable_moves()`).
        """
        color = Color.WHITE if for_white_turn else Color.BLACK
        allowable: set[Square] = set()
        for piece in self.board.pieces_of(color):
            allowable |= self.allowable_moves(piece)
        return allowable

    def _has_allowable_move(self, color: Color) -> bool:
        return any(self.allowable_moves(piece) for piece in self.board.pieces_of(color))

    # --- CHECKS FOR ENDING THE GAME ---
    def check_mated(self, color: Color) -> bool:
        """In check, and not a single move gets you out of it."""
        return self.in_check(color) and not self._has_allowable_move(color)

    def update(self) -> None:
        """Refresh the cached check flags. Call once after every committed move."""
        self.white_in_check = self.in_check(Color.WHITE)
        self.black_in_check = self.in_check(Color.BLACK)
        for color, flagged in [(Color.WHITE, self.white_in_check), (Color.BLACK, self.black_in_check)]:
            if flagged:
                logger.info("%s king is in check", color.capitalize())
