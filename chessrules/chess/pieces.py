"""Defines the chess pieces, how they move and how they get promoted"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Self

from chessrules.chess.moves import (
    DEFAULT_PROMOTION,
    FEN_TO_PIECE,
    MOVEMENT_RULES,
    PIECE_TO_FEN,
    PROMOTION_OPTIONS,
    CandidateMovesFn,
    promotion_row,
)
from chessrules.chess.square import Square
from chessrules.core.shared_types import Color, PieceType

if TYPE_CHECKING:
    from chessrules.chess.board import Board

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Piece:
    """
    A single chess piece.
    ----

    One class for all six piece types: the type is a tag, and the movement rules are looked up by that tag (see MOVEMENT_RULES).
    Promotion therefore is "create a new piece and swap it in", instead of changing the identity of this object.

    NOTE: Pieces compare by identity. Two white pawns are never the same piece.
    """

    type: PieceType
    color: Color
    square: Optional[Square] = None
    # only consulted by pawns (two-square advance before the first move)
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def __repr__(self) -> str:
        where = self.square.to_algebraic() if self.square else "-"
        return f"Piece({self.color} {self.type} @ {where})"

    # -- MOVE GENERATION --
    def legal_moves(self, board: Board) -> set[Square]:
        """
        Squares this piece could move to, given the current board.
        ---

        Only the movement shape + blocking pieces are taken into account.
        Whether your own king ends up attacked is filtered afterwards (see CheckmateDetector).
        A piece that is not on the board (captured / promoted away) has no moves.
        """
        if self.square is None:
            return set()
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[self.type]
        return movement_rule(self.square, board)

    # -- MOVE EXECUTION --
    def move(
        self,
        board: Board,
        destination: Square,
        promote_to: Optional[PieceType] = None,
    ) -> bool:
        """
        Execute a move on the board.
        ----

        1. Destination holds one of your own pieces? --> refuse (return False, nothing changes)
        2. Destination holds an opponent's piece? --> capture it (off the board and out of the piece collection)
        3. Vacate the current square and occupy the destination.
        4. Pawn reaching the final rank --> promote (to `promote_to`, Queen if nothing or nonsense was chosen)

        NOTE: This is the only check made here. Move shape and king safety are the responsibility of the caller.
        """
        if self.square is None:
            return False

        occupant = board.occupant(destination)
        if occupant is not None:
            if occupant.color == self.color:
                return False
            board.capture(occupant)

        board.remove_piece(self.square)
        board.place_piece(self, destination)
        self.has_moved = True

        if self._reached_promotion_row():
            self.promote(board, promote_to or DEFAULT_PROMOTION)
        return True

    def _reached_promotion_row(self) -> bool:
        return (
            self.type == PieceType.PAWN
            and self.square is not None
            and self.square.y == promotion_row(self.color)
        )

    def promote(self, board: Board, piece_type: PieceType) -> Piece:
        """
        Replace this pawn by a new piece of the same color, on the same square.

        The pawn is taken out of the board's collections, so after this call it cannot be reached from the board anymore.
        Anything that is not a valid promotion option becomes a Queen.
        """
        if piece_type not in PROMOTION_OPTIONS:
            logger.debug(
                "Cannot promote into %s, falling back to %s", piece_type, DEFAULT_PROMOTION
            )
            piece_type = DEFAULT_PROMOTION

        new_piece = Piece(piece_type, self.color, has_moved=True)
        board.replace_piece(self, new_piece)
        logger.info("Pawn promoted: %r", new_piece)
        return new_piece
