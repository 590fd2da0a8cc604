"""The Game board: owns the squares and keeps track of which piece stands where"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from chessrules.chess.fen import STARTING_POSITION, iter_position
from chessrules.chess.moves import pawn_home_row
from chessrules.chess.pieces import Piece
from chessrules.chess.square import BOARD_DIMENSIONS, Square, all_squares
from chessrules.core.shared_types import Color, PieceType


@dataclass
class Board:
    """
    8x8 grid of squares + the live pieces of both players.
    ----

    Invariants:
    * an occupied square's occupant reports that square as its position (`piece.square`)
    * every piece on the grid appears in exactly one of the color collections (its own color)

    The board never touches whose turn it is.
    """

    grid: dict[Square, Optional[Piece]] = field(
        default_factory=lambda: {square: None for square in all_squares()}
    )
    pieces: dict[Color, list[Piece]] = field(
        default_factory=lambda: {Color.WHITE: [], Color.BLACK: []}
    )

    # -- CREATION LOGIC --
    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, position: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (top row, y = 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        NOTE: A pawn that is not on its starting row must have moved already, so it loses the right to advance two squares.
        """
        board = cls()
        for x, y, character in iter_position(position):
            piece = Piece.from_fen(character)
            if piece.type == PieceType.PAWN and y != pawn_home_row(piece.color):
                piece.has_moved = True
            board.place_piece(piece, Square(x, y))
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(y) for y in range(BOARD_DIMENSIONS[1]))

    def _row_to_fen(self, y: int) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for x in range(BOARD_DIMENSIONS[0]):
            piece = self.occupant(Square(x, y))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def occupancy_grid(self) -> list[list[str]]:
        """What a view needs to draw the board: FEN letter of the occupant per square, "" if empty. grid[y][x]"""
        return [
            [self._square_to_fen(Square(x, y)) for x in range(BOARD_DIMENSIONS[0])]
            for y in range(BOARD_DIMENSIONS[1])
        ]

    def _square_to_fen(self, square: Square) -> str:
        piece = self.occupant(square)
        return piece.to_fen() if piece is not None else ""

    # -- OCCUPANCY QUERIES --
    def occupant(self, square: Square) -> Optional[Piece]:
        return self.grid.get(square)

    def is_occupied(self, square: Square) -> bool:
        return self.occupant(square) is not None

    def pieces_of(self, color: Color) -> list[Piece]:
        """Snapshot of the live pieces of one player (safe to iterate over while the board changes)"""
        return list(self.pieces[color])

    def king(self, color: Color) -> Optional[Piece]:
        return next(
            (piece for piece in self.pieces[color] if piece.type == PieceType.KING),
            None,
        )

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        return [
            piece.square
            for piece in self.pieces[color]
            if piece.type == piece_type and piece.square is not None
        ]

    # -- PLACEMENT --
    def place_piece(self, piece: Piece, square: Square) -> bool:
        """
        Put a piece on an empty square, and register it with its color.

        Returns False (and changes nothing) if the square is already occupied: remove the occupant first.
        """
        if self.is_occupied(square):
            return False

        self.grid[square] = piece
        piece.square = square
        if piece not in self.pieces[piece.color]:
            self.pieces[piece.color].append(piece)
        return True

    def remove_piece(self, square: Square) -> Optional[Piece]:
        """
        Clear the square. Returns the piece that stood there (if any).

        NOTE: The piece collections are NOT touched. Use `capture()` to take a piece off the board for good.
        """
        piece = self.grid.get(square)
        self.grid[square] = None
        return piece

    def capture(self, piece: Piece) -> None:
        """Take a piece out of the game: off its square and out of its color's collection"""
        if piece.square is not None and self.occupant(piece.square) is piece:
            self.remove_piece(piece.square)
        if piece in self.pieces[piece.color]:
            self.pieces[piece.color].remove(piece)
        piece.square = None

    def replace_piece(self, old: Piece, new: Piece) -> None:
        """Swap a piece for a new one on the same square (promotion)"""
        square = old.square
        assert square is not None
        self.capture(old)
        self.place_piece(new, square)

    def copy(self) -> Self:
        """
        Deep copy of grid + pieces.

        The copy is completely detached: moving pieces around on it never changes this board.
        The same piece on the copy can be found by looking at the same square.
        """
        return deepcopy(self)
