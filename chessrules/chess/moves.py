"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the set of destination squares for each piece type.
Every rule only looks at the current board (one ply, no lookahead).


Whether a move leaves your own king attacked is checked later by the CheckmateDetector
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Self

from chessrules.chess.square import BOARD_DIMENSIONS, Square
from chessrules.core.shared_types import Color, PieceType

if TYPE_CHECKING:
    from chessrules.chess.pieces import Piece


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def occupant(self, square: Square) -> Optional[Piece]: ...
    def is_occupied(self, square: Square) -> bool: ...


Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
KNIGHT_JUMPS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_STEPS: list[Vector] = STRAIGHTS + DIAGONALS

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Move:
    """Record of a committed move (the move history of a game)"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        promote_to = FEN_TO_PIECE[uci[4]] if len(uci) == 5 else None
        return cls(from_sq, to_sq, promote_to)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_FEN[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


# --- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards y = 0), Black moves DOWN (towards y = 7)"""
    return -1 if color == Color.WHITE else 1


def pawn_home_row(color: Color) -> int:
    return BOARD_DIMENSIONS[1] - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The farthest row in the pawn's direction of travel"""
    return 0 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 1


# --- MOVEMENT RULES ---
def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> set[Square]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.

    Every direction is its own ray: the first occupied square terminates that ray only.
    It is a destination if it holds an opponent's piece (capture), and it is not if it holds your own piece.
    """
    mover = board.occupant(square)
    assert mover is not None

    destinations: set[Square] = set()
    for dx, dy in directions:
        target_square = square.offset(dx, dy)
        while target_square.is_within_bounds():
            occupant = board.occupant(target_square)
            if occupant is not None:
                if occupant.color != mover.color:
                    destinations.add(target_square)
                break

            destinations.add(target_square)
            target_square = target_square.offset(dx, dy)
    return destinations


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> set[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    mover = board.occupant(square)
    assert mover is not None

    destinations: set[Square] = set()
    for dx, dy in deltas:
        target_square = square.offset(dx, dy)
        if not target_square.is_within_bounds():
            continue

        occupant = board.occupant(target_square)
        if occupant is None or occupant.color != mover.color:
            destinations.add(target_square)

    return destinations


def candidate_pawn_moves(square: Square, board: Board) -> set[Square]:
    """
    A pawn:
    - moves by a single square forward, if that square is empty.
    - It can move by two before it moved for the first time (both squares must be empty)
    - takes diagonally (only if an opponent's piece stands there)

    NOTE: No en passant
    """
    pawn = board.occupant(square)
    assert pawn is not None
    forward = pawn_direction(pawn.color)

    destinations: set[Square] = set()
    one_step = square.offset(0, forward)
    if one_step.is_within_bounds() and not board.is_occupied(one_step):
        destinations.add(one_step)

        two_steps = square.offset(0, 2 * forward)
        if (
            not pawn.has_moved
            and two_steps.is_within_bounds()
            and not board.is_occupied(two_steps)
        ):
            destinations.add(two_steps)

    # pawns take diagonally:
    for dx in (-1, 1):
        target_square = square.offset(dx, forward)
        if not target_square.is_within_bounds():
            continue
        occupant = board.occupant(target_square)
        if occupant is not None and occupant.color != pawn.color:
            destinations.add(target_square)
    return destinations


def candidate_knight_moves(square: Square, board: Board) -> set[Square]:
    """Knights always move such that |delta_x| + |delta_y| = 3 (and neither is zero)"""
    return single_step_move(square, board, KNIGHT_JUMPS)


def candidate_bishop_moves(square: Square, board: Board) -> set[Square]:
    """Bishops move diagonally: |delta_x| = |delta_y|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> set[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> set[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(square, board) | candidate_bishop_moves(square, board)


def candidate_king_moves(square: Square, board: Board) -> set[Square]:
    """
    The king can move by a single square at the time. No castling.
    """
    return single_step_move(square, board, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], set[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- PAWN PROMOTION --
PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
]
DEFAULT_PROMOTION = PieceType.QUEEN
