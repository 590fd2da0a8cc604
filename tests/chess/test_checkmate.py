"""Unit tests for /chessrules/chess/checkmate.py"""

import logging
from typing import Callable

import pytest

from chessrules.chess.board import Board
from chessrules.chess.checkmate import CheckmateDetector
from chessrules.chess.pieces import Piece
from chessrules.chess.square import Square
from chessrules.core.exceptions import InvalidConfigurationError
from chessrules.core.shared_types import Color, PieceType

MakeBoard = Callable[[dict[str, str]], Board]

# White: Ka1, Rd8. Black: Rh1 (check), Rh2, Ke6. Blocking on d1 is the only way out.
SINGLE_ESCAPE = {"a1": "K", "d8": "R", "h1": "r", "h2": "r", "e6": "k"}
# Black king boxed in by its own pawns, white rook delivers mate on a8
BACK_RANK_MATE = {"g8": "k", "f7": "p", "g7": "p", "h7": "p", "a8": "R", "g1": "K"}


def detector_for(board: Board) -> CheckmateDetector:
    return CheckmateDetector(board, board.king(Color.WHITE), board.king(Color.BLACK))


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# -- CONSTRUCTION --
def test_detector_needs_both_kings(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K"})
    with pytest.raises(InvalidConfigurationError):
        CheckmateDetector(board, board.king(Color.WHITE), None)


def test_detector_rejects_non_king(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "q"})
    queen = board.occupant(sq("e8"))
    with pytest.raises(InvalidConfigurationError):
        CheckmateDetector(board, board.king(Color.WHITE), queen)


def test_detector_rejects_swapped_kings(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "k"})
    with pytest.raises(InvalidConfigurationError):
        CheckmateDetector(board, board.king(Color.BLACK), board.king(Color.WHITE))


# -- ATTACK DETECTION --
def test_is_attacked(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "k", "a5": "r"})
    detector = detector_for(board)
    assert detector.is_attacked(sq("h5"), Color.BLACK)
    assert detector.is_attacked(sq("a1"), Color.BLACK)
    assert not detector.is_attacked(sq("b4"), Color.BLACK)


def test_in_check_and_update(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "k", "e5": "r"})
    detector = detector_for(board)
    assert detector.in_check(Color.WHITE)
    assert not detector.in_check(Color.BLACK)

    assert not detector.white_in_check
    detector.update()
    assert detector.white_in_check
    assert not detector.black_in_check


def test_starting_position_has_no_checks() -> None:
    detector = detector_for(Board.starting_position())
    detector.update()
    assert not detector.white_in_check
    assert not detector.black_in_check


# -- LEGALITY FILTER --
def test_test_move_has_no_side_effects(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "k", "d2": "P", "c3": "n"})
    detector = detector_for(board)
    pawn = board.occupant(sq("d2"))
    knight = board.occupant(sq("c3"))
    fen_before = board.to_fen()
    white_before = board.pieces_of(Color.WHITE)
    black_before = board.pieces_of(Color.BLACK)

    # a capture, and a move that exposes nothing
    detector.test_move(pawn, sq("c3"))
    detector.test_move(pawn, sq("d4"))

    assert board.to_fen() == fen_before
    assert pawn.square == sq("d2")
    assert not pawn.has_moved
    assert knight.square == sq("c3")
    assert board.pieces_of(Color.WHITE) == white_before
    assert board.pieces_of(Color.BLACK) == black_before


def test_pinned_piece_cannot_leave_the_line(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e2": "N", "e8": "r", "a8": "k"})
    detector = detector_for(board)
    knight = board.occupant(sq("e2"))

    assert knight.legal_moves(board)
    assert detector.allowable_moves(knight) == set()
    assert not detector.test_move(knight, sq("c3"))


def test_pinned_rook_may_slide_along_the_pin(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e3": "R", "e8": "r", "a8": "k"})
    detector = detector_for(board)
    rook = board.occupant(sq("e3"))
    assert detector.allowable_moves(rook) == {sq(name) for name in ["e2", "e4", "e5", "e6", "e7", "e8"]}


def test_king_cannot_step_into_attack(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e8": "k", "d8": "r"})
    detector = detector_for(board)
    king = board.king(Color.WHITE)
    allowable = detector.allowable_moves(king)
    assert allowable == {sq("e2"), sq("f2"), sq("f1")}


def test_king_cannot_capture_a_defended_piece(make_board: MakeBoard) -> None:
    board = make_board({"e1": "K", "e2": "q", "e3": "r", "a8": "k"})
    detector = detector_for(board)
    king = board.king(Color.WHITE)
    assert sq("e2") in king.legal_moves(board)
    assert not detector.test_move(king, sq("e2"))


def test_single_check_evasion(make_board: MakeBoard) -> None:
    board = make_board(SINGLE_ESCAPE)
    detector = detector_for(board)
    assert detector.in_check(Color.WHITE)
    assert detector.get_allowable_squares(for_white_turn=True) == {sq("d1")}
    assert not detector.check_mated(Color.WHITE)


# -- CHECKMATE --
def test_back_rank_mate(make_board: MakeBoard) -> None:
    board = make_board(BACK_RANK_MATE)
    detector = detector_for(board)
    assert detector.check_mated(Color.BLACK)
    assert not detector.check_mated(Color.WHITE)
    assert detector.get_allowable_squares(for_white_turn=False) == set()


def test_check_is_not_mate_when_king_can_escape(make_board: MakeBoard) -> None:
    board = make_board({"g8": "k", "f7": "p", "g7": "p", "a8": "R", "g1": "K"})
    detector = detector_for(board)
    assert detector.in_check(Color.BLACK)
    assert not detector.check_mated(Color.BLACK)
    assert sq("h7") in detector.allowable_moves(board.king(Color.BLACK))


def test_no_check_no_mate(make_board: MakeBoard) -> None:
    """Without moves but also without check (stalemate) nobody is mated"""
    board = make_board({"a8": "k", "b6": "Q", "h1": "K"})
    detector = detector_for(board)
    assert not detector.in_check(Color.BLACK)
    assert detector.allowable_moves(board.king(Color.BLACK)) == set()
    assert not detector.check_mated(Color.BLACK)


def test_detector_follows_promoted_pieces(make_board: MakeBoard) -> None:
    """The detector looks at the live pieces on the board, so a freshly promoted piece gives check"""
    board = make_board({"e1": "K", "a1": "k", "h7": "P"})
    detector = detector_for(board)
    pawn = board.occupant(sq("h7"))

    pawn.move(board, sq("h8"), PieceType.QUEEN)
    queen = board.occupant(sq("h8"))
    assert isinstance(queen, Piece) and queen.type == PieceType.QUEEN
    assert detector.in_check(Color.BLACK)


def test_queen_and_rook_mate(make_board: MakeBoard) -> None:
    """Rook checks along the back rank, queen closes the rank in front of the king"""
    board = make_board({"e8": "k", "a8": "R", "a7": "Q", "e1": "K"})
    detector = detector_for(board)
    assert detector.check_mated(Color.BLACK)
    assert detector.get_allowable_squares(for_white_turn=False) == set()


def test_update_announces_every_king_in_check(
    make_board: MakeBoard, caplog: pytest.LogCaptureFixture
) -> None:
    board = make_board({"e1": "K", "e5": "r", "a8": "k", "a1": "R"})
    detector = detector_for(board)
    with caplog.at_level(logging.INFO):
        detector.update()
    assert detector.white_in_check and detector.black_in_check
    assert "White king is in check" in caplog.text
    assert "Black king is in check" in caplog.text
