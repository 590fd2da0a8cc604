"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from chessrules.chess.board import Board
from chessrules.chess.game import GameController
from chessrules.chess.pieces import Piece
from chessrules.chess.square import Square
from chessrules.core.config import GameSettings


@pytest.fixture
def make_board() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with {square name: FEN character}, e.g. {"e1": "K", "e8": "k"}"""

    def _create_board(placement: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, fen_char in placement.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def controller_from_fen() -> Callable[[str], GameController]:
    """Call the inner function with a FEN string (position + optionally the color to move)"""

    def _create_controller(fen: str) -> GameController:
        return GameController(GameSettings(starting_fen=fen))

    return _create_controller


@pytest.fixture
def new_game() -> GameController:
    """Standard starting position, White to move"""
    return GameController()


@pytest.fixture
def play() -> Callable[[GameController, list[str]], list[bool]]:
    """Call the inner function to feed a sequence of UCI moves to a controller. Returns whether each got accepted"""

    def _play(game: GameController, uci_moves: list[str]) -> list[bool]:
        accepted: list[bool] = []
        for uci in uci_moves:
            piece = game.piece_at(Square.from_algebraic(uci[:2]))
            assert piece is not None, f"no piece on {uci[:2]}"
            accepted.append(game.request_move(piece, Square.from_algebraic(uci[2:4])))
        return accepted

    return _play
