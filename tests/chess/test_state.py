"""Unit tests for /chessrules/chess/state.py"""

import pytest

from chessrules.chess.state import GameState
from chessrules.core.shared_types import Color, Phase


@pytest.fixture
def state() -> GameState:
    return GameState.for_players("Alice", "Bob", 60_000)


def test_new_state(state: GameState) -> None:
    assert state.turn == Color.WHITE
    assert state.phase == Phase.WHITE_TO_MOVE
    assert not state.game_over
    assert state.winner is None
    assert state.in_check == {Color.WHITE: False, Color.BLACK: False}
    assert state.players[Color.WHITE].name == "Alice"
    assert state.players[Color.BLACK].name == "Bob"
    assert state.players[Color.BLACK].time_remaining_ms == 60_000
    assert state.players[Color.WHITE].captured == []
    assert state.moves == []


def test_toggle_turn(state: GameState) -> None:
    state.toggle_turn()
    assert state.turn == Color.BLACK
    assert not state.is_white_turn
    assert state.phase == Phase.BLACK_TO_MOVE
    state.toggle_turn()
    assert state.is_white_turn


def test_end_game(state: GameState) -> None:
    assert state.end_game("White wins by checkmate", Color.WHITE)
    assert state.game_over
    assert state.phase == Phase.GAME_OVER
    assert state.result == "White wins by checkmate"
    assert state.winner == Color.WHITE


def test_end_game_is_idempotent(state: GameState) -> None:
    """The first result sticks"""
    state.end_game("Black wins on time", Color.BLACK)
    assert not state.end_game("White wins on time", Color.WHITE)
    assert state.result == "Black wins on time"
    assert state.winner == Color.BLACK
