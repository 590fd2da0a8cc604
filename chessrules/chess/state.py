"""
State of a single game: whose turn it is, whether it ended, who is in check, and the players.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from chessrules.chess.moves import Move
from chessrules.chess.pieces import Piece
from chessrules.core.shared_types import Color, Phase

logger = logging.getLogger(__name__)


@dataclass
class Player:
    name: str
    color: Color
    captured: list[Piece] = field(default_factory=list)
    # NOTE: the session clock counts this down. The engine only keeps it around.
    time_remaining_ms: int = 0


@dataclass
class GameState:
    players: dict[Color, Player]
    turn: Color = Color.WHITE
    game_over: bool = False
    result: str = ""
    winner: Optional[Color] = None
    in_check: dict[Color, bool] = field(
        default_factory=lambda: {Color.WHITE: False, Color.BLACK: False}
    )
    kings: dict[Color, Optional[Piece]] = field(
        default_factory=lambda: {Color.WHITE: None, Color.BLACK: None}
    )
    moves: list[Move] = field(default_factory=list)

    @classmethod
    def for_players(cls, white_name: str, black_name: str, time_budget_ms: int) -> Self:
        return cls(
            players={
                Color.WHITE: Player(white_name, Color.WHITE, time_remaining_ms=time_budget_ms),
                Color.BLACK: Player(black_name, Color.BLACK, time_remaining_ms=time_budget_ms),
            }
        )

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        return Phase.WHITE_TO_MOVE if self.turn == Color.WHITE else Phase.BLACK_TO_MOVE

    @property
    def is_white_turn(self) -> bool:
        return self.turn == Color.WHITE

    def toggle_turn(self) -> None:
        self.turn = self.turn.opposite

    def set_kings(self, white_king: Optional[Piece], black_king: Optional[Piece]) -> None:
        self.kings = {Color.WHITE: white_king, Color.BLACK: black_king}

    def end_game(self, result: str, winner: Optional[Color] = None) -> bool:
        """
        Mark the game as finished.

        Ending a game that already ended changes nothing (the first result stays). Returns whether this call ended the game.
        """
        if self.game_over:
            logger.debug("Game already over (%s). Ignoring %r", self.result, result)
            return False

        self.game_over = True
        self.result = result
        self.winner = winner
        logger.info("Game over: %s", result)
        return True
