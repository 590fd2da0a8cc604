"""
Game configuration.

Defaults live in module constants, a single game is configured through `GameSettings` (validated by pydantic).
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from chessrules.chess.fen import split_fen
from chessrules.chess.moves import PROMOTION_OPTIONS
from chessrules.core.exceptions import InvalidFENError
from chessrules.core.shared_types import PieceType

DEFAULT_WHITE_NAME = "White"
DEFAULT_BLACK_NAME = "Black"
# hours, minutes, seconds
DEFAULT_TIME_CONTROL = (0, 10, 0)


class GameSettings(BaseModel):
    """Everything needed to set up a new game"""

    white_name: str = DEFAULT_WHITE_NAME
    black_name: str = DEFAULT_BLACK_NAME
    hours: int = Field(default=DEFAULT_TIME_CONTROL[0], ge=0)
    minutes: int = Field(default=DEFAULT_TIME_CONTROL[1], ge=0, lt=60)
    seconds: int = Field(default=DEFAULT_TIME_CONTROL[2], ge=0, lt=60)
    default_promotion: PieceType = PieceType.QUEEN
    # board position (+ optionally the color to move). None: standard starting position
    starting_fen: Optional[str] = None

    @field_validator("default_promotion")
    @classmethod
    def validate_default_promotion(cls, value: PieceType) -> PieceType:
        if value not in PROMOTION_OPTIONS:
            raise ValueError(
                f"A pawn cannot promote into a {value}. Pick one from {','.join(PROMOTION_OPTIONS)}"
            )
        return value

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            split_fen(value)
        except InvalidFENError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @property
    def time_budget_ms(self) -> int:
        """Time per player in milliseconds. Owned by the session clock, the engine just stores it."""
        return ((self.hours * 60 + self.minutes) * 60 + self.seconds) * 1000
