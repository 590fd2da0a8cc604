"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from chessrules.chess.fen import split_fen
from chessrules.chess.moves import PROMOTION_OPTIONS
from chessrules.chess.square import BOARD_DIMENSIONS
from chessrules.core.exceptions import InvalidFENError, InvalidRequestError
from chessrules.core.shared_types import Color, PieceType

PieceColor = str
PlayerName = str
AlgebraicSquare = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    file, rank = value[0], value[1]
    if not (file.isalpha() and rank.isnumeric()):
        return False
    return (
        0 <= ord(file) - ord("a") < BOARD_DIMENSIONS[0]
        and 1 <= int(rank) <= BOARD_DIMENSIONS[1]
    )


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Everything is optional: leave it out to get the defaults of the service"""

    white_name: Optional[PlayerName] = None
    black_name: Optional[PlayerName] = None
    hours: Optional[int] = None
    minutes: Optional[int] = None
    seconds: Optional[int] = None
    starting_fen: Optional[str] = None

    @field_validator(*["hours", "minutes", "seconds"])
    @classmethod
    def validate_time_control(cls, value: Optional[int], info: ValidationInfo) -> Optional[int]:
        if value is None:
            return value

        upper_limit = None if info.field_name == "hours" else 60
        if value < 0 or (upper_limit is not None and value >= upper_limit):
            raise InvalidRequestError(f"Cannot use {value!r} {info.field_name} for the time control.")
        return value

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        try:
            split_fen(value)
        except InvalidFENError as exc:
            raise InvalidRequestError(f"Cannot use {value!r} as a starting position: {exc}") from exc
        return value


class LegalMovesRequest(BaseModel):
    square: AlgebraicSquare

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    from_square: AlgebraicSquare
    to_square: AlgebraicSquare
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTION_OPTIONS:
            raise InvalidRequestError(f"A pawn cannot promote into a {value}.")
        return value


class TimeoutRequest(BaseModel):
    """Sent by the session clock when a player's time budget is used up"""

    color: Color


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    players: dict[PieceColor, PlayerName]
    turn: PieceColor
    phase: str
    game_over: bool
    result: str
    winner: Optional[PieceColor]
    in_check: dict[PieceColor, bool]
    fen_state: str
    board: list[list[str]]
    allowable_squares: list[AlgebraicSquare]
    move_history: list[str]
    captured: dict[PieceColor, list[str]]
    time_remaining_ms: dict[PieceColor, int]


class LegalMovesResponse(BaseModel):
    square: AlgebraicSquare
    color: Color
    legal_moves: list[AlgebraicSquare]
