"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The domain layer (lower) hands a GameModel upwards, the Service converts it into the response models of the API layer (higher).
(Decouples the objects of the rules engine from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str
AlgebraicSquare = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game: plain strings, lists and dicts only."""

    board_fen: str
    occupancy: list[list[str]]
    turn: PieceColor
    phase: str
    game_over: bool
    result: str
    winner: Optional[PieceColor]
    in_check: dict[PieceColor, bool]
    allowable_squares: list[AlgebraicSquare]
    moves_uci: list[str]
    captured: dict[PieceColor, list[str]]
    players: dict[PieceColor, PlayerName]
    time_remaining_ms: dict[PieceColor, int]
