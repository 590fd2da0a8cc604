"""
Reading board setups from FEN strings.
----

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.

<board position string> <active color> <castling rights> <en passant square> <# half move clock> <number turns played>

Only the first two fields mean something to this engine (no castling, no en passant, no move counters).
Those other fields are accepted, but ignored, so a FEN copied from anywhere can be used to set up a board.

* The board position lists the rows from the top (rank 8) to the bottom (rank 1), separated by slashes.
  Letters are pieces (capital letters for White), digits count consecutive empty squares.
* The active color is either "w" or "b"

ex) The standard starting position
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w
"""

from typing import Optional

from chessrules.chess.moves import FEN_TO_PIECE
from chessrules.chess.square import BOARD_DIMENSIONS
from chessrules.core.exceptions import InvalidFENError
from chessrules.core.shared_types import Color

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
STARTING_FEN = f"{STARTING_POSITION} w"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[1])


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_rows = BOARD_DIMENSIONS
    row_fens = position.split("/")
    if len(row_fens) != num_rows:
        return False

    for row_fen in row_fens:
        file_count = 0
        for character in row_fen:
            # make sure every character is valid
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def split_fen(fen: str) -> tuple[str, Optional[Color]]:
    """
    Separate the board position from the color to move.

    Returns the color as None if the string only contains the board position.
    """
    parts = fen.strip().split()
    if not parts or not is_valid_position(parts[0]):
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen!r}")

    if len(parts) == 1:
        return parts[0], None

    if not is_valid_color_code(parts[1]):
        raise InvalidFENError(f"Invalid active color {parts[1]!r} in FEN: {fen!r}")
    color_to_move = Color.WHITE if parts[1] == "w" else Color.BLACK
    return parts[0], color_to_move


def iter_position(position: str) -> list[tuple[int, int, str]]:
    """
    Walk over the board position string.

    Returns (x, y, fen_character) for every square that holds a piece.
    """
    if not is_valid_position(position):
        raise InvalidFENError(f"Cannot interpret supplied string as board position: {position!r}")

    found: list[tuple[int, int, str]] = []
    for y, row_fen in enumerate(position.split("/")):
        # FEN string is read from the top row (y = 0) to the bottom row, and left-to-right within a row
        x = 0
        for character in row_fen:
            if character.isalpha():
                found.append((x, y, character))
                x += 1
            else:
                # A number denotes the amount of empty squares after each other
                x += int(character)
    return found
