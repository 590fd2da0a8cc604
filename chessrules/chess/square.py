"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates are zero-based: x runs over the files a-h, y runs from the top of the board (rank 8, Black's home rank)
down to the bottom (rank 1, White's home rank). So White pawns travel towards y = 0 and Black pawns towards y = 7.
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    x: int
    y: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0), 'h1' to (7, 7)"""
        x = ord(sq[0]) - ord("a")
        y = BOARD_DIMENSIONS[1] - int(sq[1:])
        return cls(x, y)

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{BOARD_DIMENSIONS[1] - self.y}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def offset(self, dx: int, dy: int) -> Square:
        """The square shifted by the given vector. NOTE: may lie outside of the board"""
        return Square(self.x + dx, self.y + dy)


def all_squares() -> list[Square]:
    """Every square of the board, row by row starting at the top-left corner (a8)"""
    return [
        Square(x, y)
        for y in range(BOARD_DIMENSIONS[1])
        for x in range(BOARD_DIMENSIONS[0])
    ]
