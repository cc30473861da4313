"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidNotationError

# The dama board is 9x9: 81 intersections of the drawn lines
BOARD_SIZE = 9
COLUMN_LETTERS = ascii_lowercase[:BOARD_SIZE]


@dataclass(frozen=True, order=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_notation(cls, sq: str) -> Square:
        """Notation: 'a1' - 'i9' get converted to (row 0, col 0) - (row 8, col 8). Letter = column, number = row."""
        sq = sq.strip().lower()
        if len(sq) != 2 or sq[0] not in COLUMN_LETTERS or not sq[1].isdigit():
            raise InvalidNotationError(f"Cannot interpret {sq!r} as a square.")
        square = cls(row=int(sq[1]) - 1, col=COLUMN_LETTERS.index(sq[0]))
        if not square.is_within_bounds():
            raise InvalidNotationError(f"Square {sq!r} is not on the board.")
        return square

    def to_notation(self) -> str:
        return f"{COLUMN_LETTERS[self.col]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def is_center(self) -> bool:
        """Odd row and odd column: the middle of one of the drawn cells"""
        return self.row % 2 == 1 and self.col % 2 == 1

    def is_corner(self) -> bool:
        """Even row and even column: a corner of the drawn cells"""
        return self.row % 2 == 0 and self.col % 2 == 0

    def shifted(self, dr: int, dc: int) -> Square:
        return Square(self.row + dr, self.col + dc)
