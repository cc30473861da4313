"""The Game board stores which piece stands on which square. Rules that need more than the board live in moves.py / transition.py."""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.core.exceptions import InvalidNotationError
from src.core.shared_types import Side
from src.dama.pieces import NOTATION_TO_SIDE, Piece
from src.dama.square import BOARD_SIZE, Square

# Each side has 4 full home rows, plus 4 squares of the middle ("equator") row. Only the very center starts empty.
HOME_ROWS: dict[Side, range] = {
    Side.BLACK: range(0, 4),
    Side.WHITE: range(BOARD_SIZE - 4, BOARD_SIZE),
}
EQUATOR_ROW = BOARD_SIZE // 2
EQUATOR_COLUMNS: dict[Side, range] = {
    Side.BLACK: range(0, 4),
    Side.WHITE: range(BOARD_SIZE - 4, BOARD_SIZE),
}


@dataclass
class Board:
    """Occupied squares only: a square that is not a key of `position` is empty."""

    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def initial(cls) -> Self:
        """40 pieces per side, black on the low rows and white on the high rows."""
        position: dict[Square, Piece] = {}
        for side in Side:
            for row in HOME_ROWS[side]:
                for col in range(BOARD_SIZE):
                    position[Square(row, col)] = Piece(side)
            for col in EQUATOR_COLUMNS[side]:
                position[Square(EQUATOR_ROW, col)] = Piece(side)
        return cls(position)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its row-by-row notation.

        Works like the board part of a chess FEN string:
        * rows are separated by slashes, starting from the top row (row 9) down to row 1
        * a digit denotes that many consecutive empty squares
        * 'b' / 'w' is a regular black / white piece, 'B' / 'W' a sultan

        ex. the starting position:
        wwwwwwwww/wwwwwwwww/wwwwwwwww/wwwwwwwww/bbbb1wwww/bbbbbbbbb/bbbbbbbbb/bbbbbbbbb/bbbbbbbbb
        """
        rows = notation.strip().split("/")
        if len(rows) != BOARD_SIZE:
            raise InvalidNotationError(
                f"Board notation needs {BOARD_SIZE} rows, got {len(rows)}: {notation!r}"
            )

        position: dict[Square, Piece] = {}
        for row_idx, row_notation in enumerate(rows):
            # read from the top row down
            row = BOARD_SIZE - 1 - row_idx
            col = 0
            for character in row_notation:
                if character.isdigit():
                    col += int(character)
                elif character.lower() in NOTATION_TO_SIDE:
                    if col >= BOARD_SIZE:
                        raise InvalidNotationError(
                            f"Row {row + 1} has more than {BOARD_SIZE} squares: {row_notation!r}"
                        )
                    position[Square(row, col)] = Piece.from_notation(character)
                    col += 1
                else:
                    raise InvalidNotationError(
                        f"Unknown character {character!r} in board notation."
                    )
            if col != BOARD_SIZE:
                raise InvalidNotationError(
                    f"Row {row + 1} does not describe exactly {BOARD_SIZE} squares: {row_notation!r}"
                )
        return cls(position)

    def to_notation(self) -> str:
        return "/".join(
            self._row_to_notation(row) for row in range(BOARD_SIZE - 1, -1, -1)
        )

    def _row_to_notation(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_SIZE):
            piece = self.piece(Square(row, col))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_notation())

        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def pieces(self) -> Iterator[tuple[Square, Piece]]:
        yield from self.position.items()

    def locate_side(self, side: Side) -> list[Square]:
        # sorted so move generation (and therefore search) is deterministic
        return sorted(square for square, piece in self.position.items() if piece.side == side)

    def count(self, side: Side) -> int:
        return sum(1 for piece in self.position.values() if piece.side == side)

    def copy(self) -> Self:
        """Pieces are immutable, so copying the mapping is enough to get an independent board."""
        return type(self)(dict(self.position))

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Update the position on the board"""
        piece = self.position.pop(from_square)
        self.position[to_square] = piece

    def remove_piece(self, square: Square) -> Piece:
        return self.position.pop(square)

    def promote_piece(self, square: Square) -> None:
        self.position[square] = self.position[square].promoted()
