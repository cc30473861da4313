"""Defines the pieces of the game"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self

from src.core.shared_types import Side


class PieceKind(Enum):
    REGULAR = auto()
    SULTAN = auto()


# Base value of a piece, used by the evaluation of the computer opponent
PIECE_POINTS: dict[PieceKind, int] = {
    PieceKind.REGULAR: 15,
    PieceKind.SULTAN: 80,
}

NOTATION_TO_SIDE: dict[str, Side] = {side.symbol: side for side in Side}


@dataclass(frozen=True)
class Piece:
    """A piece is identified by the square it stands on (the board's key), so it only carries its side and kind.

    Frozen: boards can be copied shallowly without any two positions sharing a mutable piece.
    """

    side: Side
    kind: PieceKind = PieceKind.REGULAR

    @property
    def is_sultan(self) -> bool:
        return self.kind == PieceKind.SULTAN

    @property
    def points(self) -> int:
        return PIECE_POINTS[self.kind]

    @classmethod
    def from_notation(cls, character: str) -> Self:
        # lower case: regular piece, upper case: sultan
        side = NOTATION_TO_SIDE[character.lower()]
        kind = PieceKind.SULTAN if character.isupper() else PieceKind.REGULAR
        return cls(side, kind)

    def to_notation(self) -> str:
        return self.side.symbol.upper() if self.is_sultan else self.side.symbol

    def promoted(self) -> Self:
        return replace(self, kind=PieceKind.SULTAN)
