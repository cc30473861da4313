"""
Snapshot of a game in progress.

A GameState is never mutated: the transition functions (src/dama/transition.py) build a new one for every move.
That way the search engine can explore hypothetical states without ever touching the authoritative one.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.shared_types import Side, Winner
from src.dama.board import Board
from src.dama.moves import Move
from src.dama.square import Square


# --- TURN PHASE: {normal turn, forced continuation of a capture chain} ---
@dataclass(frozen=True)
class NormalTurn:
    """Any piece of the side to move may move."""


@dataclass(frozen=True)
class ForcedContinuation:
    """A capture chain is not finished: only the piece on `square` may move, and only by capturing.

    `captured` are the squares taken earlier in this chain (they can not be used again until the turn ends).
    """

    square: Square
    captured: frozenset[Square] = frozenset()


TurnPhase = NormalTurn | ForcedContinuation


@dataclass(frozen=True)
class GameState:
    board: Board
    turn: Side
    winner: Optional[Winner] = None
    history: tuple[Move, ...] = ()
    captures: dict[Side, int] = field(
        default_factory=lambda: {side: 0 for side in Side}
    )
    phase: TurnPhase = NormalTurn()

    @classmethod
    def initial(cls, starting_side: Side = Side.BLACK) -> Self:
        return cls(board=Board.initial(), turn=starting_side)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def jumping_square(self) -> Optional[Square]:
        """The mid-chain marker: square of the piece that must keep capturing, if any."""
        if isinstance(self.phase, ForcedContinuation):
            return self.phase.square
        return None

    @property
    def captured_in_chain(self) -> frozenset[Square]:
        if isinstance(self.phase, ForcedContinuation):
            return self.phase.captured
        return frozenset()

    def piece_counts(self) -> dict[Side, int]:
        return {side: self.board.count(side) for side in Side}


def initial_state(starting_side: Side = Side.BLACK) -> GameState:
    """A fresh game: 40 pieces per side, no captures, no winner, empty history."""
    return GameState.initial(starting_side)
