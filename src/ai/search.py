"""
Computer opponent: fixed depth minimax with alpha-beta pruning.

One unit of depth is one *turn*, not one atomic step. A capture chain is a sequence of steps by the same side,
so depth is only consumed when the side to move changes between a state and its child.
That way the depth cutoff never stops in the middle of a chain, and a long chain is not charged as several turns.
"""

import logging
from typing import Optional

from src.ai.evaluation import NO_MOVES_SCORE, evaluate
from src.core.shared_types import Difficulty, Side
from src.dama.moves import Move, keep_maximum_captures, legal_moves, sorted_moves
from src.dama.state import GameState
from src.dama.transition import play

logger = logging.getLogger(__name__)

SEARCH_DEPTH: dict[Difficulty, int] = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 5,
}


class SearchEngine:
    """Picks a move for the side to move. Never mutates the state it is given."""

    def __init__(self, depth: int = SEARCH_DEPTH[Difficulty.MEDIUM]) -> None:
        self.depth = depth
        self.nodes_searched = 0
        self.best_value: Optional[int] = None

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> "SearchEngine":
        return cls(depth=SEARCH_DEPTH[difficulty])

    def search(self, state: GameState) -> Optional[Move]:
        """Best move for the side to move, or None if it has no legal move (a loss for that side)."""
        self.nodes_searched = 0
        self.best_value = None

        moves = legal_moves(state)
        if not moves:
            return None

        # The legal move set is already restricted to the longest captures; filter again so the root never depends on it
        candidates = sorted_moves(keep_maximum_captures(moves))
        searching_side = state.turn

        best_move: Optional[Move] = None
        best_value = float("-inf")
        alpha = float("-inf")
        beta = float("inf")
        for move in candidates:
            child = play(state, move)
            value = self._minimax(
                child, self._child_depth(state, child, self.depth), alpha, beta, searching_side
            )
            if value > best_value:
                best_value = value
                best_move = move
            alpha = max(alpha, best_value)

        self.best_value = int(best_value)
        logger.info(
            "Searched %d nodes at depth %d for %s: %s (score %d)",
            self.nodes_searched,
            self.depth,
            searching_side,
            best_move.to_notation() if best_move else None,
            self.best_value,
        )
        return best_move

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        searching_side: Side,
    ) -> float:
        self.nodes_searched += 1
        if depth <= 0 or state.is_over:
            return evaluate(state, searching_side)

        moves = sorted_moves(legal_moves(state))
        maximizing = state.turn == searching_side
        if not moves:
            return -NO_MOVES_SCORE if maximizing else NO_MOVES_SCORE

        if maximizing:
            value = float("-inf")
            for move in moves:
                child = play(state, move)
                value = max(
                    value,
                    self._minimax(child, self._child_depth(state, child, depth), alpha, beta, searching_side),
                )
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = float("inf")
        for move in moves:
            child = play(state, move)
            value = min(
                value,
                self._minimax(child, self._child_depth(state, child, depth), alpha, beta, searching_side),
            )
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value

    @staticmethod
    def _child_depth(state: GameState, child: GameState, depth: int) -> int:
        """Chain continuations (same side still to move) are searched at the same depth."""
        return depth - 1 if child.turn != state.turn else depth


def best_move(state: GameState, difficulty: Difficulty = Difficulty.MEDIUM) -> Optional[Move]:
    return SearchEngine.for_difficulty(difficulty).search(state)
