"""Static evaluation of a position for the computer opponent."""

from src.core.shared_types import Side, Winner
from src.dama.geometry import promotion_row
from src.dama.pieces import Piece
from src.dama.square import BOARD_SIZE, Square
from src.dama.state import GameState

WIN_SCORE = 10_000
DRAW_SCORE = 0
# Side to move has no legal move left inside the search (counts as a loss, but less certain than a recorded one)
NO_MOVES_SCORE = 5_000

FLANK_COLUMNS = (0, BOARD_SIZE - 1)
FLANK_BONUS = 2
PROGRESS_BONUS = 1


def piece_value(square: Square, piece: Piece) -> int:
    """
    Base value + a bonus for standing on the edge columns (can't be jumped sideways)
    + for regular pieces, a bonus for every row advanced towards promotion.
    """
    value = piece.points
    if square.col in FLANK_COLUMNS:
        value += FLANK_BONUS
    if not piece.is_sultan:
        rows_to_go = abs(promotion_row(piece.side) - square.row)
        value += PROGRESS_BONUS * (BOARD_SIZE - 1 - rows_to_go)
    return value


def evaluate(state: GameState, side: Side) -> int:
    """Score of the position seen from `side`: its total minus the opponent's total, or a fixed score once decided."""
    if state.winner == Winner.DRAW:
        return DRAW_SCORE
    if state.winner is not None:
        return WIN_SCORE if state.winner == Winner.of(side) else -WIN_SCORE

    score = 0
    for square, piece in state.board.pieces():
        value = piece_value(square, piece)
        score += value if piece.side == side else -value
    return score
