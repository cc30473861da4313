"""
State transitions: the only way a GameState turns into the next one.

* `advance` plays one (already validated) atomic step: relocate, capture, continue the chain or promote + pass the turn.
* `apply_move` validates against the legal move set, then `play` records the move and detects the winner.
* `declare_winner` encodes an outcome decided outside the rules (timeout, resignation, agreed draw).
* `replay` folds `apply_move` over a move history.
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional

from src.core.shared_types import Side, Winner
from src.dama.geometry import promotion_row
from src.dama.moves import Move, capture_moves, find_legal_move
from src.dama.square import Square
from src.dama.state import ForcedContinuation, GameState, NormalTurn

logger = logging.getLogger(__name__)


def advance(state: GameState, move: Move) -> GameState:
    """
    Play one atomic step on a copy of the board
    ---

    1. relocate the piece
    2. remove the captured piece (if any) and count it for the mover
    3. more captures available for this piece? --> same side keeps the turn, phase becomes a forced continuation
    4. otherwise --> promote if the piece reached the opponent's back row, and pass the turn

    NOTE: promotion is deferred until the chain ends, so a piece crossing the back row mid-chain keeps capturing as a regular piece.
    """
    board = state.board.copy()
    board.move_piece(move.from_square, move.to_square)

    captures = dict(state.captures)
    captured_in_chain = state.captured_in_chain
    if move.captured is not None:
        board.remove_piece(move.captured)
        captures[move.side] += 1
        captured_in_chain = captured_in_chain | {move.captured}

        if capture_moves(board, [move.to_square], move.side, captured_in_chain):
            logger.debug("Chain continues from %s", move.to_square.to_notation())
            return replace(
                state,
                board=board,
                captures=captures,
                phase=ForcedContinuation(move.to_square, captured_in_chain),
            )

    piece = board.piece(move.to_square)
    if piece is not None and not piece.is_sultan and move.to_square.row == promotion_row(move.side):
        logger.debug("Promoting piece on %s to sultan", move.to_square.to_notation())
        board.promote_piece(move.to_square)

    return replace(
        state,
        board=board,
        captures=captures,
        turn=state.turn.opponent,
        phase=NormalTurn(),
    )


def apply_move(state: GameState, from_square: Square, to_square: Square) -> GameState:
    """
    Validate-and-apply a move
    ---

    Anything that is not in the legal move set (wrong side, occupied destination, squares off the board, finished game)
    is rejected by returning the input state unchanged.
    """
    if state.is_over:
        logger.debug("Game is over, ignoring move %s -> %s", from_square, to_square)
        return state

    move = find_legal_move(state, from_square, to_square)
    if move is None:
        logger.debug("Illegal move %s -> %s rejected", from_square, to_square)
        return state
    return play(state, move)


def play(state: GameState, move: Move) -> GameState:
    """Apply a move taken from the legal move set of `state` (no re-validation), record it and decide the winner."""
    next_state = advance(state, move)
    violation = invariant_violation(state, next_state)
    if violation:
        logger.error("Rejecting %s: %s", move.to_notation(), violation)
        return state

    return replace(
        next_state,
        winner=_decide_winner(next_state),
        history=state.history + (move,),
    )


def declare_winner(state: GameState, winner: Winner) -> GameState:
    """
    Write an externally decided outcome into the state. A finished game can not be changed anymore.
    ---
    The phase is kept: a game decided mid-chain still stores the chain, so replaying its moves gives the same position.
    """
    if state.is_over:
        return state
    return replace(state, winner=winner)


def replay(initial: GameState, history: Iterable[Move]) -> GameState:
    """Re-derive a position by playing a recorded history from the initial state."""
    state = initial
    for move in history:
        state = apply_move(state, move.from_square, move.to_square)
    return state


def invariant_violation(before: GameState, after: GameState) -> Optional[str]:
    """Structural guarantees every transition has to keep. Returns a description of the first one broken."""
    for side in Side:
        if after.board.count(side) > before.board.count(side):
            return f"{side} gained pieces"

    jumping = after.jumping_square
    if jumping is not None:
        piece = after.board.piece(jumping)
        if piece is None or piece.side != after.turn:
            return f"mid-chain square {jumping.to_notation()} does not hold a piece of {after.turn}"
    return None


def _decide_winner(state: GameState) -> Optional[Winner]:
    """Only material decides inside the engine: a side without pieces has lost. Draws come from outside."""
    counts = state.piece_counts()
    if counts[Side.WHITE] == 0:
        return Winner.BLACK
    if counts[Side.BLACK] == 0:
        return Winner.WHITE
    return None
