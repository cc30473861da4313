"""
Text encoding of a single position: everything needed to continue a game from it (history aside).

<board> <side to move> <chain> <black captures> <white captures>

* The board string is described in the Board class
* The side to move is either "b" or "w"
* The chain is "-" in a normal turn. During a forced continuation it is the square of the jumping piece,
  optionally followed by ':' and the comma separated squares already captured in this chain.
* The capture counters are non-negative integers.

ex) The starting position with black to move:
wwwwwwwww/wwwwwwwww/wwwwwwwww/wwwwwwwww/bbbb1wwww/bbbbbbbbb/bbbbbbbbb/bbbbbbbbb/bbbbbbbbb b - 0 0
"""

from src.core.exceptions import InvalidNotationError
from src.core.shared_types import Side
from src.dama.board import Board
from src.dama.pieces import NOTATION_TO_SIDE
from src.dama.square import Square
from src.dama.state import ForcedContinuation, GameState, NormalTurn, TurnPhase

NO_CHAIN = "-"
STARTING_POSITION = GameState.initial().board.to_notation()
STARTING_STATE = f"{STARTING_POSITION} b {NO_CHAIN} 0 0"


def is_valid_state_notation(notation: str) -> bool:
    """Check if the given string can be parsed into a position."""
    try:
        state_from_notation(notation)
    except InvalidNotationError:
        return False
    return True


def state_from_notation(notation: str) -> GameState:
    """Parse the notation into a (history-less, undecided) state"""
    parts = notation.strip().split()
    if len(parts) != 5:
        raise InvalidNotationError(
            f"Position notation must contain 5 space-separated parts, got {len(parts)}."
        )
    board_str, side_str, chain_str, black_captures, white_captures = parts

    board = Board.from_notation(board_str)
    if side_str not in NOTATION_TO_SIDE:
        raise InvalidNotationError(f"Unknown side to move: {side_str!r}")
    turn = NOTATION_TO_SIDE[side_str]
    phase = _phase_from_notation(chain_str)

    if not (black_captures.isdigit() and white_captures.isdigit()):
        raise InvalidNotationError("Capture counters must be non-negative integers.")

    state = GameState(
        board=board,
        turn=turn,
        captures={Side.BLACK: int(black_captures), Side.WHITE: int(white_captures)},
        phase=phase,
    )
    jumping = state.jumping_square
    if jumping is not None:
        piece = board.piece(jumping)
        if piece is None or piece.side != turn:
            raise InvalidNotationError(
                f"Chain square {jumping.to_notation()} must hold a piece of the side to move."
            )
    return state


def state_to_notation(state: GameState) -> str:
    return " ".join(
        [
            state.board.to_notation(),
            state.turn.symbol,
            _phase_to_notation(state.phase),
            str(state.captures[Side.BLACK]),
            str(state.captures[Side.WHITE]),
        ]
    )


def same_position(a: GameState, b: GameState) -> bool:
    """Two states describe the same position (ignoring history and outcome)."""
    return state_to_notation(a) == state_to_notation(b)


def _phase_from_notation(chain: str) -> TurnPhase:
    if chain == NO_CHAIN:
        return NormalTurn()
    square_str, _, captured_str = chain.partition(":")
    captured = frozenset(
        Square.from_notation(sq) for sq in captured_str.split(",") if sq
    )
    return ForcedContinuation(Square.from_notation(square_str), captured)


def _phase_to_notation(phase: TurnPhase) -> str:
    if not isinstance(phase, ForcedContinuation):
        return NO_CHAIN
    chain = phase.square.to_notation()
    if phase.captured:
        chain += ":" + ",".join(sq.to_notation() for sq in sorted(phase.captured))
    return chain
