"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the non-capturing moves for each piece kind,
and a depth-first search over capture chains to find the capturing moves.

Legal move set = capturing moves achieving the maximum chain length (if any capture exists), otherwise the plain moves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from src.core.exceptions import InvalidNotationError
from src.core.shared_types import Side
from src.dama.board import Board
from src.dama.geometry import DIRECTIONS, Vector, forward, is_adjacent_step, ray
from src.dama.pieces import PieceKind
from src.dama.square import Square

if TYPE_CHECKING:
    from src.dama.state import GameState

CAPTURE_SEPARATOR = "x"
STEP_SEPARATOR = "-"


@dataclass(frozen=True)
class Move:
    """
    One atomic step of a turn. A capture chain is played as a sequence of these, each taking a single enemy piece.

    `total_captures` is the length of the longest chain this step starts (0 for a plain move).
    It is an annotation of the legal move set, not part of a move's identity.
    """

    from_square: Square
    to_square: Square
    side: Side
    captured: Optional[Square] = None
    total_captures: int = field(default=0, compare=False)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_notation(self) -> str:
        """ex) 'e4-e5' for a step, 'c3xc5' for a capture"""
        separator = CAPTURE_SEPARATOR if self.is_capture else STEP_SEPARATOR
        return f"{self.from_square.to_notation()}{separator}{self.to_square.to_notation()}"


def parse_move_notation(notation: str) -> tuple[Square, Square]:
    """
    The origin and destination of a move written in move notation.
    ---
    The captured square (and the side) follow from the position the move is played in, so they are not parsed.
    """
    text = notation.strip().lower()
    if len(text) != 5 or text[2] not in (CAPTURE_SEPARATOR, STEP_SEPARATOR):
        raise InvalidNotationError(f"Cannot interpret {notation!r} as a move.")
    return Square.from_notation(text[:2]), Square.from_notation(text[3:])


# --- MOVEMENT RULES ---
def single_step_moves(square: Square, board: Board, side: Side) -> list[Move]:
    """A regular piece steps to an empty neighbouring square, but only forward (straight or along a forward diagonal)."""
    moves: list[Move] = []
    dr = forward(side)
    for dc in (-1, 0, 1):
        target_square = square.shifted(dr, dc)
        if is_adjacent_step(square, target_square) and board.is_empty(target_square):
            moves.append(Move(square, target_square, side))
    return moves


def sliding_moves(square: Square, board: Board, side: Side) -> list[Move]:
    """
    Raycasting for the sultan
    ---
    Move along every drawn line until the edge of the board or the first occupied square.
    """
    moves: list[Move] = []
    for direction in DIRECTIONS:
        for target_square in ray(square, direction):
            if not board.is_empty(target_square):
                break
            moves.append(Move(square, target_square, side))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board, Side], list[Move]]
MOVEMENT_RULES: dict[PieceKind, CandidateMovesFn] = {
    PieceKind.REGULAR: single_step_moves,
    PieceKind.SULTAN: sliding_moves,
}


# --- CAPTURING RULES ---
@dataclass(frozen=True)
class CaptureStep:
    """First step of a capture chain, with the most enemies any chain starting with this step can take."""

    landing: Square
    captured: Square
    total: int


def _find_target(
    board: Board,
    square: Square,
    direction: Vector,
    side: Side,
    is_sultan: bool,
    blocked: frozenset[Square],
) -> Optional[Square]:
    """The enemy piece that could be jumped along `direction`, if any.

    A regular piece only looks at its direct neighbour, a sultan may first cross any number of empty squares.
    """
    for target in ray(square, direction):
        if target in blocked:
            return None
        piece = board.piece(target)
        if piece is not None:
            return target if piece.side != side else None
        if not is_sultan:
            return None
    return None


def _landing_squares(
    board: Board,
    enemy: Square,
    direction: Vector,
    is_sultan: bool,
    blocked: frozenset[Square],
) -> list[Square]:
    """Empty squares right behind the jumped piece. A sultan may choose any of them up to the next obstacle."""
    landings: list[Square] = []
    for landing in ray(enemy, direction):
        if landing in blocked or not board.is_empty(landing):
            break
        landings.append(landing)
        if not is_sultan:
            break
    return landings


def capture_steps(
    board: Board,
    square: Square,
    blocked: frozenset[Square] = frozenset(),
) -> list[CaptureStep]:
    """
    Depth-first search for capture chains of the piece on `square`.
    ---
    For every direction and every landing square we play the capture on a copy of the board and recurse from the landing square.
    `blocked` holds the squares already captured earlier in this chain: they can not be captured again, landed on, or crossed.

    NOTE: The piece keeps its kind for the whole chain. Promotion only happens once the chain is finished.
    """
    piece = board.piece(square)
    if piece is None:
        return []

    steps: list[CaptureStep] = []
    for direction in DIRECTIONS:
        enemy = _find_target(board, square, direction, piece.side, piece.is_sultan, blocked)
        if enemy is None:
            continue

        for landing in _landing_squares(board, enemy, direction, piece.is_sultan, blocked):
            after_capture = board.copy()
            after_capture.move_piece(square, landing)
            after_capture.remove_piece(enemy)
            continuations = capture_steps(after_capture, landing, blocked | {enemy})
            longest_continuation = max((step.total for step in continuations), default=0)
            steps.append(CaptureStep(landing, enemy, 1 + longest_continuation))
    return steps


def capture_moves(
    board: Board,
    origins: Iterable[Square],
    side: Side,
    blocked: frozenset[Square] = frozenset(),
) -> list[Move]:
    """All capturing first steps for the pieces on `origins` (no maximum-capture filter yet)."""
    return [
        Move(origin, step.landing, side, captured=step.captured, total_captures=step.total)
        for origin in origins
        for step in capture_steps(board, origin, blocked)
    ]


def plain_moves(board: Board, origins: Iterable[Square], side: Side) -> list[Move]:
    moves: list[Move] = []
    for origin in origins:
        piece = board.piece(origin)
        if piece is None:
            continue
        moves.extend(MOVEMENT_RULES[piece.kind](origin, board, side))
    return moves


def keep_maximum_captures(moves: Iterable[Move]) -> list[Move]:
    """Forced-maximum rule: only the moves whose chain takes the most pieces survive."""
    moves = list(moves)
    if not moves:
        return []
    most = max(move.total_captures for move in moves)
    return [move for move in moves if move.total_captures == most]


def generate_moves(
    board: Board,
    side: Side,
    jumping_square: Optional[Square] = None,
    blocked: frozenset[Square] = frozenset(),
) -> set[Move]:
    """
    Legal moves on a board
    ----

    1. Mid-chain? Only the jumping piece may move, and only by capturing again.
    2. Any capture available (for any piece)? Captures are forced, and only the longest chains are allowed (global maximum).
    3. Otherwise the plain (non-capturing) moves.
    """
    origins = [jumping_square] if jumping_square is not None else board.locate_side(side)

    captures = capture_moves(board, origins, side, blocked)
    if captures:
        return set(keep_maximum_captures(captures))

    if jumping_square is not None:
        return set()

    return set(plain_moves(board, origins, side))


def legal_moves(state: GameState) -> set[Move]:
    """Legal moves for the side to move. A finished game has none."""
    if state.winner is not None:
        return set()
    return generate_moves(
        state.board, state.turn, state.jumping_square, state.captured_in_chain
    )


def find_legal_move(state: GameState, from_square: Square, to_square: Square) -> Optional[Move]:
    """Look up the legal move with the given origin / destination (malformed squares never match)."""
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return None
    return next(
        (
            move
            for move in legal_moves(state)
            if move.from_square == from_square and move.to_square == to_square
        ),
        None,
    )


def sorted_moves(moves: Iterable[Move]) -> list[Move]:
    """Deterministic order (the move set itself is unordered)."""
    return sorted(moves, key=lambda move: (move.from_square, move.to_square))

