"""
Board topology.

Orthogonal neighbours are always connected. Diagonal neighbours are only connected along the drawn diagonals,
which join a cell center (odd, odd) with a cell corner (even, even).
Everything that validates a path is built out of `is_adjacent_step`.
"""

from typing import Iterator

from src.core.shared_types import Side
from src.dama.square import BOARD_SIZE, Square

Vector = tuple[int, int]

ORTHOGONALS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONALS: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
DIRECTIONS: tuple[Vector, ...] = ORTHOGONALS + DIAGONALS


def is_adjacent_step(a: Square, b: Square) -> bool:
    """Are the two squares connected by a single line segment of the board?"""
    if not (a.is_within_bounds() and b.is_within_bounds()):
        return False

    dr = abs(a.row - b.row)
    dc = abs(a.col - b.col)
    if dr + dc == 1:
        return True
    if dr == 1 and dc == 1:
        return (a.is_center() and b.is_corner()) or (a.is_corner() and b.is_center())
    return False


def ray(square: Square, direction: Vector) -> Iterator[Square]:
    """Walk along a line of the board, stopping at the edge or where the line is not drawn."""
    dr, dc = direction
    current = square
    while True:
        nxt = current.shifted(dr, dc)
        if not is_adjacent_step(current, nxt):
            return
        yield nxt
        current = nxt


def forward(side: Side) -> int:
    """Black starts on the low rows and moves up the board, white moves down"""
    return 1 if side == Side.BLACK else -1


def promotion_row(side: Side) -> int:
    """The opponent's back row"""
    return BOARD_SIZE - 1 if side == Side.BLACK else 0
