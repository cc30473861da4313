"""Small builders shared by the test modules"""

from src.core.shared_types import Side
from src.dama.board import Board
from src.dama.notation import state_to_notation
from src.dama.pieces import Piece
from src.dama.square import Square
from src.dama.state import GameState

# {"a1": "b", "e5": "W", ...}: square name -> piece notation (b/w regular, B/W sultan)
Placement = dict[str, str]


def sq(name: str) -> Square:
    return Square.from_notation(name)


def build_board(placement: Placement) -> Board:
    return Board({sq(name): Piece.from_notation(char) for name, char in placement.items()})


def position_notation(placement: Placement, turn: Side = Side.BLACK) -> str:
    """State notation of a position with only the given pieces on the board"""
    return state_to_notation(GameState(board=build_board(placement), turn=turn))
