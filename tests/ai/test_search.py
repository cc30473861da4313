"""Unit tests for /src/ai/search.py"""

from src.ai.evaluation import WIN_SCORE, evaluate
from src.ai.search import SEARCH_DEPTH, SearchEngine, best_move
from src.core.shared_types import Difficulty, Side
from src.dama.moves import legal_moves
from src.dama.notation import state_to_notation
from src.dama.state import GameState
from tests.conftest import PositionFactory


def test_no_move_means_no_result(position: PositionFactory) -> None:
    state = position({"a9": "b", "i1": "w"})
    engine = SearchEngine(depth=3)
    assert engine.search(state) is None
    assert engine.best_value is None


def test_depth_grows_with_difficulty() -> None:
    assert SEARCH_DEPTH[Difficulty.EASY] < SEARCH_DEPTH[Difficulty.MEDIUM] < SEARCH_DEPTH[Difficulty.HARD]
    assert SearchEngine.for_difficulty(Difficulty.HARD).depth == SEARCH_DEPTH[Difficulty.HARD]


def test_takes_the_winning_capture(position: PositionFactory) -> None:
    state = position({"c3": "b", "c4": "w"})
    engine = SearchEngine(depth=1)
    move = engine.search(state)
    assert move is not None
    assert move.to_notation() == "c3xc5"
    assert engine.best_value == WIN_SCORE


def test_capture_is_played_over_a_better_looking_step(position: PositionFactory) -> None:
    """
    e8-e9 would promote and score 60 for black, but c3xc5 is compulsory.
    After the capture: c5 15 + 4, e8 15 + 7, against the white piece on i9 15 + 2, so 24.
    """
    state = position({"c3": "b", "e8": "b", "c4": "w", "i9": "w"})
    promoted = position({"c3": "b", "e9": "B", "c4": "w", "i9": "w"}, turn=Side.WHITE)
    assert evaluate(promoted, Side.BLACK) == 60

    assert {move.to_notation() for move in legal_moves(state)} == {"c3xc5"}
    engine = SearchEngine(depth=1)
    move = engine.search(state)
    assert move is not None
    assert move.to_notation() == "c3xc5"
    assert engine.best_value == 24


def test_capture_chain_costs_a_single_ply(position: PositionFactory) -> None:
    """
    a1xa3xa5xa7 is three steps of the same turn. At depth 1 the whole chain is searched
    and the position after it is evaluated: a7 is worth 15 + 2 + 6, the white piece on i9 15 + 2.
    """
    state = position({"a1": "b", "a2": "w", "a4": "w", "a6": "w", "i9": "w"})
    engine = SearchEngine(depth=1)
    move = engine.search(state)
    assert move is not None
    assert move.to_notation() == "a1xa3"
    assert move.total_captures == 3
    assert engine.best_value == 6


def test_avoids_losing_a_piece(position: PositionFactory) -> None:
    """
    e5 is the only square of the black piece on e4, and standing there it gets captured (e6xe4).
    With a second black piece available, black should move that one instead.
    """
    state = position({"e4": "b", "a1": "b", "e6": "w", "i9": "w"})
    move = SearchEngine(depth=2).search(state)
    assert move is not None
    assert move.from_square.to_notation() == "a1"


def test_search_leaves_state_untouched() -> None:
    state = GameState.initial()
    before = state_to_notation(state)
    SearchEngine(depth=2).search(state)
    assert state_to_notation(state) == before
    assert state.history == ()


def test_best_move_is_legal_and_deterministic() -> None:
    state = GameState.initial(Side.WHITE)
    first = best_move(state, Difficulty.EASY)
    second = best_move(state, Difficulty.EASY)
    assert first is not None
    assert first in legal_moves(state)
    assert first == second


def test_nodes_are_counted(position: PositionFactory) -> None:
    engine = SearchEngine(depth=2)
    engine.search(position({"e4": "b", "a1": "b", "e6": "w", "i9": "w"}))
    assert engine.nodes_searched > 0
