"""Unit tests for /src/dama/transition.py"""

from src.core.shared_types import Side, Winner
from src.dama.moves import legal_moves, sorted_moves
from src.dama.notation import same_position
from src.dama.pieces import Piece, PieceKind
from src.dama.state import ForcedContinuation, GameState, NormalTurn
from src.dama.transition import (
    apply_move,
    declare_winner,
    invariant_violation,
    replay,
)
from tests.conftest import PositionFactory
from tests.helpers import build_board, sq


# -- PLAIN MOVES ---
def test_plain_move_passes_the_turn() -> None:
    state = GameState.initial()
    after = apply_move(state, sq("e4"), sq("e5"))

    assert after.turn == Side.WHITE
    assert after.board.is_empty(sq("e4"))
    assert after.board.piece(sq("e5")) == Piece(Side.BLACK)
    assert after.phase == NormalTurn()
    assert [move.to_notation() for move in after.history] == ["e4-e5"]


def test_input_state_is_left_untouched() -> None:
    state = GameState.initial()
    before = state.board.to_notation()
    apply_move(state, sq("e4"), sq("e5"))
    assert state.board.to_notation() == before
    assert state.history == ()


# -- REJECTED MOVES ---
def test_illegal_move_returns_the_same_state() -> None:
    state = GameState.initial()
    assert apply_move(state, sq("e4"), sq("e6")) is state  # two squares
    assert apply_move(state, sq("e6"), sq("e5")) is state  # not black's piece
    assert apply_move(state, sq("a1"), sq("a2")) is state  # occupied


def test_move_in_finished_game_is_ignored() -> None:
    state = declare_winner(GameState.initial(), Winner.WHITE)
    assert apply_move(state, sq("e4"), sq("e5")) is state


def test_plain_move_rejected_while_capture_available(position: PositionFactory) -> None:
    state = position({"c3": "b", "c4": "w", "g1": "b", "h8": "w"})
    assert apply_move(state, sq("g1"), sq("g2")) is state
    assert apply_move(state, sq("c3"), sq("c5")) is not state


# -- CAPTURES & CHAINS ---
def test_capture_chain_keeps_the_turn(position: PositionFactory) -> None:
    state = position({"a1": "b", "a2": "w", "a4": "w", "i9": "w"})

    first = apply_move(state, sq("a1"), sq("a3"))
    assert first.turn == Side.BLACK
    assert first.phase == ForcedContinuation(sq("a3"), frozenset({sq("a2")}))
    assert first.board.count(Side.WHITE) == 2
    assert first.captures[Side.BLACK] == 1

    # a different piece / direction is not allowed mid-chain
    assert apply_move(first, sq("a3"), sq("a4")) is first

    second = apply_move(first, sq("a3"), sq("a5"))
    assert second.turn == Side.WHITE
    assert second.phase == NormalTurn()
    assert second.board.count(Side.WHITE) == 1
    assert second.captures == {Side.BLACK: 2, Side.WHITE: 0}
    assert [move.to_notation() for move in second.history] == ["a1xa3", "a3xa5"]


def test_capturing_the_last_piece_wins(position: PositionFactory) -> None:
    state = position({"a1": "b", "a2": "w"})
    after = apply_move(state, sq("a1"), sq("a3"))
    assert after.winner == Winner.BLACK
    assert after.is_over
    assert legal_moves(after) == set()


def test_white_wins_by_capture(position: PositionFactory) -> None:
    state = position({"e5": "b", "e6": "w"}, turn=Side.WHITE)
    after = apply_move(state, sq("e6"), sq("e4"))
    assert after.winner == Winner.WHITE


# -- PROMOTION ---
def test_promotion_on_the_last_row(position: PositionFactory) -> None:
    state = position({"e8": "b", "a1": "w"})
    after = apply_move(state, sq("e8"), sq("e9"))
    assert after.board.piece(sq("e9")) == Piece(Side.BLACK, PieceKind.SULTAN)


def test_white_promotes_on_row_one(position: PositionFactory) -> None:
    state = position({"e2": "w", "i9": "b"}, turn=Side.WHITE)
    after = apply_move(state, sq("e2"), sq("e1"))
    assert after.board.piece(sq("e1")).is_sultan


def test_promotion_is_deferred_until_the_chain_ends(position: PositionFactory) -> None:
    """c7xc9 reaches the last row mid-chain: the piece stays regular, then promotes after c9xe9."""
    state = position({"c7": "b", "c8": "w", "d9": "w", "a1": "w"})

    mid_chain = apply_move(state, sq("c7"), sq("c9"))
    assert mid_chain.jumping_square == sq("c9")
    assert mid_chain.board.piece(sq("c9")) == Piece(Side.BLACK)

    done = apply_move(mid_chain, sq("c9"), sq("e9"))
    assert done.turn == Side.WHITE
    assert done.board.piece(sq("e9")) == Piece(Side.BLACK, PieceKind.SULTAN)
    assert done.winner is None


def test_sultan_stays_sultan(position: PositionFactory) -> None:
    state = position({"a1": "B", "i9": "w"})
    after = apply_move(state, sq("a1"), sq("a9"))
    assert after.board.piece(sq("a9")) == Piece(Side.BLACK, PieceKind.SULTAN)


# -- OUTCOMES FROM OUTSIDE THE RULES ---
def test_declare_winner() -> None:
    state = GameState.initial()
    drawn = declare_winner(state, Winner.DRAW)
    assert drawn.winner == Winner.DRAW
    assert state.winner is None

    # a decided game stays decided
    assert declare_winner(drawn, Winner.BLACK) is drawn


# -- REPLAY ---
def test_replay_reproduces_the_game() -> None:
    initial = GameState.initial()
    state = initial
    for _ in range(6):
        move = sorted_moves(legal_moves(state))[0]
        state = apply_move(state, move.from_square, move.to_square)

    replayed = replay(initial, state.history)
    assert same_position(replayed, state)
    assert replayed.history == state.history
    assert replay(initial, ()) is initial


def test_piece_count_never_increases(position: PositionFactory) -> None:
    state = position({"a1": "B", "f6": "w", "g5": "w", "c3": "b", "c4": "w", "e7": "w", "i1": "w"})
    for _ in range(8):
        moves = sorted_moves(legal_moves(state))
        if not moves:
            break
        after = apply_move(state, moves[0].from_square, moves[0].to_square)
        for side in Side:
            assert after.board.count(side) <= state.board.count(side)
        state = after


# -- STRUCTURAL CHECKS ---
def test_invariant_violation() -> None:
    before = GameState(board=build_board({"a1": "b", "i9": "w"}), turn=Side.BLACK)
    gained = GameState(board=build_board({"a1": "b", "a2": "b", "i9": "w"}), turn=Side.WHITE)
    assert invariant_violation(before, gained) is not None

    lost_jumper = GameState(
        board=build_board({"a1": "b", "i9": "w"}),
        turn=Side.BLACK,
        phase=ForcedContinuation(sq("a3")),
    )
    assert invariant_violation(before, lost_jumper) is not None

    fine = GameState(board=build_board({"a2": "b", "i9": "w"}), turn=Side.WHITE)
    assert invariant_violation(before, fine) is None


def test_declare_winner_mid_chain_keeps_the_chain(position: PositionFactory) -> None:
    state = position({"a1": "b", "a2": "w", "a4": "w", "i1": "w"})
    mid_chain = apply_move(state, sq("a1"), sq("a3"))

    decided = declare_winner(mid_chain, Winner.WHITE)
    assert decided.phase == mid_chain.phase
    assert same_position(decided, mid_chain)
    assert legal_moves(decided) == set()
