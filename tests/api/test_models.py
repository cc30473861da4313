from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.api.models import CreateGameRequest, HistoryRequest, MoveRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, Side
from src.dama.notation import STARTING_STATE


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_valid_starting_position() -> None:
    """Test that CreateGameRequest accepts a valid position."""
    request = CreateGameRequest(
        player_name="don't hate the player, hate the name.",
        side=Side.BLACK,
        starting_position=STARTING_STATE,
    )
    assert request.starting_position == STARTING_STATE
    assert request.starting_side == Side.BLACK
    assert request.difficulty is None


def test_starting_position_is_optional() -> None:
    """Should be able to not supply a starting position, and validator just returns None."""
    request = CreateGameRequest(
        player_name="don't hate the player, hate the name.",
        side=Side.WHITE,
        starting_position=None,
    )
    assert request.starting_position is None


def test_side_and_difficulty_from_strings() -> None:
    request = CreateGameRequest(
        player_name="bladiblidiboo", side="white", starting_side="white", difficulty="hard"
    )
    assert request.side == Side.WHITE
    assert request.starting_side == Side.WHITE
    assert request.difficulty == Difficulty.HARD


def test_unknown_difficulty() -> None:
    with pytest.raises(ValidationError):
        _ = CreateGameRequest(player_name="bladiblidiboo", side=Side.BLACK, difficulty="impossible")


@pytest.mark.parametrize(
    "invalid_position",
    [
        STARTING_STATE.rsplit(" ", 1)[0],  # only 4 space-separated values
        STARTING_STATE + " extra",  # too many space-separated values
        "9/9/9/9/9/9/9/9/9 b e5 0 0",  # chain on an empty square
        "nonsense",
    ],
)
def test_invalid_starting_position(invalid_position: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(
            player_name="don't hate the player, hate the name.",
            side=Side.BLACK,
            starting_position=invalid_position,
        )


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    """Test that MoveRequest accepts correctly written squares, and normalizes them."""
    request = MoveRequest(
        game_id=mock_id, player_name="bladiblidiboo", from_square="e4", to_square=" E5 "
    )
    assert request.from_square == "e4"
    assert request.to_square == "e5"


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "j1",  # column beyond i
        "a0",  # row below 1
    ],
)
def test_invalid_from_square(mock_id: UUID, square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id,
            player_name="bladiblidiboo",
            from_square=square,
            to_square="e5",
        )


@pytest.mark.parametrize("square", ["nonsense", "11", "aa", "j1", "a0"])
def test_invalid_to_square(mock_id: UUID, square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(
            game_id=mock_id,
            player_name="bladiblidiboo",
            from_square="e4",
            to_square=square,
        )


def test_history_request(mock_id: UUID) -> None:
    assert HistoryRequest(game_id=mock_id, step=3).step == 3
