"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidNotationError, InvalidRequestError
from src.core.shared_types import Difficulty, Side
from src.dama.notation import is_valid_state_notation
from src.dama.square import Square

SideName = str
PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    side: Side
    starting_side: Side = Side.BLACK
    # carries its own side to move; `starting_side` is not used with it
    starting_position: Optional[str] = None
    difficulty: Optional[Difficulty] = None

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not is_valid_state_notation(value):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a position.")
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        try:
            Square.from_notation(value)
        except InvalidNotationError as e:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            ) from e
        return value.strip().lower()


class ComputerMoveRequest(BaseModel):
    game_id: UUID


class ResignRequest(BaseModel):
    game_id: UUID
    player_name: str


class TimeOutRequest(BaseModel):
    game_id: UUID


class DrawRequest(BaseModel):
    """Both players accepted a draw (the offer / accept exchange happens outside of the game)."""

    game_id: UUID


class HistoryRequest(BaseModel):
    game_id: UUID
    step: int


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[SideName, PlayerName]
    status: str
    position: str
    starting_position: str
    move_history: list[str]
    winner: Optional[str] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    side: Side
    legal_moves: list[str]


class HistoryResponse(BaseModel):
    game_id: UUID
    step: int
    position: str
