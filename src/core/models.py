"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
SideName = str
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a dama game used between API, Service, DB, and Game layers.

    Positions use the state notation of src/dama/notation.py, moves the move notation of src/dama/moves.py.
    The current position is redundant with (starting position + moves); it is kept so stored records can be checked by replaying.
    """

    starting_position: str
    current_position: str
    moves: list[str]
    registered_players: dict[SideName, PlayerName]
    status: str
    winner: Optional[str] = None
    difficulty: Optional[str] = None
    computer_side: Optional[SideName] = None
