"""
Play a game of dama against the computer in the terminal.

Usage:
    python -m src.main --side black --difficulty easy
    python -m src.main --side white --difficulty hard --position "<state notation>"

Moves are typed in move notation ("e4-e5", "c3xc5"), "resign" ends the game.
Games are stored in the database configured by DAMA_DATABASE_URL.
"""

import argparse
from typing import Callable, Optional, Sequence

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    LegalMovesRequest,
    MoveRequest,
    ResignRequest,
)
from src.core.config import DEFAULT_DIFFICULTY, LOG_LEVEL, configure_logging
from src.core.exceptions import GameError
from src.core.shared_types import Difficulty, Side, Status
from src.dama.moves import parse_move_notation
from src.dama.notation import state_from_notation
from src.dama.square import BOARD_SIZE, COLUMN_LETTERS, Square
from src.db.sql_repository import SQLGameRepository
from src.services.dama_service import DamaService

PLAYER_NAME = "player"
RESIGN = "resign"
EMPTY = "."


def render(position: str) -> str:
    """Text diagram of the board in a position, row 9 on top"""
    board = state_from_notation(position).board
    lines = []
    for row in range(BOARD_SIZE - 1, -1, -1):
        cells = []
        for col in range(BOARD_SIZE):
            piece = board.piece(Square(row, col))
            cells.append(piece.to_notation() if piece else EMPTY)
        lines.append(f"{row + 1} {' '.join(cells)}")
    lines.append(f"  {' '.join(COLUMN_LETTERS)}")
    return "\n".join(lines)


def play(
    service: DamaService,
    side: Side,
    difficulty: Difficulty,
    starting_position: Optional[str] = None,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> GameResponse:
    """Create a game against the computer and keep asking for moves until it is finished."""
    response = service.create_new_game(
        CreateGameRequest(
            player_name=PLAYER_NAME,
            side=side,
            starting_position=starting_position,
            difficulty=difficulty,
        )
    )
    game_id = response.game_id

    while response.status == Status.IN_PROGRESS:
        write(render(response.position))
        if response.move_history:
            write(f"last move: {response.move_history[-1]}")
        legal = service.legal_moves(LegalMovesRequest(game_id=game_id, player_name=PLAYER_NAME))
        write(f"your moves: {' '.join(legal.legal_moves)}")

        answer = read("> ").strip().lower()
        if answer == RESIGN:
            response = service.resign(ResignRequest(game_id=game_id, player_name=PLAYER_NAME))
            break

        try:
            from_square, to_square = parse_move_notation(answer)
            response = service.make_move(
                MoveRequest(
                    game_id=game_id,
                    player_name=PLAYER_NAME,
                    from_square=from_square.to_notation(),
                    to_square=to_square.to_notation(),
                )
            )
        except GameError as e:
            write(str(e))

    write(render(response.position))
    write(f"game over, winner: {response.winner}")
    return response


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play dama against the computer.")
    parser.add_argument("--side", type=Side, choices=list(Side), default=Side.BLACK)
    parser.add_argument(
        "--difficulty", type=Difficulty, choices=list(Difficulty), default=DEFAULT_DIFFICULTY
    )
    parser.add_argument("--position", default=None, help="starting position in state notation")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper())

    # the engine is created on import, from the configured database url
    from src.db.database import init_db, session_scope

    init_db()
    with session_scope() as db:
        try:
            play(DamaService(SQLGameRepository(db)), args.side, args.difficulty, args.position)
        except GameError as e:
            parser.error(str(e))


if __name__ == "__main__":
    main()
