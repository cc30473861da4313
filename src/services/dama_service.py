"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    ComputerMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DrawRequest,
    GameResponse,
    GetGameRequest,
    HistoryRequest,
    HistoryResponse,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ResignRequest,
    TimeOutRequest,
)
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Side, Status
from src.dama.game import Game
from src.dama.notation import state_to_notation
from src.dama.square import Square
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class DamaService:
    """Orchestration of layers for dama game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (against another player, or the computer if a difficulty is given)."""
        new_game = Game.new_game(
            player=request.player_name,
            side=request.side,
            starting_side=request.starting_side,
            starting_position=request.starting_position,
            difficulty=request.difficulty,
        )
        # The computer may have the first move, a capture chain included
        self._play_computer_turn(new_game)

        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""
        game = self._load_game(request.game_id)
        game.register_player(request.player_name)
        return self._store(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        side = self._assert_your_turn(game, request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            side=side,
            legal_moves=[move.to_notation() for move in game.legal_moves()],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.
        ---
        The game itself silently ignores illegal moves. Here that becomes an IllegalMoveError so the user gets told.
        In a game against the computer, the computer answers right away (until it is the player's turn again).
        """
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        self._assert_your_turn(game, request.player_name)

        from_square = Square.from_notation(request.from_square)
        to_square = Square.from_notation(request.to_square)
        if not game.submit_move(from_square, to_square):
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square} -> {request.to_square}"
            )

        self._play_computer_turn(game)
        return self._store(request.game_id, game)

    def computer_move(self, request: ComputerMoveRequest) -> GameResponse:
        """Ask the computer opponent to play its turn (used when a client plays the computer's moves out one by one)."""
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        if not game.is_computer_turn:
            raise NotYourTurnError("It is not the computer's turn.")
        game.computer_move()
        return self._store(request.game_id, game)

    def resign(self, request: ResignRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        side = game.player_side(request.player_name)
        if side is None:
            raise GameStateError(f"{request.player_name} does not play in this game.")
        if not game.resign(side):
            raise GameStateError("Game is already finished.")
        return self._store(request.game_id, game)

    def time_out(self, request: TimeOutRequest) -> GameResponse:
        """The turn timer (kept by the client / session) ran out for the side to move."""
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        game.time_out()
        return self._store(request.game_id, game)

    def agree_draw(self, request: DrawRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        self._assert_in_progress(game)
        game.agree_draw()
        return self._store(request.game_id, game)

    def history_position(self, request: HistoryRequest) -> HistoryResponse:
        """Position after a given number of moves, for browsing through a game."""
        game = self._load_game(request.game_id)
        return HistoryResponse(
            game_id=request.game_id,
            step=request.step,
            position=state_to_notation(game.replay_to(request.step)),
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            players=model.registered_players,
            status=model.status,
            position=model.current_position,
            starting_position=model.starting_position,
            move_history=model.moves,
            winner=model.winner,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        """Fetch + rebuild the Game (replaying its history, which also validates the stored record)."""
        return Game.from_model(self._fetch_game(game_id))

    def _store(self, game_id: UUID, game: Game) -> GameResponse:
        model = game.to_model()
        self.repo.update_game(game_id, model)
        return self._create_game_response(game_id, model)

    def _play_computer_turn(self, game: Game) -> None:
        """The computer keeps moving until a human is to move again (a capture chain is several moves)."""
        while game.is_computer_turn:
            if game.computer_move() is None:
                break

    def _assert_in_progress(self, game: Game) -> None:
        if game.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {game.status}")

    def _assert_your_turn(self, game: Game, player: str) -> Side:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = game.players.get(game.turn)
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {player_to_move or 'the computer'} to make a move first."
            )
        return game.turn
