"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the authoritative GameState of one session and orchestrates everything required to play a turn:
validating and applying moves, asking the computer opponent for a move, and recording outcomes decided outside the rules.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.ai.search import SearchEngine
from src.core.config import DEFAULT_DIFFICULTY
from src.core.exceptions import GameStateError, ReplayMismatchError
from src.core.models import GameModel
from src.core.shared_types import Difficulty, Side, Status, Winner
from src.dama.moves import Move, legal_moves, parse_move_notation, sorted_moves
from src.dama.notation import same_position, state_from_notation, state_to_notation
from src.dama.square import Square
from src.dama.state import GameState
from src.dama.transition import apply_move, declare_winner, replay

logger = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    initial: GameState
    state: GameState
    players: dict[Side, str] = field(default_factory=dict)
    status: Status = Status.WAITING_FOR_PLAYERS
    computer_side: Optional[Side] = None
    difficulty: Optional[Difficulty] = None

    @classmethod
    def new_game(
        cls,
        player: str,
        side: Side,
        starting_side: Side = Side.BLACK,
        starting_position: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> Self:
        """
        Start a new game with the player using the pieces of the indicated side.
        ---
        With a difficulty, the computer takes the other side and the game starts right away.
        Otherwise it waits for a second player to join.

        A starting position carries its own side to move, which takes precedence over `starting_side`.
        """
        initial = (
            state_from_notation(starting_position)
            if starting_position
            else GameState.initial(starting_side)
        )
        game = cls(initial=initial, state=initial, players={side: player})
        if difficulty is not None:
            game.computer_side = side.opponent
            game.difficulty = difficulty
            game._change_status(Status.IN_PROGRESS)
        logger.info("New game: %s plays %s (computer: %s)", player, side, difficulty)
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """
        Define how to construct a Game from the information the Service layer actually has
        ---
        The stored move list is replayed from the starting position. If that does not reproduce the stored
        current position, the record is inconsistent and we refuse to load it.
        """
        initial = state_from_notation(model.starting_position)
        state = initial
        for notation in model.moves:
            from_square, to_square = parse_move_notation(notation)
            next_state = apply_move(state, from_square, to_square)
            if next_state is state:
                raise ReplayMismatchError(
                    f"Stored move {notation!r} is not legal in the replayed position."
                )
            state = next_state

        stored = state_from_notation(model.current_position)
        if not same_position(state, stored):
            logger.error(
                "Replay of %d moves does not reproduce stored position %r",
                len(model.moves),
                model.current_position,
            )
            raise ReplayMismatchError(
                f"Replaying the move history gives {state_to_notation(state)!r}, stored: {model.current_position!r}"
            )

        if model.winner is not None and not state.is_over:
            state = declare_winner(state, Winner(model.winner))

        return cls(
            initial=initial,
            state=state,
            players={Side(side): name for side, name in model.registered_players.items()},
            status=Status(model.status),
            computer_side=Side(model.computer_side) if model.computer_side else None,
            difficulty=Difficulty(model.difficulty) if model.difficulty else None,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            starting_position=state_to_notation(self.initial),
            current_position=state_to_notation(self.state),
            moves=[move.to_notation() for move in self.state.history],
            registered_players={side.value: name for side, name in self.players.items()},
            status=self.status.value,
            winner=self.state.winner.value if self.state.winner else None,
            difficulty=self.difficulty.value if self.difficulty else None,
            computer_side=self.computer_side.value if self.computer_side else None,
        )

    @property
    def turn(self) -> Side:
        return self.state.turn

    @property
    def winner(self) -> Optional[Winner]:
        return self.state.winner

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def is_computer_turn(self) -> bool:
        return not self.is_over and self.computer_side == self.state.turn

    def register_player(self, player: str) -> Side:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )

        opponent_side = next(iter(self.players))
        player_side = opponent_side.opponent
        self.players[player_side] = player
        self._change_status(Status.IN_PROGRESS)
        return player_side

    def player_side(self, player: str) -> Optional[Side]:
        return next((side for side, name in self.players.items() if name == player), None)

    def legal_moves(self) -> list[Move]:
        """Legal moves of the side to move (empty once the game is over)"""
        return sorted_moves(legal_moves(self.state))

    def submit_move(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move
        -----
        Returns False (and leaves the game untouched) if the move is not legal right now.
        After an accepted move the game may be over: all enemy pieces captured, or the side to move is left without any move.
        """
        if self.status != Status.IN_PROGRESS:
            logger.debug("Move rejected, game is not in progress (status: %s)", self.status)
            return False

        next_state = apply_move(self.state, from_square, to_square)
        if next_state is self.state:
            return False

        self.state = next_state
        self._update_game_status()
        return True

    def computer_move(self) -> Optional[Move]:
        """
        Let the search engine play for the side to move.
        ---
        When the engine finds no move the side to move has lost (there is no stalemate draw in this game).
        """
        if self.status != Status.IN_PROGRESS or self.is_over:
            return None

        engine = SearchEngine.for_difficulty(self.difficulty or DEFAULT_DIFFICULTY)
        move = engine.search(self.state)
        if move is None:
            self._finish(Winner.of(self.state.turn.opponent))
            return None

        self.submit_move(move.from_square, move.to_square)
        return move

    def replay_to(self, step: int) -> GameState:
        """Position after the first `step` moves (read-only history browsing). Out of range steps are clamped."""
        history = self.state.history
        step = max(0, min(step, len(history)))
        return replay(self.initial, history[:step])

    # -- OUTCOMES DECIDED OUTSIDE THE RULES ---
    def resign(self, side: Side) -> bool:
        return self._finish(Winner.of(side.opponent))

    def time_out(self) -> bool:
        """The side to move ran out of time"""
        return self._finish(Winner.of(self.state.turn.opponent))

    def agree_draw(self) -> bool:
        return self._finish(Winner.DRAW)

    # -- PRIVATE HELPERS ---
    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly."""
        if not self.state.is_over and not legal_moves(self.state):
            logger.info("%s has no legal move left", self.state.turn)
            self.state = declare_winner(self.state, Winner.of(self.state.turn.opponent))

        if self.state.is_over:
            logger.info("Game finished, winner: %s", self.state.winner)
            self._change_status(Status.FINISHED)

    def _finish(self, winner: Winner) -> bool:
        if self.is_over:
            return False
        self.state = declare_winner(self.state, winner)
        self._update_game_status()
        return True

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
