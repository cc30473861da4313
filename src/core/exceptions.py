"""
Exceptions raised at the boundaries of the domain layer.

NOTE: the rules engine itself (src/dama, src/ai) does not raise for illegal moves. It returns the unchanged state.
These are used by the layers that talk to users / storage.
"""


class GameError(Exception):
    """Root of all errors the application raises on purpose"""


class GameStateError(GameError):
    """Action not allowed given the status of the game (not started, already finished, etc.)"""


class NotYourTurnError(GameError):
    pass


class IllegalMoveError(GameError):
    pass


class InvalidNotationError(GameError):
    """Square, move or position notation that cannot be parsed"""


class InvalidRequestError(GameError):
    """Raised from pydantic validators. Not a ValueError, so pydantic lets it through instead of wrapping it."""


class RepositoryError(GameError):
    pass


class ReplayMismatchError(RepositoryError):
    """Replaying the stored move list does not reproduce the stored position"""

