"""
Custom exceptions.

The rules engine itself reports illegal moves with booleans / empty sets.
These exceptions are raised at the boundaries (service + request models), or for
configuration mistakes that should never occur during normal play.
"""


class GameError(Exception):
    """Base class: catch this one to handle anything the chess package raises on purpose."""


class GameStateError(GameError):
    """Request does not fit the current state of the game (no game started, game already over, ...)"""


class NotYourTurnError(GameError):
    """The piece that should move belongs to the player that is waiting."""


class IllegalMoveError(GameError):
    """The rules do not allow this move."""


class InvalidFENError(GameError):
    """Cannot interpret a string as (the piece placement part of) FEN."""


class InvalidConfigurationError(GameError):
    """Components were wired in the wrong order, e.g. a checkmate detector without kings."""


class InvalidRequestError(GameError):
    """Request models failed validation.

    NOTE: not a ValueError, so pydantic lets it propagate unchanged out of a validator.
    """
