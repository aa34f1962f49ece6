"""Typed failures raised by the engine.

Each one means the model and the table disagree or the setup is unusable,
so nothing in the package tries to recover from them.
"""


class EngineError(Exception):
    """Base class for all engine failures."""


class ConfigurationError(EngineError, ValueError):
    """Unsupported setup: unknown variant, too many players for the default names, etc."""


class DeckDesyncError(EngineError, LookupError):
    """An event referenced a card the model does not have where the event says it is."""


class NoActionError(EngineError, RuntimeError):
    """The search found no candidate action for the player to move."""


class IllegalMoveError(EngineError, ValueError):
    """The self-play referee rejected a command."""
