from .cards import Card, CardValue
from .config import CONFIG, GameConfig
from .engine import HanabiEngine
from .errors import ConfigurationError, DeckDesyncError, EngineError, IllegalMoveError, NoActionError
from .events import apply_game_action, apply_game_action_list
from .game import HanabiGame, play_game

__all__ = [
    "CONFIG",
    "Card",
    "CardValue",
    "ConfigurationError",
    "DeckDesyncError",
    "EngineError",
    "GameConfig",
    "HanabiEngine",
    "HanabiGame",
    "IllegalMoveError",
    "NoActionError",
    "apply_game_action",
    "apply_game_action_list",
    "play_game",
]
