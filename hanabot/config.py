from dataclasses import dataclass
from typing import Optional, Sequence, Union

from .errors import ConfigurationError

# Suit symbols in suit-index order, and the ranks of the standard game
SUITS = ("R", "Y", "G", "B", "P")
RANKS = (1, 2, 3, 4, 5)

DEFAULT_VARIANT = "No Variant"
SUPPORTED_VARIANTS = (DEFAULT_VARIANT,)
DEFAULT_PLAYER_NAMES = ("Alice", "Bob", "Cathy", "Donald")

MAX_CLUE_TOKENS = 8
MAX_STRIKES = 3


def _default_rank_counts(ranks: tuple[int, ...]) -> tuple[int, ...]:
    """Copies of each rank in one suit, indexed by rank (index 0 unused).

    Standard Hanabi distribution:
    - Lowest rank: 3 copies per suit
    - Middle ranks: 2 copies per suit
    - Highest rank: 1 copy per suit (irreplaceable!)

    For 5 ranks: (0, 3, 2, 2, 2, 1) = 10 cards per suit
    """
    counts = [0] * (max(ranks) + 1)
    for i, rank in enumerate(ranks):
        if i == 0:
            counts[rank] = 3
        elif i == len(ranks) - 1:
            counts[rank] = 1
        else:
            counts[rank] = 2
    return tuple(counts)


RANK_COUNTS = _default_rank_counts(RANKS)


@dataclass(frozen=True)
class GameConfig:
    player_names: tuple[str, ...] = DEFAULT_PLAYER_NAMES[:2]
    variant: str = DEFAULT_VARIANT
    table_id: int = 0
    suits: tuple[str, ...] = SUITS
    ranks: tuple[int, ...] = RANKS
    rank_counts: tuple[int, ...] = RANK_COUNTS
    max_clue_tokens: int = MAX_CLUE_TOKENS
    max_strikes: int = MAX_STRIKES

    def __post_init__(self) -> None:
        if self.variant not in SUPPORTED_VARIANTS:
            raise ConfigurationError(f"Unrecognized variant: {self.variant}")

        if len(self.player_names) < 2:
            raise ConfigurationError("Must have at least 2 players")

        # Tuples keep the config hashable when a caller passes a list of names
        object.__setattr__(self, "player_names", tuple(self.player_names))

    @classmethod
    def setup(
        cls,
        players: Union[int, Sequence[str]] = 2,
        variant: Optional[str] = None,
        table_id: Optional[int] = None,
    ) -> "GameConfig":
        """Build a config from the collaborator's setup values.

        Args:
            players: Number of players (named from DEFAULT_PLAYER_NAMES) or the list of names.
            variant: Variant name; only "No Variant" is supported.
            table_id: Opaque table identifier echoed back in every command.

        Returns:
            The validated configuration.
        """
        if isinstance(players, int):
            if players > len(DEFAULT_PLAYER_NAMES):
                raise ConfigurationError(
                    f"Asked for {players} players, please extend DEFAULT_PLAYER_NAMES."
                )
            names = DEFAULT_PLAYER_NAMES[:players]
        else:
            names = tuple(players)
        return cls(
            player_names=names,
            variant=variant or DEFAULT_VARIANT,
            table_id=table_id or 0,
        )

    @property
    def num_players(self) -> int:
        return len(self.player_names)

    @property
    def num_suits(self) -> int:
        return len(self.suits)

    @property
    def max_rank(self) -> int:
        return max(self.ranks)

    @property
    def deck_size(self) -> int:
        return self.num_suits * sum(self.rank_counts)

    @property
    def hand_size(self) -> int:
        return 5 if self.num_players <= 3 else 4

    @property
    def max_score(self) -> int:
        """Perfect score: all piles completed to max rank."""
        return self.num_suits * self.max_rank


# Default config (standard Hanabi, two players)
CONFIG = GameConfig()
