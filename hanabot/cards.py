from enum import IntEnum
from typing import NamedTuple


class Card(NamedTuple):
    """A card identity. Either component is -1 while unknown."""

    suit: int
    rank: int

    @property
    def known(self) -> bool:
        return self.suit >= 0 and self.rank >= 0


UNKNOWN_CARD = Card(-1, -1)


class CardValue(IntEnum):
    """How much a card matters, lowest first.

    Lower critical ranks are worth more than a critical 5: losing a critical 1
    costs every card above it as well.
    """

    TRASH = 0  # No longer playable.
    DUPLICATE = 1  # Duplicate of a clued card.
    UNKNOWN = 2  # Identity not resolved.
    EVENTUAL = 3  # Eventually playable.
    SOON = 4  # One away from playable.
    PLAYABLE = 5  # Currently playable.
    CLUED = 6  # Already clued or chop moved.

    IMPORTANT = 7  # Threshold: anything above must be saved.
    TWO_SAVE = 8  # A 2 with no other copy visible in any hand.
    CRITICAL_5 = 9
    CRITICAL_4 = 10
    CRITICAL_3 = 11
    CRITICAL_2 = 12
    CRITICAL_1 = 13

    @classmethod
    def critical(cls, rank: int, max_rank: int = 5) -> "CardValue":
        return cls(cls.CRITICAL_5 + (max_rank - rank))


def all_identities(num_suits: int, rank_counts: tuple[int, ...]) -> tuple[Card, ...]:
    """Every identity that appears in the deck, suit-major."""
    return tuple(
        Card(suit, rank)
        for suit in range(num_suits)
        for rank in range(1, len(rank_counts))
        if rank_counts[rank] > 0
    )
