"""Utility functions for card text and end-of-game bookkeeping."""

from typing import TYPE_CHECKING, Optional

from .cards import Card
from .config import CONFIG

if TYPE_CHECKING:
    from .config import GameConfig


def card_to_str(card: Optional[Card], config: "GameConfig | None" = None) -> str:
    """Convert a card to a human-readable string (e.g., 'R1', 'G5', '?3').

    Args:
        card: Card identity, possibly partially known, or None for an empty slot.
        config: Game configuration (uses default if not provided).

    Returns:
        Card string like 'R1', '??' for unknown cards, or '--' for empty slots.
    """
    if card is None:
        return "--"
    if config is None:
        config = CONFIG
    suit = "?" if card.suit < 0 else config.suits[card.suit]
    rank = "?" if card.rank < 0 else str(card.rank)
    return f"{suit}{rank}"


def parse_card(text: str, config: "GameConfig | None" = None) -> tuple[Card, bool]:
    """Parse a card string such as 'R1', '??' or '?5*'.

    A trailing '*' marks a card that has already been clued.

    Returns:
        The (possibly partially unknown) card and whether it is clued.
    """
    if config is None:
        config = CONFIG
    clued = text.endswith("*")
    body = text.rstrip("*")
    if len(body) != 2:
        raise ValueError(f"Invalid card string '{text}'")
    suit = -1 if body[0] == "?" else config.suits.index(body[0])
    rank = -1 if body[1] == "?" else int(body[1])
    return Card(suit, rank), clued


def check_deck_exhausted(final_round_turns: Optional[int], deck_size: int, num_players: int) -> Optional[int]:
    """Start the final round once the deck runs out.

    When the deck runs out, each player gets one last turn before the game ends.

    Returns:
        The (possibly newly started) final round counter.
    """
    if final_round_turns is None and deck_size == 0:
        return num_players
    return final_round_turns


def check_final_round(final_round_turns: Optional[int]) -> tuple[Optional[int], bool]:
    """Decrement final round counter and check if game should end.

    Returns:
        The updated counter and True if the final round is complete.
    """
    if final_round_turns is not None:
        final_round_turns -= 1
        return final_round_turns, final_round_turns <= 0
    return None, False
