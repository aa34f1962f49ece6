"""Card valuation and clue-driven narrowing of possibility sets.

Possibility sets only ever shrink: every function here filters
``CardKnowledge.possible`` and never adds to it.
"""

from typing import TYPE_CHECKING

from .cards import Card, CardValue

if TYPE_CHECKING:
    from .state import GameState


def card_value(state: "GameState", order: int, card: Card, quick: bool = False) -> CardValue:
    """Classify how much ``card`` would matter as the identity of ``order``.

    Args:
        state: Current game state.
        order: The card whose clued status and neighbours are considered.
        card: The identity to evaluate (true or hypothetical).
        quick: Skip the two-save visibility scan over every hand.

    Returns:
        The card's value.
    """
    # We can't save cards we don't know about.
    if not card.known:
        return CardValue.UNKNOWN

    min_rank = state.pile_height(card.suit) + 1
    if card.rank < min_rank:
        return CardValue.TRASH
    max_rank = min_rank
    while max_rank < state.remain.shape[1] and state.remain[card.suit, max_rank] > 0:
        max_rank += 1
    if card.rank >= max_rank:
        return CardValue.TRASH

    if state.remain[card.suit, card.rank] == 1:
        return CardValue.critical(card.rank, state.config.max_rank)

    info = state.knowledge[order]
    if not info.clued and state.clued[card.suit, card.rank] > 0:
        return CardValue.DUPLICATE

    if not quick and card.rank == 2 and not state.visible_elsewhere(order, card):
        return CardValue.TWO_SAVE

    if info.clued or info.chop_moved:
        return CardValue.CLUED
    if card.rank == min_rank:
        return CardValue.PLAYABLE
    if card.rank == min_rank + 1:
        return CardValue.SOON
    return CardValue.EVENTUAL


def apply_direct_clue(state: "GameState", order: int, clue_suit: int, clue_rank: int, prev_known: bool) -> bool:
    """Filter one card's possibilities by a suit or rank clue.

    Touched cards keep only matching identities that are still worth at
    least EVENTUAL (unless the card was already clued before); untouched
    cards lose every matching identity.

    Returns:
        True if the card's true identity matches the clue.
    """
    card = state.cards[order]
    info = state.knowledge[order]

    if clue_rank >= 0:
        touched = card.rank == clue_rank

        def matches(candidate: Card) -> bool:
            return candidate.rank == clue_rank

    elif clue_suit >= 0:
        touched = card.suit == clue_suit

        def matches(candidate: Card) -> bool:
            return candidate.suit == clue_suit

    else:
        return False

    if touched:
        info.possible = tuple(
            candidate
            for candidate in info.possible
            if matches(candidate)
            and (prev_known or card_value(state, order, candidate, quick=True) >= CardValue.EVENTUAL)
        )
    else:
        info.possible = tuple(candidate for candidate in info.possible if not matches(candidate))
    return touched


def all_playable(state: "GameState", order: int) -> bool:
    """Whether every remaining possibility for the card is playable right now."""
    possible = state.knowledge[order].possible
    return bool(possible) and all(state.playable(candidate) for candidate in possible)
