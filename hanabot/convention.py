"""H-group level 1 clue interpretation.

A clue has a single focus. When the recipient's chop is newly touched the
clue may be a save, otherwise it is a play clue on the focus card: playable
now, or after the chain of already clued cards above the pile is played.
"""

import logging
from typing import TYPE_CHECKING

from .cards import Card, CardValue
from .inference import apply_direct_clue, card_value

if TYPE_CHECKING:
    from .state import CardKnowledge, GameState

logger = logging.getLogger(__name__)


def select_focus(chop: int, newly_clued: list[int], touched: list[int]) -> tuple[int, bool]:
    """Pick the hand index carrying the clue's meaning.

    Returns:
        The focus index (-1 if nothing was touched) and whether the clue is a protect.
    """
    if chop in newly_clued:
        return chop, True
    if newly_clued:
        return newly_clued[0], False
    if touched:
        return touched[0], False
    return -1, False


def narrow_focus(state: "GameState", order: int, clue_suit: int, clue_rank: int, protect: bool) -> None:
    """Keep only identities the clue giver could have meant for the focus card."""
    max_rank = state.reachable_ranks()
    top_rank = state.config.max_rank
    info = state.knowledge[order]

    def meant(candidate: Card) -> bool:
        if protect:
            if candidate.rank == top_rank:
                # 5s can only be saved by rank clues.
                if clue_rank == top_rank:
                    return True
            else:
                value = card_value(state, order, candidate)
                if value == CardValue.TWO_SAVE:
                    # 2 saves can only be done by rank.
                    if clue_rank == 2:
                        return True
                elif value > CardValue.IMPORTANT:
                    return True
        min_rank = state.pile_height(candidate.suit) + 1
        return min_rank <= candidate.rank <= max_rank[candidate.suit]

    info.possible = tuple(candidate for candidate in info.possible if meant(candidate))


def apply_clue(
    state: "GameState",
    giver: int,
    target: int,
    clue_suit: int,
    clue_rank: int,
    previous: list["CardKnowledge"],
) -> list[Card]:
    """Update knowledge of ``target``'s hand for a clue from ``giver``.

    Args:
        state: Game state, mutated in place.
        giver: Player giving the clue.
        target: Player receiving the clue.
        clue_suit: Clued suit index, or -1 for a rank clue.
        clue_rank: Clued rank, or -1 for a suit clue.
        previous: Knowledge of each card in the target's hand before the clue.

    Returns:
        The identities added to the ``clued`` table, so they can be removed again.
    """
    hand = state.hands[target]
    chop = state.chop(target)
    counted: list[Card] = []
    newly_clued: list[int] = []
    touched: list[int] = []

    # The giver can't rely on clued cards only visible from their own hand.
    state.modify_clued_for(giver, -1)
    for index, order in enumerate(hand):
        prev_known = previous[index].clued
        was_touched = apply_direct_clue(state, order, clue_suit, clue_rank, prev_known)
        info = state.knowledge[order]
        info.clued = info.clued or was_touched
        if not was_touched:
            continue
        touched.append(index)
        if not prev_known:
            card = state.assumed_card(order)
            if card.known:
                state.clued[card.suit, card.rank] += 1
                counted.append(card)
            newly_clued.append(index)

    focus, protect = select_focus(chop, newly_clued, touched)
    if focus != -1:
        narrow_focus(state, hand[focus], clue_suit, clue_rank, protect)
        logger.debug(
            "clue focus slot %d of player %d (%s): %d possibilities",
            focus,
            target,
            "protect" if protect else "play",
            len(state.knowledge[hand[focus]].possible),
        )
    state.modify_clued_for(giver, 1)
    return counted
