"""One round of pessimistic lookahead over candidate actions.

Each candidate is played out for every identity its card could still have;
the worst of those outcomes is the candidate's score and the best-scoring
candidate wins.
"""

import logging
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Optional

import numpy as np

from . import actions
from .actions import ReversibleAction
from .cards import CardValue
from .errors import NoActionError
from .inference import all_playable, card_value

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)

# Heuristic weights applied by score()
WEIGHTS = {
    "score": 10,
    "lost_cards": -30,
    "faults": -50,
    "clues": 2,
    "bad_touch": -15,
    "reachable": 5,
    "eventual": 3,
}


@dataclass(frozen=True)
class ClueStats:
    score: int
    clues: int
    faults: int
    lost_cards: int
    bad_touch: int = 0
    reachable: int = 0
    eventual: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class Outcome:
    stats: ClueStats
    action: Optional[ReversibleAction] = None
    # Which of the action's outcomes produced ``stats``
    resolution: int = 0
    next: Optional["Outcome"] = None


def score(stats: ClueStats) -> int:
    return sum(weight * getattr(stats, name) for name, weight in WEIGHTS.items())


def clue_stats(state: "GameState") -> ClueStats:
    """Summarize the position: counters plus how well the clued cards are placed."""
    bad_touch = reachable = eventual = 0
    max_rank = state.reachable_ranks()
    seen = np.zeros_like(state.clued)

    for hand in state.hands:
        for order in hand:
            card = state.assumed_card(order)
            if not card.known:
                continue
            info = state.knowledge[order]
            if not info.clued and info.play is None:
                continue

            # For known cards, count how many will result in misplays.
            seen[card.suit, card.rank] += 1
            if seen[card.suit, card.rank] > 1:
                bad_touch += 1
                continue

            # For clued cards, are they reachable with current clued cards?
            if card.rank > max_rank[card.suit]:
                eventual += 1
            elif card.rank > state.pile_height(card.suit):
                reachable += 1
            elif info.possible:
                # Never playable, but the holder may still think it is.
                bad_touch += 1

    return ClueStats(
        score=state.score,
        clues=state.clues,
        faults=state.faults,
        lost_cards=state.lost_cards,
        bad_touch=bad_touch,
        reachable=reachable,
        eventual=eventual,
    )


def _protect_clues(state: "GameState", player: int) -> list[ReversibleAction]:
    result = []
    num_players = state.num_players
    for offset in range(1, num_players):
        other = (player + offset) % num_players
        chop = state.chop(other)
        if chop == -1:
            continue
        order = state.hands[other][chop]
        card = state.cards[order]
        value = card_value(state, order, card)
        if value >= CardValue.IMPORTANT:
            # We've discovered an important card, consider protect actions.
            result.append(actions.clue(state, player, other, clue_rank=card.rank))
            if value > CardValue.CRITICAL_5:
                result.append(actions.clue(state, player, other, clue_suit=card.suit))
    return result


def _play_clues(state: "GameState", player: int) -> list[ReversibleAction]:
    # TODO: finesses, bluffs and layered finesses are not generated yet.
    result = []
    for other, hand in enumerate(state.hands):
        if other == player:
            continue
        first_of_rank: dict[int, int] = {}
        first_of_suit: dict[int, int] = {}
        chop = state.chop(other)
        if chop >= 0:
            order = hand[chop]
            chop_card = state.cards[order]
            if chop_card.rank >= 0:
                first_of_rank[chop_card.rank] = order
            if chop_card.suit >= 0:
                first_of_suit[chop_card.suit] = order

        for order in hand:
            card = state.cards[order]
            if not card.known:
                continue
            info = state.knowledge[order]
            # For now, only consider unclued cards.
            if info.clued:
                continue
            first_of_rank.setdefault(card.rank, order)
            first_of_suit.setdefault(card.suit, order)
            if info.play is not None:
                continue
            if state.playable(card) and not state.clued[card.suit, card.rank]:
                if first_of_rank[card.rank] == order:
                    result.append(actions.clue(state, player, other, clue_rank=card.rank))
                if first_of_suit[card.suit] == order:
                    result.append(actions.clue(state, player, other, clue_suit=card.suit))
    return result


def candidate_actions(state: "GameState", player: int) -> list[ReversibleAction]:
    """Actions worth searching for ``player``: protects, play clues, plays, then the chop discard."""
    result: list[ReversibleAction] = []
    hand = state.hands[player]

    if state.clues > 0:
        result.extend(_protect_clues(state, player))
        result.extend(_play_clues(state, player))

    for index, order in enumerate(hand):
        if all_playable(state, order):
            result.append(actions.play_index(state, player, index))

    if hand:
        chop = state.chop(player)
        if chop == -1:
            chop = len(hand) - 1
        result.append(actions.discard_index(state, player, chop))
    return result


def best_outcome(state: "GameState", player: int, depth: int) -> Outcome:
    """Search ``depth`` turns starting with ``player``.

    Args:
        state: Game state; every simulated action is undone before returning.
        player: The player to move.
        depth: Remaining turns to simulate.

    Returns:
        The best candidate's worst-case outcome.
    """
    if depth == 0:
        return Outcome(clue_stats(state))

    next_player = (player + 1) % state.num_players
    best: Optional[Outcome] = None
    for action in candidate_actions(state, player):
        # Find the worst result of the possible outcomes of this action.
        worst: Optional[Outcome] = None
        for resolution in range(action.count(state)):
            action.play_chain(state, resolution)
            try:
                result = best_outcome(state, next_player, depth - 1)
            finally:
                action.undo_chain(state, resolution)
            if worst is None or score(result.stats) < score(worst.stats):
                worst = Outcome(result.stats, action, resolution, result)

        # If the worst outcome is better than the current best, store it.
        if worst is not None and (best is None or score(worst.stats) > score(best.stats)):
            best = worst

    if best is None:
        raise NoActionError(f"No action for player {player}")
    return best
