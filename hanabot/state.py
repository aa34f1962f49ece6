from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .cards import UNKNOWN_CARD, Card, all_identities
from .config import GameConfig
from .errors import DeckDesyncError


@dataclass(frozen=True)
class PlayAnnotation:
    """Bookkeeping for a constructed play (finesse chains)."""

    # The player who set up this play.
    source: int
    # The next card to be played after this, e.g. a finesse.
    next: Optional[int] = None
    # The cards to consider if this isn't the right one, e.g. a layered finesse.
    backup: tuple[int, ...] = ()


@dataclass
class CardKnowledge:
    """What is publicly known about one card."""

    possible: tuple[Card, ...]
    clued: bool = False
    chop_moved: bool = False
    play: Optional[PlayAnnotation] = None

    def copy(self) -> "CardKnowledge":
        return replace(self)


class GameState:
    """The authoritative record of one game as seen by one engine.

    Cards are addressed by their order number. The deck, hands, discard and
    piles hold order numbers and together partition every card in the game.
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.suits = config.suits

        identities = all_identities(config.num_suits, config.rank_counts)
        num_cards = config.deck_size

        # deck[0] is the next card drawn
        self.deck: list[int] = list(range(num_cards))
        self.hands: list[list[int]] = [[] for _ in range(config.num_players)]
        self.discard: list[int] = []
        self.piles: list[list[int]] = [[] for _ in range(config.num_suits)]

        self.cards: list[Card] = [UNKNOWN_CARD] * num_cards
        self.knowledge: list[CardKnowledge] = [CardKnowledge(possible=identities) for _ in range(num_cards)]

        # Count tables indexed [suit, rank]; the extra trailing rank stays 0 so upward scans stop
        width = config.max_rank + 2
        self.remain = np.zeros((config.num_suits, width), dtype=np.int64)
        self.remain[:, : len(config.rank_counts)] = config.rank_counts
        self.clued = np.zeros((config.num_suits, width), dtype=np.int64)

        self.clues = config.max_clue_tokens
        self.faults = 0
        self.turn = 0
        self.score = 0
        self.lost_cards = 0

    @property
    def num_players(self) -> int:
        return len(self.hands)

    def pile_height(self, suit: int) -> int:
        return len(self.piles[suit])

    def playable(self, card: Card) -> bool:
        return card.rank == self.pile_height(card.suit) + 1

    def chop(self, player: int) -> int:
        """Index of the rightmost card not yet clued or chop moved, or -1."""
        hand = self.hands[player]
        for index in range(len(hand) - 1, -1, -1):
            info = self.knowledge[hand[index]]
            if not (info.clued or info.chop_moved):
                return index
        return -1

    def assumed_card(self, order: int) -> Card:
        """The true identity if known, else the only remaining possibility, else unknown."""
        card = self.cards[order]
        if card.known:
            return card
        possible = self.knowledge[order].possible
        if len(possible) == 1:
            return possible[0]
        return UNKNOWN_CARD

    def reachable_ranks(self) -> list[int]:
        """Per suit, the first rank above the pile not covered by a chain of clued cards."""
        result = []
        for suit in range(len(self.piles)):
            rank = self.pile_height(suit) + 1
            while rank < self.clued.shape[1] and self.clued[suit, rank] > 0:
                rank += 1
            result.append(rank)
        return result

    def modify_clued_for(self, player: int, direction: int) -> None:
        """Add or remove the giver's clued cards that the giver could not know for sure."""
        for order in self.hands[player]:
            card = self.cards[order]
            info = self.knowledge[order]
            if info.clued and card.known and len(info.possible) != 1:
                self.clued[card.suit, card.rank] += direction

    def visible_elsewhere(self, order: int, card: Card) -> bool:
        """Whether another card in any hand has this true identity."""
        return any(other != order and self.cards[other] == card for hand in self.hands for other in hand)

    def deck_index(self, order: int) -> int:
        try:
            return self.deck.index(order)
        except ValueError:
            raise DeckDesyncError(f"Requested card #{order} not in deck.") from None

    def hand_index(self, player: int, order: int) -> int:
        try:
            return self.hands[player].index(order)
        except ValueError:
            raise DeckDesyncError(f"Requested card #{order} not in hand of player {player}.") from None

    def stamp(self, order: int, suit: int = -1, rank: int = -1) -> None:
        """Record whatever part of a card's true identity has been revealed."""
        card = self.cards[order]
        self.cards[order] = Card(suit if suit >= 0 else card.suit, rank if rank >= 0 else card.rank)

    def snapshot(self) -> tuple:
        """A hashable copy of everything the actions can change."""
        return (
            tuple(self.deck),
            tuple(tuple(hand) for hand in self.hands),
            tuple(self.discard),
            tuple(tuple(pile) for pile in self.piles),
            tuple(self.cards),
            tuple((k.possible, k.clued, k.chop_moved, k.play) for k in self.knowledge),
            self.remain.tobytes(),
            self.clued.tobytes(),
            self.clues,
            self.faults,
            self.turn,
            self.score,
            self.lost_cards,
        )
