"""Self-play referee: deals a seeded game and lets one engine per seat play it."""

import json
import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .cards import Card, all_identities
from .config import GameConfig
from .errors import ConfigurationError
from .player import Player
from .utils import card_to_str, check_deck_exhausted, check_final_round

logger = logging.getLogger(__name__)


@dataclass
class TableState:
    """The true table, which only the referee sees."""

    # True identity of every card, indexed by order
    identities: list[Card]
    deck: list[int]
    hands: list[list[int]]
    piles: list[int]
    clues: int
    strikes: int = 0
    score: int = 0
    turn: int = 0
    current_player: int = 0
    discard_pile: list[int] = field(default_factory=list)
    # Orders successfully played, in play order
    played: list[int] = field(default_factory=list)
    final_round_turns: Optional[int] = None
    is_complete: bool = False
    game_over_reason: Optional[str] = None


class HanabiGame:
    def __init__(self, players: Union[int, Sequence[str]] = 2, seed: int = 0, max_turns: int = 200):
        if max_turns <= 0:
            raise ConfigurationError("max_turns must be positive")
        self.config = GameConfig.setup(players)
        self.seed = seed
        self.max_turns = max_turns
        self.players = [Player(i, self.config) for i in range(self.config.num_players)]
        self.state = self._initialize_game(seed)

    def _initialize_game(self, seed: int) -> TableState:
        """Create a fresh table from a seed.

        Builds and shuffles the deck, then deals hands one card at a time
        to each player in turn. Every seat's engine sees each draw.
        """
        rng = random.Random(seed)

        identities = [
            card
            for card in all_identities(self.config.num_suits, self.config.rank_counts)
            for _ in range(self.config.rank_counts[card.rank])
        ]
        rng.shuffle(identities)

        state = TableState(
            identities=identities,
            deck=list(range(len(identities))),
            hands=[[] for _ in range(self.config.num_players)],
            piles=[0] * self.config.num_suits,
            clues=self.config.max_clue_tokens,
        )
        self.state = state
        for _ in range(self.config.hand_size):
            for player in range(self.config.num_players):
                self.draw(player)
        return state

    def draw(self, player: int) -> None:
        """Deal the top card to ``player`` if any remain."""
        state = self.state
        if not state.deck:
            return
        order = state.deck.pop(0)
        state.hands[player].insert(0, order)
        card = state.identities[order]
        for seat in self.players:
            seat.observe_draw(player, order, card)
        state.final_round_turns = check_deck_exhausted(
            state.final_round_turns, len(state.deck), self.config.num_players
        )

    def broadcast_play(self, player: int, order: int, card: Card) -> None:
        for seat in self.players:
            seat.engine.play_card(player, order, card.suit, card.rank)

    def broadcast_discard(self, player: int, order: int, card: Card) -> None:
        for seat in self.players:
            seat.engine.discard_card(player, order, card.suit, card.rank)

    def broadcast_clue(self, giver: int, target: int, clue_suit: int, clue_rank: int, touched: list[int]) -> None:
        # Every other seat saw these cards drawn; the receiver learns only the clued part.
        for seat in self.players:
            seat.engine.give_clue(giver, target, clue_suit, clue_rank, touched)

    def step(self) -> str:
        """Play one turn for the current player.

        Returns:
            Feedback message describing the action result.
        """
        state = self.state
        player_id = state.current_player
        feedback = self.players[player_id].take_turn(self)
        state.turn += 1
        logger.info("turn %d: %s %s", state.turn, self.config.player_names[player_id], feedback)

        if state.is_complete:
            state.game_over_reason = "Game complete"
        else:
            state.final_round_turns, ended = check_final_round(state.final_round_turns)
            if ended:
                state.is_complete = True
                state.game_over_reason = "Final round complete"
            elif state.turn >= self.max_turns:
                state.is_complete = True
                state.game_over_reason = "Max turns reached"

        state.current_player = (player_id + 1) % self.config.num_players
        return feedback

    def play(self) -> int:
        """Run the game to completion and return the final score."""
        while not self.state.is_complete:
            self.step()
        logger.info(
            "game over after %d turns (%s): score %d, strikes %d",
            self.state.turn,
            self.state.game_over_reason,
            self.state.score,
            self.state.strikes,
        )
        return self.state.score

    def get_observation(self, player_id: int) -> str:
        """Generate observation text from a player's perspective.

        Args:
            player_id: ID of the player whose perspective to generate.

        Returns:
            Game state JSON with this player's own hand shown as its engine knows it.
        """
        state = self.state
        engine = self.players[player_id].engine

        # Own hand (with clue information)
        hands = {f"player_{player_id}": [engine.card_string(order) for order in state.hands[player_id]]}

        # Other players' hands (fully visible)
        for player_idx, hand in enumerate(state.hands):
            if player_idx != player_id:
                hands[f"player_{player_idx}"] = [card_to_str(state.identities[order], self.config) for order in hand]

        game_state: dict = {
            "clue_tokens": state.clues,
            "strikes": state.strikes,
            "deck_count": len(state.deck),
            "piles": {suit: state.piles[i] for i, suit in enumerate(self.config.suits)},
            "score": state.score,
            "discards": [card_to_str(state.identities[order], self.config) for order in state.discard_pile],
            "hands": hands,
        }

        if state.is_complete:
            game_state["game_over"] = True
            if state.game_over_reason:
                game_state["game_over_reason"] = state.game_over_reason

        return json.dumps(game_state, indent=2)


def play_game(players: Union[int, Sequence[str]] = 2, seed: int = 0) -> int:
    """Play one seeded self-play game and return its score."""
    return HanabiGame(players, seed).play()
