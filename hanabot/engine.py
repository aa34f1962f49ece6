import json
import logging
from typing import Any, Optional, Sequence, Union

from . import actions
from .actions import DECK, PlayerActionType, ReversibleAction
from .cards import Card, CardValue
from .config import SUPPORTED_VARIANTS, GameConfig
from .inference import card_value
from .search import Outcome, best_outcome, score
from .state import GameState
from .utils import card_to_str

logger = logging.getLogger(__name__)


class HanabiEngine:
    """Decision engine for one seat at a Hanabi table.

    The network collaborator feeds observed events through the mutators
    (``draw_card``, ``give_clue``, ``play_card``, ``discard_card``) and asks
    ``action`` for a move when it is this engine's turn.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.state = GameState(self.config)

    @classmethod
    def from_setup(cls, setup: dict[str, Any]) -> "HanabiEngine":
        """Build an engine from a setup record: ``{"players", "variant", "tableID"}``."""
        players: Union[int, Sequence[str]] = setup.get("players", 2)
        return cls(GameConfig.setup(players, setup.get("variant"), setup.get("tableID")))

    def supported_variants(self) -> list[str]:
        return list(SUPPORTED_VARIANTS)

    def chop(self, player: int) -> int:
        return self.state.chop(player)

    def card_value(self, order: int, card: Optional[Card] = None) -> CardValue:
        return card_value(self.state, order, card if card is not None else self.state.cards[order])

    # ---- observed events ----

    def draw_card(self, player: int, order: int, suit: int = -1, rank: int = -1) -> None:
        """Move ``order`` from the deck into the front of ``player``'s hand."""
        index = self.state.deck_index(order)
        del self.state.deck[index]
        self.state.hands[player].insert(0, order)
        self.state.stamp(order, suit, rank)
        logger.debug("player %d draws #%d %s", player, order, self.card_string(order))

    def discard_deck_card(self, order: int, suit: int = -1, rank: int = -1) -> None:
        """Send a card straight from the deck to the discard pile."""
        index = self.state.deck_index(order)
        self.state.stamp(order, suit, rank)
        actions.discard_index(self.state, DECK, index).play(self.state)

    def play_deck_card(self, order: int, suit: int, rank: int) -> None:
        """Put a card straight from the deck onto its pile."""
        index = self.state.deck_index(order)
        self.state.stamp(order, suit, rank)
        action = actions.move_card(self.state, DECK, DECK, index)
        action.kind = actions.ActionKind.PLAY
        action.play(self.state)

    def give_clue(self, giver: int, target: int, clue_suit: int, clue_rank: int, touched: Sequence[int]) -> None:
        """Apply a clue from ``giver`` touching hand indices ``touched`` of ``target``."""
        hand = self.state.hands[target]
        # The clue reveals the clued part of every touched card.
        for index in touched:
            self.state.stamp(hand[index], clue_suit, clue_rank)
        actions.clue(self.state, giver, target, clue_suit, clue_rank).play(self.state)
        self.state.turn += 1
        logger.debug(
            "%s clues %s %s touching %s",
            self.config.player_names[giver],
            self.config.player_names[target],
            self._clue_value_string(clue_suit, clue_rank),
            list(touched),
        )

    def play_card(self, player: int, order: int, suit: int, rank: int) -> None:
        """Apply a play by ``player``; misplays go to the discard pile with a fault."""
        index = self.state.hand_index(player, order)
        self.state.stamp(order, suit, rank)
        actions.play_index(self.state, player, index, draw=False).play(self.state)
        self.state.turn += 1
        logger.debug("player %d plays #%d %s", player, order, self.card_string(order))

    def discard_card(self, player: int, order: int, suit: int, rank: int, failed: bool = False) -> None:
        """Apply a discard by ``player``. ``failed`` marks a misplay reported as a discard."""
        if failed:
            self.play_card(player, order, suit, rank)
            return
        index = self.state.hand_index(player, order)
        self.state.stamp(order, suit, rank)
        actions.discard_index(self.state, player, index, draw=False).play(self.state)
        self.state.turn += 1
        logger.debug("player %d discards #%d %s", player, order, self.card_string(order))

    # ---- decisions ----

    def best_outcome(self, player: int, depth: Optional[int] = None) -> Outcome:
        if depth is None:
            depth = self.state.num_players
        return best_outcome(self.state, player, depth)

    def action(self, player: int) -> ReversibleAction:
        """The chosen move for ``player`` after one round of lookahead."""
        result = self.best_outcome(player)
        logger.debug(
            "%s: %s (score %d)",
            self.config.player_names[player],
            self.action_string(player, result.action),
            score(result.stats),
        )
        return result.action

    def debug(self, player: int) -> str:
        """Describe the best line of play, the table and the score details."""
        result = self.best_outcome(player)
        lines = ["Computed best actions:"]
        played: list[tuple[ReversibleAction, int]] = []
        cur: Optional[Outcome] = result
        try:
            while cur is not None and cur.action is not None:
                lines.append(
                    f"- {self.config.player_names[cur.action.player]}: "
                    f"{self.action_string(cur.action.player, cur.action)}"
                )
                cur.action.play_chain(self.state, cur.resolution)
                played.append((cur.action, cur.resolution))
                cur = cur.next
            lines.append(str(self))
        finally:
            while played:
                last, resolution = played.pop()
                last.undo_chain(self.state, resolution)
        lines.append(f"score = {score(result.stats)} details = {json.dumps(result.stats.as_dict(), indent=2)}")
        return "\n".join(lines)

    # ---- rendering ----

    def card_string(self, order: int) -> str:
        text = card_to_str(self.state.cards[order], self.config)
        if self.state.knowledge[order].clued:
            text += "*"
        return text

    def _clue_value_string(self, clue_suit: int, clue_rank: int) -> str:
        if clue_rank >= 0:
            return str(clue_rank)
        return self.config.suits[clue_suit]

    def action_string(self, player: int, action: ReversibleAction) -> str:
        command = action.command()
        if command is None:
            return "No command"
        if command["type"] == PlayerActionType.PLAY:
            return f"Play #{self.state.hands[player].index(command['target']) + 1}"
        if command["type"] == PlayerActionType.DISCARD:
            return f"Discard #{self.state.hands[player].index(command['target']) + 1}"
        player_name = self.config.player_names[command["target"]]
        if command["type"] == PlayerActionType.CLUE_SUIT:
            return f"Clue {player_name} {self.config.suits[command['value']]}"
        return f"Clue {player_name} {command['value']}"

    def __str__(self) -> str:
        piles = " ".join(self.card_string(pile[-1]) if pile else "" for pile in self.state.piles)
        discard = " ".join(self.card_string(order) for order in self.state.discard)
        hands = "\n".join("    " + " ".join(self.card_string(order) for order in hand) for hand in self.state.hands)
        return f"State:\n  piles: {piles}\n  discard: {discard}\n  hands:\n{hands}"
