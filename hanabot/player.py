from typing import TYPE_CHECKING, Any

from .actions import PlayerActionType
from .cards import Card
from .config import GameConfig
from .engine import HanabiEngine
from .errors import IllegalMoveError
from .utils import card_to_str

if TYPE_CHECKING:
    from .game import HanabiGame


class Player:
    """Represents a seat in a self-play game: an engine that only sees what this seat sees."""

    def __init__(self, player_id: int, config: GameConfig):
        self.player_id = player_id
        self.config = config
        self.engine = HanabiEngine(config)

    def observe_draw(self, player: int, order: int, card: Card) -> None:
        # A seat never sees its own cards.
        if player == self.player_id:
            self.engine.draw_card(player, order)
        else:
            self.engine.draw_card(player, order, card.suit, card.rank)

    def choose_command(self) -> dict[str, Any]:
        return self.engine.action(self.player_id).command()

    def take_turn(self, game: "HanabiGame") -> str:
        """Ask the engine for a move and carry it out.

        Returns:
            Feedback message describing the action result.
        """
        command = self.choose_command()
        return self.execute_command(game, command)

    def execute_command(self, game: "HanabiGame", command: dict[str, Any]) -> str:
        """Carry out a wire command on the referee's state."""
        hand = game.state.hands[self.player_id]
        action_type = command.get("type")

        if action_type in (PlayerActionType.PLAY, PlayerActionType.DISCARD):
            order = command["target"]
            if order not in hand:
                raise IllegalMoveError(f"Card #{order} is not in the hand of player {self.player_id}.")
            if action_type == PlayerActionType.PLAY:
                return self.play_card(game, hand.index(order))
            return self.discard_card(game, hand.index(order))

        if action_type == PlayerActionType.CLUE_SUIT:
            return self.give_hint(game, command["target"], clue_suit=command["value"])

        if action_type == PlayerActionType.CLUE_RANK:
            return self.give_hint(game, command["target"], clue_rank=command["value"])

        raise IllegalMoveError(f"Attempted unknown action type '{action_type}'.")

    def play_card(self, game: "HanabiGame", position: int) -> str:
        """Execute a play action.

        Attempts to play the card at the given position onto its pile.
        If successful, the card is added to the pile. If the card doesn't
        match the next required rank, a strike is taken.

        Args:
            game: The referee (modified in place).
            position: Hand position of the card to play.

        Returns:
            Feedback message describing the action result.
        """
        state = game.state
        hand = state.hands[self.player_id]

        if position < 0 or position >= len(hand):
            raise IllegalMoveError(f"Tried to play invalid position {position}. Must be 0-{len(hand) - 1}.")

        order = hand.pop(position)
        card = state.identities[order]
        suit = self.config.suits[card.suit]
        current_pile_height = state.piles[card.suit]

        if current_pile_height + 1 == card.rank:
            state.piles[card.suit] = card.rank
            state.score += 1
            state.played.append(order)
            feedback = f"Successfully played {card_to_str(card, self.config)}."

            if card.rank == self.config.max_rank and state.clues < self.config.max_clue_tokens:
                state.clues += 1
                feedback += f" [+1 clue token for completing {suit}]"

            if state.score == self.config.max_score:
                state.is_complete = True
                feedback += "\n\nPerfect Game! All piles completed!"
        else:
            state.strikes += 1
            state.discard_pile.append(order)

            expected = current_pile_height + 1
            feedback = f"Played {card_to_str(card, self.config)}, but {suit} needs {expected}. Took a strike."

            if state.strikes >= self.config.max_strikes:
                state.is_complete = True
                feedback += " Game Over"

        game.broadcast_play(self.player_id, order, card)
        game.draw(self.player_id)
        return feedback

    def discard_card(self, game: "HanabiGame", position: int) -> str:
        """Execute a discard action.

        Discards the card at the given position and gains one clue token
        (up to the maximum).

        Args:
            game: The referee (modified in place).
            position: Hand position of the card to discard.

        Returns:
            Feedback message describing the action result.
        """
        state = game.state
        hand = state.hands[self.player_id]

        if position < 0 or position >= len(hand):
            raise IllegalMoveError(f"Tried to discard invalid position {position}. Must be 0-{len(hand) - 1}.")

        order = hand.pop(position)
        card = state.identities[order]
        state.discard_pile.append(order)
        feedback = f"Discarded {card_to_str(card, self.config)}."
        if state.clues < self.config.max_clue_tokens:
            state.clues += 1
            feedback += " Gained 1 clue token."

        game.broadcast_discard(self.player_id, order, card)
        game.draw(self.player_id)
        return feedback

    def give_hint(self, game: "HanabiGame", target_player: int, clue_suit: int = -1, clue_rank: int = -1) -> str:
        """Execute a clue action.

        Gives a clue to another player about either a suit or rank in their hand.
        Costs one clue token. The clue touches all cards matching the value.

        Args:
            game: The referee (modified in place).
            target_player: ID of the player receiving the clue.
            clue_suit: Suit index to clue, or -1.
            clue_rank: Rank to clue, or -1.

        Returns:
            Feedback message describing the action result.
        """
        state = game.state
        if state.clues <= 0:
            raise IllegalMoveError("Tried to give a clue but no clue tokens available.")

        num_players = len(state.hands)
        if target_player < 0 or target_player >= num_players:
            raise IllegalMoveError(f"Tried to clue invalid target player {target_player}. Must be 0-{num_players - 1}.")

        if target_player == self.player_id:
            raise IllegalMoveError("Tried to give a clue to themselves.")

        if clue_suit >= 0:
            clue_text = self.config.suits[clue_suit]
        elif clue_rank in self.config.ranks:
            clue_text = str(clue_rank)
        else:
            raise IllegalMoveError(f"Tried to clue invalid value suit={clue_suit} rank={clue_rank}.")

        touched = [
            index
            for index, order in enumerate(state.hands[target_player])
            if state.identities[order].suit == clue_suit or state.identities[order].rank == clue_rank
        ]
        if not touched:
            raise IllegalMoveError(
                f"Tried to clue {clue_text} to Player {target_player}, but they have no {clue_text} cards."
            )

        state.clues -= 1
        game.broadcast_clue(self.player_id, target_player, clue_suit, clue_rank, touched)
        positions_str = ", ".join(str(p) for p in touched)
        return f"Gave clue to Player {target_player}: {clue_text} at positions [{positions_str}]"
