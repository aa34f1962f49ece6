"""Reversible actions used both for observed events and for search.

Every action is a ``ReversibleAction`` tagged with an ``ActionKind``; the
behaviour of each kind lives in the ``_BEHAVIOR`` table. Playing an action
pushes exactly what it changed onto the action's undo log and undoing pops
it, so actions must be undone in the reverse order they were played.

Client actions:
Clue rank: {"tableID": 1, "type": 3, "target": <player>, "value": <rank>}
Clue suit: {"tableID": 1, "type": 2, "target": <player>, "value": <suitIndex>}
Play card: {"tableID": 1, "type": 0, "target": <order>}
Discard card: {"tableID": 1, "type": 1, "target": <order>}
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Callable, NamedTuple, Optional

from .cards import Card
from .convention import apply_clue

if TYPE_CHECKING:
    from .state import GameState

# Source index for moves out of the deck
DECK = -1


class ActionKind(Enum):
    MOVE_CARD = "move_card"
    PLAY = "play"
    DISCARD = "discard"
    PICKUP = "pickup"
    CLUE = "clue"


class PlayerActionType(IntEnum):
    PLAY = 0
    DISCARD = 1
    CLUE_SUIT = 2
    CLUE_RANK = 3


@dataclass(eq=False)
class ReversibleAction:
    kind: ActionKind
    player: int
    table_id: int = 0
    # Container the card leaves (DECK or a player index) and its position there
    source: int = DECK
    index: int = 0
    order: int = -1
    # Clue recipient and clue value
    target: int = -1
    clue_suit: int = -1
    clue_rank: int = -1
    next: Optional["ReversibleAction"] = None
    _log: list = field(default_factory=list, repr=False)

    def count(self, state: "GameState") -> int:
        """Number of distinct outcomes to consider when searching this action."""
        return _BEHAVIOR[self.kind].count(self, state)

    def play(self, state: "GameState", resolution: int = 0) -> None:
        _BEHAVIOR[self.kind].play(self, state, resolution)

    def undo(self, state: "GameState", resolution: int = 0) -> None:
        _BEHAVIOR[self.kind].undo(self, state, resolution)

    def play_chain(self, state: "GameState", resolution: int = 0) -> None:
        self.play(state, resolution)
        if self.next is not None:
            self.next.play_chain(state)

    def undo_chain(self, state: "GameState", resolution: int = 0) -> None:
        if self.next is not None:
            self.next.undo_chain(state)
        self.undo(state, resolution)

    def command(self) -> Optional[dict[str, Any]]:
        """The wire record for this action, or None for internal bookkeeping."""
        if self.kind == ActionKind.PLAY:
            return {"tableID": self.table_id, "type": int(PlayerActionType.PLAY), "target": self.order}
        if self.kind == ActionKind.DISCARD:
            return {"tableID": self.table_id, "type": int(PlayerActionType.DISCARD), "target": self.order}
        if self.kind == ActionKind.CLUE:
            if self.clue_rank >= 0:
                return {
                    "tableID": self.table_id,
                    "type": int(PlayerActionType.CLUE_RANK),
                    "target": self.target,
                    "value": self.clue_rank,
                }
            return {
                "tableID": self.table_id,
                "type": int(PlayerActionType.CLUE_SUIT),
                "target": self.target,
                "value": self.clue_suit,
            }
        return None


class _Behavior(NamedTuple):
    count: Callable[[ReversibleAction, "GameState"], int]
    play: Callable[[ReversibleAction, "GameState", int], None]
    undo: Callable[[ReversibleAction, "GameState", int], None]


def _single(action: ReversibleAction, state: "GameState") -> int:
    return 1


def _container(action: ReversibleAction, state: "GameState") -> list[int]:
    return state.deck if action.source == DECK else state.hands[action.source]


def _take(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    del _container(action, state)[action.index]


def _put_back(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    _container(action, state).insert(action.index, action.order)


def _play_count(action: ReversibleAction, state: "GameState") -> int:
    # Play should consider every possible outcome for unknown cards.
    if state.cards[action.order].known:
        return 1
    return len(state.knowledge[action.order].possible)


def _release_clued(state: "GameState", order: int) -> Optional[Card]:
    """Remove a clued card leaving its hand from the ``clued`` table."""
    if not state.knowledge[order].clued:
        return None
    card = state.assumed_card(order)
    if not card.known or state.clued[card.suit, card.rank] <= 0:
        return None
    state.clued[card.suit, card.rank] -= 1
    return card


def _restore_clued(state: "GameState", card: Optional[Card]) -> None:
    if card is not None:
        state.clued[card.suit, card.rank] += 1


def _play_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    released = _release_clued(state, action.order)
    _take(action, state, resolution)
    card = state.cards[action.order]
    if not card.known:
        card = state.knowledge[action.order].possible[resolution]

    if state.playable(card):
        state.piles[card.suit].append(action.order)
        state.score += 1
        # Completing a suit returns a clue token
        bonus = card.rank == state.config.max_rank and state.clues < state.config.max_clue_tokens
        if bonus:
            state.clues += 1
        action._log.append((True, card, bonus, False, released))
        return

    state.discard.append(action.order)
    state.faults += 1
    state.remain[card.suit, card.rank] -= 1
    lost = bool(state.remain[card.suit, card.rank] == 0)
    if lost:
        state.lost_cards += 1
    action._log.append((False, card, False, lost, released))


def _undo_play_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    success, card, bonus, lost, released = action._log.pop()
    if success:
        state.piles[card.suit].pop()
        state.score -= 1
        if bonus:
            state.clues -= 1
    else:
        state.discard.pop()
        state.faults -= 1
        state.remain[card.suit, card.rank] += 1
        if lost:
            state.lost_cards -= 1
    _restore_clued(state, released)
    _put_back(action, state, resolution)


def _discard_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    released = _release_clued(state, action.order)
    _take(action, state, resolution)
    state.discard.append(action.order)
    # Cards discarded straight from the deck are table setup, not a turn.
    restored = action.source != DECK and state.clues < state.config.max_clue_tokens
    if restored:
        state.clues += 1

    # TODO: a discard while holding a known play should also update the giver's clue knowledge.
    card = state.assumed_card(action.order)
    lost = False
    if card.known:
        state.remain[card.suit, card.rank] -= 1
        lost = bool(state.remain[card.suit, card.rank] == 0)
        if lost:
            state.lost_cards += 1
    action._log.append((restored, card, lost, released))


def _undo_discard_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    restored, card, lost, released = action._log.pop()
    state.discard.pop()
    if restored:
        state.clues -= 1
    if card.known:
        state.remain[card.suit, card.rank] += 1
        if lost:
            state.lost_cards -= 1
    _restore_clued(state, released)
    _put_back(action, state, resolution)


def _pickup_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    _take(action, state, resolution)
    state.hands[action.player].insert(0, action.order)


def _undo_pickup_card(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    del state.hands[action.player][0]
    _put_back(action, state, resolution)


def _give_clue(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    # Save previous knowledge about cards.
    previous = [state.knowledge[order].copy() for order in state.hands[action.target]]
    spent = state.clues > 0
    if spent:
        state.clues -= 1
    counted = apply_clue(state, action.player, action.target, action.clue_suit, action.clue_rank, previous)
    action._log.append((previous, counted, spent))


def _undo_give_clue(action: ReversibleAction, state: "GameState", resolution: int) -> None:
    previous, counted, spent = action._log.pop()
    for card in counted:
        state.clued[card.suit, card.rank] -= 1
    for order, info in zip(state.hands[action.target], previous):
        state.knowledge[order] = info
    if spent:
        state.clues += 1


_BEHAVIOR: dict[ActionKind, _Behavior] = {
    ActionKind.MOVE_CARD: _Behavior(_single, _take, _put_back),
    ActionKind.PLAY: _Behavior(_play_count, _play_card, _undo_play_card),
    ActionKind.DISCARD: _Behavior(_single, _discard_card, _undo_discard_card),
    ActionKind.PICKUP: _Behavior(_single, _pickup_card, _undo_pickup_card),
    ActionKind.CLUE: _Behavior(_single, _give_clue, _undo_give_clue),
}


def move_card(state: "GameState", player: int, source: int, index: int) -> ReversibleAction:
    """Lift the card at ``index`` out of the deck (``source == DECK``) or a hand."""
    order = state.deck[index] if source == DECK else state.hands[source][index]
    return ReversibleAction(
        ActionKind.MOVE_CARD,
        player,
        table_id=state.config.table_id,
        source=source,
        index=index,
        order=order,
    )


def pickup_card(state: "GameState", player: int) -> ReversibleAction:
    action = move_card(state, player, DECK, 0)
    action.kind = ActionKind.PICKUP
    return action


def _with_draw(state: "GameState", action: ReversibleAction, draw: bool) -> ReversibleAction:
    if draw and action.source != DECK and state.deck:
        action.next = pickup_card(state, action.player)
    return action


def play_index(state: "GameState", player: int, index: int, draw: bool = True) -> ReversibleAction:
    action = move_card(state, player, player, index)
    action.kind = ActionKind.PLAY
    return _with_draw(state, action, draw)


def discard_index(state: "GameState", player: int, index: int, draw: bool = True) -> ReversibleAction:
    """Discard from a hand, or from the deck when ``player`` is DECK."""
    action = move_card(state, player, player, index)
    action.kind = ActionKind.DISCARD
    return _with_draw(state, action, draw)


def clue(state: "GameState", giver: int, target: int, clue_suit: int = -1, clue_rank: int = -1) -> ReversibleAction:
    return ReversibleAction(
        ActionKind.CLUE,
        giver,
        table_id=state.config.table_id,
        target=target,
        clue_suit=clue_suit,
        clue_rank=clue_rank,
    )
