"""Scenario builders shared by the tests.

Cards are written as two-character strings: ``"R1"``, ``"??"`` for an
unseen card, ``"?5"`` for a partly revealed one, with a trailing ``*``
when the card has already been clued.
"""

from typing import Optional, Sequence, Union

from hanabot.engine import HanabiEngine
from hanabot.utils import card_to_str, parse_card

PlayerRef = Union[int, str]


def _player(engine: HanabiEngine, player: PlayerRef) -> int:
    if isinstance(player, str):
        return engine.config.player_names.index(player)
    return player


def set_state(
    hands: Sequence[Sequence[str]],
    piles: Sequence[str] = (),
    discard: Sequence[str] = (),
    engine: Optional[HanabiEngine] = None,
) -> HanabiEngine:
    """Build an engine mid-game: piles played, cards discarded, hands dealt."""
    if engine is None:
        engine = HanabiEngine.from_setup({"players": len(hands)})
    state = engine.state

    for text in piles:
        top, _ = parse_card(text, engine.config)
        for rank in range(1, top.rank + 1):
            engine.play_deck_card(state.deck[0], top.suit, rank)

    for text in discard:
        card, _ = parse_card(text, engine.config)
        engine.discard_deck_card(state.deck[0], card.suit, card.rank)

    for player, hand in enumerate(hands):
        # Drawing pushes to the front, so deal the last slot first.
        for text in reversed(hand):
            card, clued = parse_card(text, engine.config)
            order = state.deck[0]
            engine.draw_card(player, order, card.suit, card.rank)
            if clued:
                _mark_clued(engine, order)
    return engine


def _mark_clued(engine: HanabiEngine, order: int) -> None:
    state = engine.state
    card = state.cards[order]
    info = state.knowledge[order]
    info.clued = True
    info.possible = tuple(
        candidate
        for candidate in info.possible
        if card.suit in (-1, candidate.suit) and card.rank in (-1, candidate.rank)
    )
    assumed = state.assumed_card(order)
    if assumed.known:
        state.clued[assumed.suit, assumed.rank] += 1


def clue(engine: HanabiEngine, giver: PlayerRef, target: PlayerRef, value: Union[str, int], touched: Sequence[int]):
    """Give a suit clue (``"R"``) or rank clue (``1``) touching the listed slots."""
    clue_suit = engine.config.suits.index(value) if isinstance(value, str) else -1
    clue_rank = value if isinstance(value, int) else -1
    engine.give_clue(_player(engine, giver), _player(engine, target), clue_suit, clue_rank, list(touched))


def cards(engine: HanabiEngine, player: PlayerRef, index: int) -> list[str]:
    """Sorted possible identities of a slot."""
    order = engine.state.hands[_player(engine, player)][index]
    return sorted(card_to_str(card, engine.config) for card in engine.state.knowledge[order].possible)


def action(engine: HanabiEngine, player: PlayerRef) -> str:
    player = _player(engine, player)
    return engine.action_string(player, engine.action(player))
