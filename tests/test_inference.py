from hanabot.cards import CardValue

from .helpers import action, cards, clue, set_state

EMPTY_HAND = ["??", "??", "??", "??", "??"]


def slot_values(engine, player):
    return [engine.card_value(order) for order in engine.state.hands[player]]


def test_value_ordering():
    assert CardValue.TRASH < CardValue.DUPLICATE < CardValue.UNKNOWN < CardValue.EVENTUAL
    assert CardValue.EVENTUAL < CardValue.SOON < CardValue.PLAYABLE < CardValue.CLUED < CardValue.IMPORTANT
    assert CardValue.IMPORTANT < CardValue.TWO_SAVE < CardValue.CRITICAL_5 < CardValue.CRITICAL_1
    assert CardValue.critical(5) == CardValue.CRITICAL_5
    assert CardValue.critical(1) == CardValue.CRITICAL_1


def test_card_values():
    engine = set_state(
        piles=["G2"],
        discard=["R3", "R3"],
        hands=[EMPTY_HAND, ["R4", "R1", "Y2", "Y2", "B5"], ["Y3", "G1", "B2", "P4", "??"]],
    )
    assert slot_values(engine, 1) == [
        CardValue.TRASH,  # every R3 is gone
        CardValue.PLAYABLE,
        CardValue.SOON,  # the other Y2 is visible, so no 2 save
        CardValue.SOON,
        CardValue.CRITICAL_5,
    ]
    assert slot_values(engine, 2) == [
        CardValue.EVENTUAL,
        CardValue.TRASH,
        CardValue.TWO_SAVE,
        CardValue.EVENTUAL,
        CardValue.UNKNOWN,
    ]


def test_duplicate_and_clued_values():
    engine = set_state(hands=[EMPTY_HAND, ["R3", "Y1", "??", "??", "??"], ["Y5", "Y1*", "R3*", "??", "??"]])
    assert slot_values(engine, 1)[:2] == [CardValue.DUPLICATE, CardValue.DUPLICATE]
    assert slot_values(engine, 2)[:3] == [CardValue.CRITICAL_5, CardValue.CLUED, CardValue.CLUED]


def test_play_clues():
    engine = set_state(hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", "R", [2])
    assert cards(engine, "Bob", 2) == ["R1"]

    engine = set_state(hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", 1, [2])
    assert cards(engine, "Bob", 2) == ["B1", "G1", "P1", "R1", "Y1"]

    engine = set_state(piles=["R2", "G1", "P3"], hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", 1, [3])
    assert cards(engine, "Bob", 3) == ["B1", "Y1"]


def test_play_clue_single_suit():
    engine = set_state(piles=["R5", "Y3", "G2", "B1", "P2"], hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", "B", [3])
    assert cards(engine, "Bob", 3) == ["B2"]


def test_rank_clue_on_chop_keeps_saves():
    engine = set_state(piles=["R3", "Y4", "G3", "B3", "P2"], hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", 4, [4])
    assert cards(engine, "Bob", 4) == ["B4", "G4", "R4"]


def test_delayed_play_clue():
    engine = set_state(
        piles=["R1"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["??", "Y1", "G1", "B1", "??"]],
    )
    clue(engine, "Alice", "Cathy", 1, [1, 2, 3])
    clue(engine, "Alice", "Bob", 2, [3])
    assert cards(engine, "Bob", 3) == ["B2", "G2", "R2", "Y2"]


def test_delayed_play_clue_through_other_hand():
    empty = ["??", "??", "??", "??"]
    engine = set_state(
        piles=["R1", "Y4", "G4", "B2", "P3"],
        hands=[empty, empty, empty, ["??", "R2", "??", "??"]],
    )
    clue(engine, "Alice", "Donald", "R", [1])
    clue(engine, "Bob", "Cathy", "R", [3])
    assert cards(engine, "Cathy", 3) == ["R3"]


def test_two_save():
    engine = set_state(
        piles=["R3", "B1", "P2"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["Y5", "Y1*", "R3", "R2", "B2"]],
    )
    clue(engine, "Alice", "Bob", 2, [4])
    assert cards(engine, "Bob", 4) == ["B2", "G2", "Y2"]


def test_two_save_after_play_clue():
    engine = set_state(
        piles=["Y1", "G2"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["G5", "B3", "G4", "P3", "P3"]],
    )
    clue(engine, "Alice", "Bob", 1, [0])
    assert cards(engine, "Bob", 0) == ["B1", "P1", "R1"]

    clue(engine, "Alice", "Bob", 2, [4])
    assert cards(engine, "Bob", 0) == ["B1", "P1", "R1"]
    assert cards(engine, "Bob", 4) == ["B2", "P2", "R2", "Y2"]


def test_critical_save_by_suit():
    engine = set_state(
        piles=["Y2", "G2", "B2", "P2"],
        discard=["R2"],
        hands=[EMPTY_HAND, EMPTY_HAND],
    )
    clue(engine, "Alice", "Bob", "R", [4])
    assert cards(engine, "Bob", 4) == ["R1", "R2"]


def test_critical_save_next_to_clued_five():
    engine = set_state(
        piles=["R1", "Y1", "B1"],
        discard=["B4"],
        hands=[EMPTY_HAND, ["??", "??", "??", "??", "?5*"]],
    )
    clue(engine, "Alice", "Bob", "B", [3])
    assert cards(engine, "Bob", 3) == ["B2", "B4"]
    # Nothing to play or save, so Bob discards the new chop.
    assert action(engine, "Bob") == "Discard #3"


def test_critical_save_with_clued_fours():
    engine = set_state(
        piles=["R1", "Y2", "P3"],
        discard=["G3"],
        hands=[EMPTY_HAND, ["??", "??", "??", "?4*", "?4*"], ["P4", "R2*", "Y1", "Y2", "Y4"]],
    )
    clue(engine, "Alice", "Bob", 3, [2])
    assert cards(engine, "Bob", 2) == ["G3", "R3", "Y3"]


def test_clues_only_narrow():
    engine = set_state(
        piles=["Y1", "G2"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["G5", "B3", "G4", "P3", "P3"]],
    )
    state = engine.state
    before = {order: set(state.knowledge[order].possible) for hand in state.hands for order in hand}
    clue(engine, "Alice", "Bob", 1, [0])
    clue(engine, "Cathy", "Bob", "R", [0])
    clue(engine, "Bob", "Cathy", 3, [1, 3, 4])
    for order, possible in before.items():
        assert set(state.knowledge[order].possible) <= possible


def test_untouched_cards_lose_clued_identities():
    engine = set_state(hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Alice", "Bob", "R", [2])
    for index in (0, 1, 3, 4):
        assert not any(card.startswith("R") for card in cards(engine, "Bob", index))


def test_delayed_play_clue_skips_queued_ones():
    engine = set_state(
        piles=["Y1", "B2", "P2"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["??", "??", "R1", "G1", "??"]],
    )
    clue(engine, "Alice", "Cathy", 1, [2, 3])
    clue(engine, "Alice", "Bob", 3, [1])
    assert cards(engine, "Bob", 1) == ["B3", "P3"]


def test_delayed_play_clue_through_clued_chains():
    empty = ["??", "??", "??", "??"]
    engine = set_state(
        piles=["R3", "Y1", "B2", "P3"],
        hands=[empty, empty, ["R1", "Y2*", "Y3*", "G5*"], ["P5", "G2", "P1", "B3*"]],
    )
    clue(engine, "Alice", "Bob", 4, [1])
    assert cards(engine, "Bob", 1) == ["B4", "P4", "R4", "Y4"]
