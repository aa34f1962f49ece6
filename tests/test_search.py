import time

import pytest

from hanabot.actions import ActionKind
from hanabot.engine import HanabiEngine
from hanabot.errors import NoActionError
from hanabot.search import WEIGHTS, ClueStats, best_outcome, candidate_actions, clue_stats, score

from .helpers import action, clue, set_state

EMPTY_HAND = ["??", "??", "??", "??", "??"]


def test_score_weights():
    assert score(ClueStats(score=0, clues=0, faults=0, lost_cards=0)) == 0
    assert score(ClueStats(score=3, clues=8, faults=1, lost_cards=0)) == 30 + 16 - 50
    stats = ClueStats(score=1, clues=1, faults=1, lost_cards=1, bad_touch=1, reachable=1, eventual=1)
    assert score(stats) == sum(WEIGHTS.values())
    assert stats.as_dict()["bad_touch"] == 1


def test_clue_stats_counts_clued_cards():
    engine = set_state(
        piles=["R2"],
        hands=[EMPTY_HAND, ["R3*", "R4*", "G5*", "Y1*", "R1*"]],
    )
    stats = clue_stats(engine.state)
    # R3 and Y1 are playable through the chain, R4 follows R3, G5 waits on G1-G4, R1 is already played
    assert stats.reachable == 3
    assert stats.eventual == 1
    assert stats.bad_touch == 1
    assert stats.score == 2


def test_clue_stats_duplicate_is_bad_touch():
    engine = set_state(hands=[EMPTY_HAND, ["B1*", "??", "??", "??", "??"], ["B1*", "??", "??", "??", "??"]])
    assert clue_stats(engine.state).bad_touch == 1


def test_five_save():
    engine = set_state(hands=[EMPTY_HAND, ["??", "??", "??", "??", "R5"]])
    assert action(engine, "Alice") == "Clue Bob 5"


def test_two_save():
    engine = set_state(hands=[EMPTY_HAND, ["??", "??", "??", "??", "B2"]])
    assert action(engine, "Alice") == "Clue Bob 2"


def test_two_save_not_needed_when_other_copy_visible():
    engine = set_state(
        piles=["B2", "P1"],
        hands=[
            ["??", "??", "??", "?5*", "?5*"],
            ["R4", "P3", "Y2", "R2", "G2"],
            ["Y5", "G2", "G1", "G1", "Y2"],
        ],
    )
    assert action(engine, "Alice") == "Discard #3"


def test_critical_save_by_suit():
    engine = set_state(
        piles=["R4", "G1", "B2"],
        discard=["P3", "P4"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["R1", "R1", "P4", "P3", "P5"]],
    )
    assert action(engine, "Alice") == "Clue Cathy 5"
    clue(engine, "Alice", "Cathy", 5, [4])
    assert action(engine, "Bob") == "Clue Cathy P"


def test_no_clue_candidates_without_tokens():
    engine = set_state(hands=[EMPTY_HAND, ["??", "??", "??", "??", "R5"]])
    engine.state.clues = 0
    candidates = candidate_actions(engine.state, 0)
    assert [candidate.kind for candidate in candidates] == [ActionKind.DISCARD]
    assert candidates[0].index == 4


def test_known_playable_card_is_played():
    engine = set_state(hands=[EMPTY_HAND, EMPTY_HAND])
    clue(engine, "Bob", "Alice", "R", [0])
    kinds = [candidate.kind for candidate in candidate_actions(engine.state, 0)]
    assert ActionKind.PLAY in kinds
    assert action(engine, "Alice") == "Play #1"


def test_discard_when_hand_fully_clued():
    engine = set_state(hands=[["?1*", "?1*"], ["??", "??"]])
    engine.state.clues = 0
    candidates = candidate_actions(engine.state, 0)
    # A fully clued hand has no chop, so the discard falls back to the oldest card.
    assert candidates[-1].kind == ActionKind.DISCARD
    assert candidates[-1].index == 1


def test_no_action_with_empty_hand():
    engine = set_state(hands=[[], []])
    with pytest.raises(NoActionError):
        best_outcome(engine.state, 0, 2)


def test_search_leaves_state_untouched():
    engine = set_state(
        piles=["R4", "G1", "B2"],
        discard=["P3", "P4"],
        hands=[EMPTY_HAND, EMPTY_HAND, ["R1", "R1", "P4", "P3", "P5"]],
    )
    before = engine.state.snapshot()
    engine.best_outcome(0)
    engine.debug(1)
    assert engine.state.snapshot() == before


def test_debug_output():
    engine = set_state(hands=[EMPTY_HAND, ["??", "??", "??", "??", "R5"]])
    text = engine.debug(0)
    assert text.startswith("Computed best actions:\n- Alice: Clue Bob 5")
    assert "State:" in text
    assert "score = " in text


def test_five_save_with_nothing_to_save():
    empty = ["??", "??", "??", "??"]
    engine = set_state(
        piles=["R1", "Y2", "B1", "P1"],
        hands=[
            empty,
            ["P4", "G4", "Y5", "Y1"],
            ["Y4", "G4", "G3*", "G2*"],
            ["P5", "B5", "P3", "P3"],
        ],
    )
    assert action(engine, "Alice") == "Discard #4"


def test_five_save_beyond_next_player():
    empty = ["??", "??", "??", "??"]
    engine = set_state(
        piles=["R1", "B3", "G2"],
        hands=[
            empty,
            ["R1", "P5", "G5", "Y2"],
            ["R4", "Y5", "B5*", "Y2*"],
            ["P4", "B1", "R5", "P3"],
        ],
    )
    assert action(engine, "Alice") == "Clue Cathy 5"


def test_five_player_search_time():
    engine = HanabiEngine.from_setup({"players": ["Alice", "Bob", "Cathy", "Donald", "Emily"]})
    engine = set_state(
        engine=engine,
        hands=[
            ["??", "??", "??", "??"],
            ["R1", "G3", "Y4", "B3"],
            ["P2", "Y3", "G4", "R3"],
            ["P3", "R4", "G3", "B1"],
            ["Y3", "P4", "R4", "B3"],
        ],
    )
    before = engine.state.snapshot()
    start = time.perf_counter()
    chosen = engine.action(0)
    elapsed = time.perf_counter() - start
    assert chosen.command() is not None
    assert engine.state.snapshot() == before
    assert elapsed < 20
