"""Feed server game actions into an engine.

The live server reports each game event as a ``gameAction`` message; a whole
history arrives as ``gameActionList`` when a bot joins. Only the payloads are
handled here, the session layer that receives them lives elsewhere.

Payload shapes:
Draw: {"type": "draw", "playerIndex", "order", "suitIndex", "rank"} (-1 when hidden)
Clue: {"type": "clue", "clue": {"type": 0 suit | 1 rank, "value"}, "giver", "target", "list": [orders]}
Play: {"type": "play", "playerIndex", "order", "suitIndex", "rank"}
Discard: {"type": "discard", "playerIndex", "order", "suitIndex", "rank", "failed"}
Status: {"type": "status", "clues", "score", "maxScore"}
Strike: {"type": "strike", "num", "turn", "order"}
Turn: {"type": "turn", "num", "currentPlayerIndex"}
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from .engine import HanabiEngine

logger = logging.getLogger(__name__)

CLUE_TYPE_SUIT = 0
CLUE_TYPE_RANK = 1


def apply_game_action(engine: "HanabiEngine", action: dict[str, Any]) -> None:
    """Apply one server game action to ``engine``.

    Args:
        engine: The engine tracking this table.
        action: The ``action`` payload of a ``gameAction`` message.
    """
    action_type = action.get("type")

    if action_type == "draw":
        engine.draw_card(action["playerIndex"], action["order"], action.get("suitIndex", -1), action.get("rank", -1))

    elif action_type == "clue":
        clue = action["clue"]
        clue_suit = clue["value"] if clue["type"] == CLUE_TYPE_SUIT else -1
        clue_rank = clue["value"] if clue["type"] == CLUE_TYPE_RANK else -1
        target = action["target"]
        touched = [engine.state.hand_index(target, order) for order in action["list"]]
        engine.give_clue(action["giver"], target, clue_suit, clue_rank, touched)

    elif action_type == "play":
        engine.play_card(action["playerIndex"], action["order"], action["suitIndex"], action["rank"])

    elif action_type == "discard":
        engine.discard_card(
            action["playerIndex"],
            action["order"],
            action["suitIndex"],
            action["rank"],
            failed=action.get("failed", False),
        )

    elif action_type == "status":
        if action["clues"] != engine.state.clues or action["score"] != engine.state.score:
            logger.warning(
                "status mismatch: server clues=%s score=%s, model clues=%d score=%d",
                action["clues"],
                action["score"],
                engine.state.clues,
                engine.state.score,
            )

    elif action_type == "strike":
        # Misplays already counted the fault.
        if action["num"] != engine.state.faults:
            logger.warning("strike mismatch: server=%s model=%d", action["num"], engine.state.faults)

    elif action_type == "turn":
        engine.state.turn = action["num"]

    else:
        logger.debug("ignoring game action %r", action_type)


def apply_game_action_list(engine: "HanabiEngine", action_list: Iterable[dict[str, Any]]) -> None:
    for action in action_list:
        apply_game_action(engine, action)
