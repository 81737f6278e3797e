"""Win/loss evaluation.

A side loses once it has no creature left on its field, in its hand or
in its deck.  Victory is checked before defeat, so if both sides run out
at the same moment the player wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from creature_battle.sim.core.game_state import GameStatus

if TYPE_CHECKING:
    from creature_battle.sim.core.game_state import BattleState

VICTORY_MESSAGE = "Victory! You've defeated all enemy creatures!"
DEFEAT_MESSAGE = "Defeat! All your creatures have been defeated!"


def evaluate_outcome(state: BattleState) -> GameStatus | None:
    """Return ``VICTORY`` / ``DEFEAT`` if the battle is decided, else ``None``.

    Only a state that is still in battle can be decided.
    """
    if not state.is_in_battle:
        return None
    if state.enemy.is_exhausted:
        return GameStatus.VICTORY
    if state.player.is_exhausted:
        return GameStatus.DEFEAT
    return None


def outcome_message(status: GameStatus) -> str:
    if status is GameStatus.VICTORY:
        return VICTORY_MESSAGE
    if status is GameStatus.DEFEAT:
        return DEFEAT_MESSAGE
    raise ValueError(f"{status!r} is not a terminal status")
