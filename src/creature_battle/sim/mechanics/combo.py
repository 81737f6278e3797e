"""Combo tracker -- consecutive-action streaks and their bonus.

A side's streak grows by one for every accepted action it takes and both
streaks drop to zero whenever the active player changes.  At a combo
check, a streak of at least ``combo_threshold`` grants every creature on
that side's field a permanent flat attack bonus.  Checks do not consume
the streak, so checking twice at the same streak applies the bonus twice.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Side
    from creature_battle.sim.core.game_state import BattleState


def record_action(battle: BattleState, side: Side) -> int:
    """Extend *side*'s streak by one.  Returns the new streak."""
    battle.consecutive_actions.add(side, 1)
    return battle.consecutive_actions.get(side)


def reset_streaks(battle: BattleState) -> None:
    """Reset both sides' streaks."""
    battle.consecutive_actions.reset()


def combo_ready(battle: BattleState, side: Side, config: BattleConfig = DEFAULT_CONFIG) -> bool:
    return battle.consecutive_actions.get(side) >= config.combo_threshold


def apply_combo_bonus(
    battle: BattleState,
    side: Side,
    config: BattleConfig = DEFAULT_CONFIG,
) -> int:
    """Grant the combo bonus to every creature on *side*'s field.

    Returns the number of creatures that received it.
    """
    bonus = config.combo_attack_bonus
    field = battle.side(side).field
    for creature in field:
        creature.battle_stats.physical_attack += bonus
        creature.battle_stats.magical_attack += bonus
    return len(field)
