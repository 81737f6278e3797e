"""Ongoing-effect processor -- one tick of every duration effect.

For every creature on both fields, each active effect:
    1. applies its ``health_effect`` (clamped to ``[0, max_health]``),
    2. adds its ``stat_effect`` deltas to ``battle_stats`` (no clamping,
       never reverted),
    3. loses one point of duration and is dropped once it reaches 0.

Afterwards every creature's defensive stance ends and creatures at 0 HP
are removed from the field for good.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from creature_battle.sim.core.entities import Side

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature
    from creature_battle.sim.core.game_state import BattleState

logger = logging.getLogger(__name__)


def tick_creature(creature: Creature, label: str) -> list[str]:
    """Run one effect tick on *creature* in-place.

    Parameters
    ----------
    creature:
        The creature to process.
    label:
        Name used in log messages (e.g. ``"Enemy Flarefox"``).

    Returns
    -------
    list[str]
        Log fragments describing health changes and expiries.
    """
    messages: list[str] = []
    remaining = []

    for effect in creature.active_effects:
        if effect is None:
            continue

        if effect.health_effect:
            before = creature.current_health
            creature.current_health = min(
                creature.battle_stats.max_health,
                max(0, creature.current_health + effect.health_effect),
            )
            change = creature.current_health - before
            if change != 0:
                verb = "healed" if change > 0 else "damaged"
                messages.append(f"{label} {verb} for {abs(change)} from {effect.name}")

        for stat, delta in effect.stat_effect.items():
            if not creature.battle_stats.add_to_stat(stat, delta):
                logger.debug("Effect %s targets unknown stat %r", effect.name, stat)

        updated = effect.model_copy(update={"duration": effect.duration - 1})
        if updated.duration > 0:
            remaining.append(updated)
        else:
            messages.append(f"{effect.name} effect has expired on {label}")

    creature.active_effects = remaining
    creature.is_defending = False
    return messages


def apply_ongoing_effects(battle: BattleState) -> list[str]:
    """Tick every creature on both fields, then remove the fallen.

    Returns one combined log message per creature that produced any.
    """
    log_lines: list[str] = []

    for side in (Side.PLAYER, Side.ENEMY):
        side_state = battle.side(side)
        for creature in side_state.field:
            label = creature.species_name if side is Side.PLAYER else f"Enemy {creature.species_name}"
            messages = tick_creature(creature, label)
            if messages:
                log_lines.append(". ".join(messages))

        side_state.field = [c for c in side_state.field if c.current_health > 0]

    return log_lines
