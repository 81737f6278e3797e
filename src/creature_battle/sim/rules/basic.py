"""Reference combat rules.

A small, deterministic rule set so that the battle core can run end to
end without the production damage formulas:

- **Attack**: ``max(1, attack - defense // 2)`` on the chosen attack type,
  halved (minimum 1) against a defending creature.
- **Tool**: ``effect`` may carry ``stat_changes`` (stat -> delta),
  ``heal`` (HP) and ``over_time`` (an ``Effect`` payload).
- **Spell**: ``effect`` may carry ``damage`` (boosted by half the caster's
  magical attack), ``heal`` and ``over_time``.
- **Defend**: sets ``is_defending``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from creature_battle.sim.core.actions import AttackResult, SpellResult, ToolResult
from creature_battle.sim.core.entities import Effect
from creature_battle.sim.rules.base import CombatRules

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature, SpellItem, ToolItem


def _over_time(payload: dict[str, Any] | None) -> Effect | None:
    if not payload:
        return None
    return Effect.model_validate(payload)


class BasicCombatRules(CombatRules):
    """Deterministic reference implementation of ``CombatRules``."""

    def process_attack(
        self,
        attacker: Creature,
        defender: Creature,
        attack_type: str | None = None,
    ) -> AttackResult:
        attack_type = attack_type or attacker.preferred_attack_type
        if attack_type == "physical":
            attack = attacker.battle_stats.physical_attack
            defense = defender.battle_stats.physical_defense
        else:
            attack = attacker.battle_stats.magical_attack
            defense = defender.battle_stats.magical_defense

        damage = max(1, attack - defense // 2)
        if defender.is_defending:
            damage = max(1, damage // 2)

        updated_attacker = attacker.model_copy(deep=True)
        updated_defender = defender.model_copy(deep=True)
        dealt = updated_defender.take_damage(damage)

        message = (
            f"{attacker.species_name} attacked {defender.species_name} "
            f"for {dealt} {attack_type} damage!"
        )
        if updated_defender.is_dead:
            message += f" {defender.species_name} was defeated!"

        return AttackResult(
            updated_attacker=updated_attacker,
            updated_defender=updated_defender,
            battle_log=message,
        )

    def apply_tool(
        self,
        target: Creature,
        tool: ToolItem,
        difficulty: str,
    ) -> ToolResult | None:
        effect = tool.effect
        stat_changes: dict[str, int] = effect.get("stat_changes", {})
        heal = int(effect.get("heal", 0))
        over_time = _over_time(effect.get("over_time"))
        if not stat_changes and heal <= 0 and over_time is None:
            return None

        updated = target.model_copy(deep=True)
        applied: dict[str, int] = {}
        for stat, delta in stat_changes.items():
            if updated.battle_stats.add_to_stat(stat, delta):
                applied[stat] = delta
        healed = updated.heal(heal)
        if over_time is not None:
            updated.active_effects.append(over_time)

        return ToolResult(
            updated_creature=updated,
            tool_effect={"stat_changes": applied, "health_change": healed},
        )

    def apply_spell(
        self,
        caster: Creature,
        target: Creature,
        spell: SpellItem,
        difficulty: str,
    ) -> SpellResult | None:
        effect = spell.effect
        base_damage = int(effect.get("damage", 0))
        heal = int(effect.get("heal", 0))
        over_time = _over_time(effect.get("over_time"))
        if base_damage <= 0 and heal <= 0 and over_time is None:
            return None

        updated_target = target.model_copy(deep=True)
        damage = 0
        if base_damage > 0:
            damage = updated_target.take_damage(
                base_damage + caster.battle_stats.magical_attack // 2
            )
        healing = updated_target.heal(heal)
        if over_time is not None:
            updated_target.active_effects.append(over_time)

        # Self-cast: caster and target are the same creature.
        if target.id == caster.id:
            updated_caster = updated_target
        else:
            updated_caster = caster.model_copy(deep=True)

        return SpellResult(
            updated_caster=updated_caster,
            updated_target=updated_target,
            spell_effect={"damage": damage, "healing": healing},
        )

    def defend_creature(self, creature: Creature, difficulty: str) -> Creature:
        return creature.model_copy(update={"is_defending": True}, deep=True)
