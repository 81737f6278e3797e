"""Greedy policy -- a priority waterfall over the obvious good moves.

Each call walks the list below and returns the first move that applies:

1. **Patch up**: use a healing tool on a creature under half health.
2. **Open**: deploy the strongest affordable creature if our field is
   empty or there is nothing to attack.
3. **Strike**: attack the weakest enemy with our hardest hitter.
4. **Cast**: throw an offensive spell at the weakest enemy.
5. **Reinforce**: deploy the strongest affordable creature.
6. **Buff**: use a stat tool on our hardest hitter.
7. **Brace**: defend the most injured creature under 40% health.
8. Otherwise end the turn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.ai_policies.base import AIDecision, AIPolicy, is_offensive_spell
from creature_battle.sim.core.actions import END_TURN, AIActionDescriptor, AIActionKind

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature, SpellItem, ToolItem

_PATCH_UP_RATIO = 0.5
_BRACE_RATIO = 0.4


def _power(creature: Creature) -> int:
    return max(creature.battle_stats.physical_attack, creature.battle_stats.magical_attack)


def _health_ratio(creature: Creature) -> float:
    return creature.current_health / max(1, creature.battle_stats.max_health)


class GreedyPolicy(AIPolicy):
    """Deterministic policy that always takes the first good move."""

    def __init__(self, config: BattleConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def determine_action(
        self,
        difficulty: str,
        hand: list[Creature],
        field: list[Creature],
        opponent_field: list[Creature],
        tools: list[ToolItem],
        spells: list[SpellItem],
        energy: int,
    ) -> AIDecision:
        costs = self._config.costs

        # 1. Patch up
        heal_tools = [t for t in tools if t.effect.get("heal", 0) > 0]
        injured = [c for c in field if _health_ratio(c) < _PATCH_UP_RATIO]
        if heal_tools and injured and energy >= costs.tool:
            target = min(injured, key=_health_ratio)
            return AIActionDescriptor(type=AIActionKind.USE_TOOL, tool=heal_tools[0], target=target)

        deploy = self._best_deploy(hand, field, energy)

        # 2. Open
        if deploy is not None and (not field or not opponent_field):
            return deploy

        # 3. Strike
        if field and opponent_field and energy >= costs.attack:
            attacker = max(field, key=_power)
            target = min(opponent_field, key=lambda c: c.current_health)
            return AIActionDescriptor(
                type=AIActionKind.ATTACK, attacker=attacker, target=target,
                energy_cost=costs.attack,
            )

        # 4. Cast
        offensive = [s for s in spells if is_offensive_spell(s)]
        if offensive and field and opponent_field and energy >= costs.spell:
            caster = max(field, key=lambda c: c.battle_stats.magical_attack)
            target = min(opponent_field, key=lambda c: c.current_health)
            return AIActionDescriptor(
                type=AIActionKind.USE_SPELL, spell=offensive[0], caster=caster,
                target=target, energy_cost=costs.spell,
            )

        # 5. Reinforce
        if deploy is not None:
            return deploy

        # 6. Buff
        stat_tools = [t for t in tools if t.effect.get("stat_changes")]
        if stat_tools and field and energy >= costs.tool:
            return AIActionDescriptor(
                type=AIActionKind.USE_TOOL, tool=stat_tools[0], target=max(field, key=_power),
            )

        # 7. Brace
        bracing = [
            c for c in field
            if not c.is_defending and _health_ratio(c) < _BRACE_RATIO
        ]
        if bracing and energy >= costs.defend:
            return AIActionDescriptor(
                type=AIActionKind.DEFEND, creature=min(bracing, key=_health_ratio),
                energy_cost=costs.defend,
            )

        return END_TURN

    def _best_deploy(
        self,
        hand: list[Creature],
        field: list[Creature],
        energy: int,
    ) -> AIActionDescriptor | None:
        if len(field) >= self._config.max_field_size:
            return None
        affordable = [c for c in hand if c.battle_stats.energy_cost <= energy]
        if not affordable:
            return None
        best = max(affordable, key=lambda c: (_power(c), c.battle_stats.max_health))
        return AIActionDescriptor(
            type=AIActionKind.DEPLOY, creature=best, energy_cost=best.battle_stats.energy_cost,
        )
