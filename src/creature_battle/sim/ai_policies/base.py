"""Base class for battle AI policies.

A policy looks at one side's hand, field, items and energy together with
the opposing field, and answers with what that side should do next:

- a single ``AIActionDescriptor`` (the orchestrator may ask again),
- a list of descriptors executed one after another, or
- the ``END_TURN`` sentinel.

Policies never touch the battle state; they only describe actions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.core.actions import AIActionDescriptor, AIActionKind

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature, SpellItem, ToolItem

AIDecision = Union[AIActionDescriptor, list[AIActionDescriptor]]


class AIPolicy(ABC):
    """Base class for policies that pick battle actions."""

    @abstractmethod
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
        """Choose the next action for the acting side.

        Parameters
        ----------
        difficulty:
            Difficulty tier of the battle.
        hand:
            Creatures the acting side can deploy.
        field:
            The acting side's deployed creatures.
        opponent_field:
            The opposing side's deployed creatures.
        tools, spells:
            Items the acting side still holds.
        energy:
            The acting side's current energy.

        Returns
        -------
        AIDecision
            One descriptor, a list of descriptors, or ``END_TURN``.
        """


def is_offensive_spell(spell: SpellItem) -> bool:
    """True if *spell* should target the opposing field."""
    effect = spell.effect
    if effect.get("damage", 0) > 0:
        return True
    over_time = effect.get("over_time") or {}
    return over_time.get("health_effect", 0) < 0


def legal_actions(
    hand: list[Creature],
    field: list[Creature],
    opponent_field: list[Creature],
    tools: list[ToolItem],
    spells: list[SpellItem],
    energy: int,
    config: BattleConfig = DEFAULT_CONFIG,
) -> list[AIActionDescriptor]:
    """Every descriptor the acting side can currently afford.

    Does not include ``END_TURN``.
    """
    actions: list[AIActionDescriptor] = []
    costs = config.costs

    if len(field) < config.max_field_size:
        for creature in hand:
            cost = creature.battle_stats.energy_cost
            if cost <= energy:
                actions.append(AIActionDescriptor(
                    type=AIActionKind.DEPLOY, creature=creature, energy_cost=cost,
                ))

    if energy >= costs.attack:
        for attacker in field:
            for target in opponent_field:
                actions.append(AIActionDescriptor(
                    type=AIActionKind.ATTACK, attacker=attacker, target=target,
                    energy_cost=costs.attack,
                ))

    if energy >= costs.defend:
        for creature in field:
            if not creature.is_defending:
                actions.append(AIActionDescriptor(
                    type=AIActionKind.DEFEND, creature=creature, energy_cost=costs.defend,
                ))

    if energy >= costs.tool:
        for tool in tools:
            for creature in field:
                actions.append(AIActionDescriptor(
                    type=AIActionKind.USE_TOOL, tool=tool, target=creature,
                ))

    if energy >= costs.spell:
        for spell in spells:
            targets = opponent_field if is_offensive_spell(spell) else field
            for caster in field:
                for target in targets:
                    actions.append(AIActionDescriptor(
                        type=AIActionKind.USE_SPELL, spell=spell, caster=caster,
                        target=target, energy_cost=costs.spell,
                    ))

    return actions
