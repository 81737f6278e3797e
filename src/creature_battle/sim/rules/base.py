"""Base class for combat-resolution rules.

The battle core never computes damage or item magnitudes itself.  It asks
a ``CombatRules`` implementation for the *updated* creatures and then
decides, on its own, whether and how to apply them.  Implementations
must not mutate their arguments: they return fresh copies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from creature_battle.sim.core.actions import AttackResult, SpellResult, ToolResult
    from creature_battle.sim.core.entities import Creature, SpellItem, ToolItem


class CombatRules(ABC):
    """Combat math consumed by the reducer and the orchestrator."""

    @abstractmethod
    def process_attack(
        self,
        attacker: Creature,
        defender: Creature,
        attack_type: str | None = None,
    ) -> AttackResult:
        """Resolve one attack.

        Parameters
        ----------
        attacker:
            The attacking creature (snapshot).
        defender:
            The defending creature (snapshot).
        attack_type:
            ``"physical"`` or ``"magical"``; ``None`` lets the rules pick.

        Returns
        -------
        AttackResult
            Updated copies of both creatures plus a one-line narrative.
        """

    @abstractmethod
    def apply_tool(
        self,
        target: Creature,
        tool: ToolItem,
        difficulty: str,
    ) -> ToolResult | None:
        """Apply *tool* to *target*.  ``None`` means the tool had no effect."""

    @abstractmethod
    def apply_spell(
        self,
        caster: Creature,
        target: Creature,
        spell: SpellItem,
        difficulty: str,
    ) -> SpellResult | None:
        """Cast *spell* from *caster* onto *target*.  ``None`` means it fizzled."""

    @abstractmethod
    def defend_creature(self, creature: Creature, difficulty: str) -> Creature:
        """Return a copy of *creature* in a defensive stance."""
