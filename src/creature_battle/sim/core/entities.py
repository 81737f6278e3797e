"""Entity models for the creature battle simulator.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  A ``Creature`` here is always a *battle instance*: the
owned-asset record has already been stamped with derived combat stats.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Sides
# ---------------------------------------------------------------------------

class Side(str, Enum):
    """One of the two opposing rosters."""

    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opponent(self) -> Side:
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

class Effect(BaseModel):
    """A duration-based effect attached to a creature.

    ``health_effect`` and ``stat_effect`` are re-applied on every tick the
    effect is present.  Stat deltas accumulate and are *not* reverted when
    the effect expires.
    """

    name: str
    duration: int
    """Ticks remaining; decremented once per ongoing-effect pass."""

    health_effect: int = 0
    stat_effect: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# BattleStats
# ---------------------------------------------------------------------------

class BattleStats(BaseModel):
    """Derived combat stats of a battle instance.

    Unknown stat names are accepted so that stat derivation can add extra
    keys without the core having to know about them.
    """

    model_config = {"extra": "allow"}

    max_health: int = 1
    physical_attack: int = 0
    magical_attack: int = 0
    physical_defense: int = 0
    magical_defense: int = 0
    speed: int = 0
    energy_cost: int = 5

    def get_stat(self, stat: str) -> int | None:
        """Return the value of *stat*, or ``None`` if the stat is unknown."""
        if stat in type(self).model_fields:
            return getattr(self, stat)
        extra = self.__pydantic_extra__ or {}
        return extra.get(stat)

    def add_to_stat(self, stat: str, delta: int) -> bool:
        """Add *delta* to an existing stat.  Returns False if the stat is unknown."""
        current = self.get_stat(stat)
        if current is None:
            return False
        setattr(self, stat, current + delta)
        return True


# ---------------------------------------------------------------------------
# Creature
# ---------------------------------------------------------------------------

class Creature(BaseModel):
    """A creature as it exists inside one battle."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    species_name: str
    form: int = 0
    rarity: str = "Common"
    stats: dict[str, int] = Field(default_factory=dict)
    """Raw stats of the owned record (``energy`` feeds energy regen)."""

    battle_stats: BattleStats = Field(default_factory=BattleStats)
    current_health: int = 1
    active_effects: list[Effect | None] = Field(default_factory=list)
    is_defending: bool = False

    # -- queries -------------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.current_health <= 0

    @property
    def preferred_attack_type(self) -> str:
        """``"physical"`` if physical attack strictly exceeds magical."""
        if self.battle_stats.physical_attack > self.battle_stats.magical_attack:
            return "physical"
        return "magical"

    # -- health --------------------------------------------------------------

    def take_damage(self, amount: int) -> int:
        """Apply *amount* damage.  Returns the HP actually lost."""
        if amount <= 0:
            return 0
        lost = min(self.current_health, amount)
        self.current_health -= lost
        return lost

    def heal(self, amount: int) -> int:
        """Heal *amount* HP, capped at ``max_health``.  Returns HP restored."""
        if amount <= 0:
            return 0
        before = self.current_health
        self.current_health = min(self.battle_stats.max_health, self.current_health + amount)
        return self.current_health - before


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

class ToolItem(BaseModel):
    """A single-use tool.  ``effect`` is opaque to the battle core and is
    interpreted only by the combat rules collaborator."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    tool_type: str = "stat"
    effect: dict[str, Any] = Field(default_factory=dict)


class SpellItem(BaseModel):
    """A single-use spell.  ``effect`` is opaque to the battle core."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str
    spell_type: str = "damage"
    effect: dict[str, Any] = Field(default_factory=dict)
