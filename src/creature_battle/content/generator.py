"""Owned-creature records, stat derivation and enemy roster generation.

An ``OwnedCreature`` is what a player collects: species, form, rarity and
raw stats.  Before a battle each record is stamped into a battle
``Creature`` with ``BattleStats`` from a ``StatDeriver``.  The enemy
roster is produced by an ``EnemyGenerator`` from the player's roster and
the difficulty tier.
"""

from __future__ import annotations

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.content.difficulty import DifficultyRegistry
from creature_battle.sim.core.entities import BattleStats, SpellItem, ToolItem
from creature_battle.sim.core.rng import BattleRNG
from creature_battle.sim.mechanics.energy import deploy_cost

logger = logging.getLogger(__name__)

RAW_STATS = ("strength", "magic", "stamina", "speed", "energy")

_RARITY_MULTIPLIER: dict[str, float] = {
    "Common": 1.0,
    "Rare": 1.1,
    "Epic": 1.2,
    "Legendary": 1.3,
}

_FALLBACK_SPECIES = ("Emberfox", "Tidecrab", "Thornling", "Galewing", "Stonehorn")

# Item templates: (name, type, effect payload)
_TOOL_TEMPLATES: list[tuple[str, str, dict[str, Any]]] = [
    ("Power Gauntlet", "stat", {"stat_changes": {"physical_attack": 3}}),
    ("Arcane Focus", "stat", {"stat_changes": {"magical_attack": 3}}),
    ("Iron Shell", "stat", {"stat_changes": {"physical_defense": 3, "magical_defense": 2}}),
    ("Healing Salve", "heal", {"heal": 20}),
    ("Regen Charm", "over_time", {
        "over_time": {"name": "Regeneration", "duration": 3, "health_effect": 5},
    }),
]

_SPELL_TEMPLATES: list[tuple[str, str, dict[str, Any]]] = [
    ("Fireball", "damage", {"damage": 12}),
    ("Lightning Bolt", "damage", {"damage": 16}),
    ("Mend", "heal", {"heal": 25}),
    ("Poison Cloud", "over_time", {
        "over_time": {"name": "Poison", "duration": 3, "health_effect": -4},
    }),
    ("Battle Hymn", "over_time", {
        "over_time": {"name": "Empower", "duration": 2, "stat_effect": {"physical_attack": 1}},
    }),
]


# ---------------------------------------------------------------------------
# OwnedCreature
# ---------------------------------------------------------------------------

class OwnedCreature(BaseModel):
    """A collected creature before it is stamped for battle."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    species_name: str
    form: int = 0
    rarity: str = "Common"
    stats: dict[str, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

class StatDeriver(ABC):
    """Turns an owned record into combat stats."""

    @abstractmethod
    def calculate_derived_stats(self, owned: OwnedCreature) -> BattleStats:
        ...


class EnemyGenerator(ABC):
    """Produces the enemy roster and items for a battle."""

    @abstractmethod
    def generate_creatures(
        self,
        difficulty: str,
        count: int,
        player_roster: list[OwnedCreature],
    ) -> list[OwnedCreature]:
        ...

    @abstractmethod
    def generate_items(self, difficulty: str) -> tuple[list[ToolItem], list[SpellItem]]:
        """Return ``(tools, spells)`` for the enemy side."""


# ---------------------------------------------------------------------------
# BasicStatDeriver
# ---------------------------------------------------------------------------

class BasicStatDeriver(StatDeriver):
    """Linear stat derivation scaled by form and rarity.

    Each form step adds 10% and rarity adds up to 30% on top.  The
    energy cost is ``deploy_base + form``.
    """

    def __init__(self, config: BattleConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def calculate_derived_stats(self, owned: OwnedCreature) -> BattleStats:
        s = owned.stats
        strength = s.get("strength", 5)
        magic = s.get("magic", 5)
        stamina = s.get("stamina", 5)
        speed = s.get("speed", 5)
        energy = s.get("energy", 5)

        scale = (1.0 + 0.1 * owned.form) * _RARITY_MULTIPLIER.get(owned.rarity, 1.0)

        def _scaled(value: float) -> int:
            return max(1, round(value * scale))

        return BattleStats(
            max_health=_scaled(50 + stamina * 5),
            physical_attack=_scaled(5 + strength * 2),
            magical_attack=_scaled(5 + magic * 2),
            physical_defense=_scaled(3 + stamina + strength // 2),
            magical_defense=_scaled(3 + magic + energy // 2),
            speed=_scaled(5 + speed),
            energy_cost=deploy_cost(owned.form, self.config),
        )


# ---------------------------------------------------------------------------
# RandomEnemyGenerator
# ---------------------------------------------------------------------------

class RandomEnemyGenerator(EnemyGenerator):
    """Builds enemies that mirror the player's roster, scaled by difficulty.

    Parameters
    ----------
    rng:
        Seeded source for every random pick.
    registry:
        Difficulty tier table.
    """

    def __init__(self, rng: BattleRNG, registry: DifficultyRegistry | None = None) -> None:
        self.rng = rng
        self.registry = registry or DifficultyRegistry()

    def generate_creatures(
        self,
        difficulty: str,
        count: int,
        player_roster: list[OwnedCreature],
    ) -> list[OwnedCreature]:
        settings = self.registry.get_settings(difficulty)
        species = [c.species_name for c in player_roster] or list(_FALLBACK_SPECIES)
        if player_roster:
            baseline = {
                stat: sum(c.stats.get(stat, 5) for c in player_roster) // len(player_roster)
                for stat in RAW_STATS
            }
        else:
            baseline = {stat: 5 for stat in RAW_STATS}

        enemies: list[OwnedCreature] = []
        for _ in range(count):
            stats = {
                stat: max(1, round(
                    (value + self.rng.roll(-1, 1)) * settings.enemy_stat_multiplier
                ))
                for stat, value in baseline.items()
            }
            enemies.append(OwnedCreature(
                species_name=self.rng.pick(species),
                form=self.rng.roll(0, settings.max_enemy_form),
                rarity=self.rng.pick(settings.enemy_rarities),
                stats=stats,
            ))
        logger.debug("Generated %d enemies for %s", len(enemies), difficulty)
        return enemies

    def generate_items(self, difficulty: str) -> tuple[list[ToolItem], list[SpellItem]]:
        settings = self.registry.get_settings(difficulty)
        tools = []
        for _ in range(settings.enemy_tool_count):
            name, tool_type, effect = self.rng.pick(_TOOL_TEMPLATES)
            tools.append(ToolItem(name=name, tool_type=tool_type, effect=copy.deepcopy(effect)))
        spells = []
        for _ in range(settings.enemy_spell_count):
            name, spell_type, effect = self.rng.pick(_SPELL_TEMPLATES)
            spells.append(SpellItem(name=name, spell_type=spell_type, effect=copy.deepcopy(effect)))
        return tools, spells


def starter_items(rng: BattleRNG, tools: int = 2, spells: int = 2) -> tuple[list[ToolItem], list[SpellItem]]:
    """A random player loadout for headless runs."""
    tool_items = []
    for _ in range(tools):
        name, tool_type, effect = rng.pick(_TOOL_TEMPLATES)
        tool_items.append(ToolItem(name=name, tool_type=tool_type, effect=copy.deepcopy(effect)))
    spell_items = []
    for _ in range(spells):
        name, spell_type, effect = rng.pick(_SPELL_TEMPLATES)
        spell_items.append(SpellItem(name=name, spell_type=spell_type, effect=copy.deepcopy(effect)))
    return tool_items, spell_items


def random_roster(rng: BattleRNG, size: int = 5) -> list[OwnedCreature]:
    """A random player roster for headless runs."""
    return [
        OwnedCreature(
            species_name=rng.pick(_FALLBACK_SPECIES),
            form=rng.roll(0, 2),
            rarity=rng.pick(list(_RARITY_MULTIPLIER)),
            stats={stat: rng.roll(3, 9) for stat in RAW_STATS},
        )
        for _ in range(size)
    ]
