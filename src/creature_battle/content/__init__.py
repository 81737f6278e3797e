"""Battle content: difficulty tiers, stat derivation and enemy generation."""

from creature_battle.content.difficulty import DifficultyRegistry, DifficultySettings
from creature_battle.content.generator import (
    BasicStatDeriver,
    EnemyGenerator,
    OwnedCreature,
    RandomEnemyGenerator,
    StatDeriver,
)

__all__ = [
    "DifficultyRegistry",
    "DifficultySettings",
    "OwnedCreature",
    "StatDeriver",
    "BasicStatDeriver",
    "EnemyGenerator",
    "RandomEnemyGenerator",
]
