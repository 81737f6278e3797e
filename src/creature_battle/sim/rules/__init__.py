"""Combat-resolution rules consumed by the battle core."""

from .base import CombatRules
from .basic import BasicCombatRules

__all__ = ["CombatRules", "BasicCombatRules"]
