"""Difficulty registry -- loads and serves the per-tier tuning table.

The tiers ship as package data in ``data/difficulty.json``.  A custom
table can be loaded from any JSON file with the same shape.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

_DEFAULT_DIFFICULTY_PATH = Path(__file__).resolve().parents[1] / "data" / "difficulty.json"

DEFAULT_DIFFICULTY = "easy"


class DifficultySettings(BaseModel):
    """Tuning for one difficulty tier."""

    name: str = DEFAULT_DIFFICULTY
    description: str = ""
    enemy_deck_size: int = 5
    initial_hand_size: int = 2
    """Enemy opening hand; the enemy redraws while its hand is below this + 1."""

    enemy_energy_regen: float = 2
    """Enemy regen modifier is ``floor(enemy_energy_regen) - 2``."""

    multi_action_chance: float = 0.3
    """Chance the AI acts again after a single action."""

    enemy_stat_multiplier: float = 1.0
    max_enemy_form: int = 1
    enemy_rarities: list[str] = Field(default_factory=lambda: ["Common"])
    enemy_tool_count: int = 1
    enemy_spell_count: int = 0


class DifficultyRegistry:
    """Holds every known difficulty tier.

    Parameters
    ----------
    path:
        JSON file mapping tier name to settings.  Defaults to the bundled
        table.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else _DEFAULT_DIFFICULTY_PATH
        self._settings: dict[str, DifficultySettings] = {}
        self._load()

    def _load(self) -> None:
        with open(self._path) as f:
            raw = json.load(f)
        for name, data in raw.items():
            self._settings[name] = DifficultySettings(name=name, **data)
        logger.debug("Loaded %d difficulty tiers from %s", len(self._settings), self._path)

    @property
    def names(self) -> list[str]:
        return list(self._settings)

    def get_settings(self, difficulty: str) -> DifficultySettings:
        """Settings for *difficulty*.  Unknown tiers fall back to the default tier."""
        settings = self._settings.get(difficulty)
        if settings is None:
            logger.warning(
                "Unknown difficulty %r, falling back to %r", difficulty, DEFAULT_DIFFICULTY,
            )
            settings = self._settings[DEFAULT_DIFFICULTY]
        return settings

    def __contains__(self, difficulty: str) -> bool:
        return difficulty in self._settings
