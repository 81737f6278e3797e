"""Tunable constants for the battle core.

All balance numbers live in ``BattleConfig`` so that a scenario can be
rerun with different values without touching code.  A config can be
loaded from JSON; any key that is omitted keeps its default.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class EnergyCosts(BaseModel):
    """Default energy cost per action kind (overridable per action)."""

    attack: int = 2
    defend: int = 1
    spell: int = 4
    tool: int = 0
    deploy_base: int = 5
    """Deploy cost is ``deploy_base + form`` (form 0 -> 5 ... form 3 -> 8)."""


class TimingConfig(BaseModel):
    """Presentation delays in seconds.  Outcomes never depend on them."""

    player_action_cooldown: float = 0.3
    enemy_turn_delay: float = 0.75
    ai_step_delay: float = 0.8
    ai_continuation_delay: float = 1.0
    ai_end_turn_delay: float = 0.5
    settle_delay: float = 0.1

    @classmethod
    def instant(cls) -> TimingConfig:
        """All delays collapsed to zero."""
        return cls(
            player_action_cooldown=0.0,
            enemy_turn_delay=0.0,
            ai_step_delay=0.0,
            ai_continuation_delay=0.0,
            ai_end_turn_delay=0.0,
            settle_delay=0.0,
        )


class BattleConfig(BaseModel):
    """Every balance constant used by the reducer and the orchestrator."""

    max_energy: int = 15
    starting_energy: int = 10
    base_energy_regen: int = 3
    energy_decay_rate: float = 0.1
    decay_threshold: int = 10
    """Only sides holding more energy than this decay."""

    momentum_divisor: int = 10
    field_energy_divisor: int = 50

    costs: EnergyCosts = Field(default_factory=EnergyCosts)

    max_field_size: int = 4
    max_hand_size: int = 5
    player_initial_hand_size: int = 3

    combo_threshold: int = 3
    combo_attack_bonus: int = 2

    min_energy_for_continuation: int = 2
    max_ai_actions_per_turn: int = 10

    timing: TimingConfig = Field(default_factory=TimingConfig)

    @classmethod
    def load(cls, path: str | Path) -> BattleConfig:
        """Read a config from a JSON file."""
        return cls.model_validate_json(Path(path).read_text())


DEFAULT_CONFIG = BattleConfig()
