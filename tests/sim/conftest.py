"""Shared fixtures for simulation tests."""

from __future__ import annotations

import pytest

from creature_battle.config import BattleConfig, TimingConfig
from creature_battle.sim.core.entities import BattleStats, Creature, SpellItem, ToolItem
from creature_battle.sim.core.game_state import BattleState, GameStatus, SideState
from creature_battle.sim.rules.basic import BasicCombatRules


def _creature(name: str, cid: str, **kwargs) -> Creature:
    stats = BattleStats(
        max_health=40,
        physical_attack=12,
        magical_attack=6,
        physical_defense=4,
        magical_defense=4,
        speed=5,
        energy_cost=5,
    )
    defaults = dict(id=cid, species_name=name, battle_stats=stats, current_health=40)
    defaults.update(kwargs)
    return Creature(**defaults)


@pytest.fixture(scope="module")
def rules() -> BasicCombatRules:
    return BasicCombatRules()


@pytest.fixture(scope="module")
def config() -> BattleConfig:
    """Default balance constants with every delay collapsed to zero."""
    return BattleConfig(timing=TimingConfig.instant())


@pytest.fixture
def battle() -> BattleState:
    """A battle in progress: one creature deployed per side, cards in hand and deck.

    Player: field [p_field], hand [p_hand], deck [p_deck], energy 10.
    Enemy:  field [e_field], hand [e_hand], deck [e_deck], energy 10.
    """
    return BattleState(
        game_state=GameStatus.BATTLE,
        difficulty="medium",
        player=SideState(
            field=[_creature("Emberfox", "p_field")],
            hand=[_creature("Tidecrab", "p_hand")],
            deck=[_creature("Thornling", "p_deck")],
            tools=[ToolItem(id="t_gauntlet", name="Power Gauntlet",
                            effect={"stat_changes": {"physical_attack": 3}})],
            spells=[SpellItem(id="s_fireball", name="Fireball", effect={"damage": 12})],
        ),
        enemy=SideState(
            field=[_creature("Galewing", "e_field")],
            hand=[_creature("Stonehorn", "e_hand")],
            deck=[_creature("Galewing", "e_deck")],
            tools=[ToolItem(id="t_salve", name="Healing Salve", tool_type="heal",
                            effect={"heal": 20})],
            spells=[SpellItem(id="s_bolt", name="Lightning Bolt", effect={"damage": 16})],
        ),
    )
