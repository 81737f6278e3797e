"""Tests for the ongoing-effect processor."""

import pytest

from creature_battle.sim.core.entities import BattleStats, Creature, Effect
from creature_battle.sim.core.game_state import BattleState, SideState
from creature_battle.sim.mechanics.effects import apply_ongoing_effects, tick_creature


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_creature(health: int = 30, effects=None, **kwargs) -> Creature:
    defaults = dict(
        species_name="Thornling",
        battle_stats=BattleStats(max_health=30, physical_attack=8),
        current_health=health,
        active_effects=effects or [],
    )
    defaults.update(kwargs)
    return Creature(**defaults)


# ---------------------------------------------------------------------------
# tick_creature
# ---------------------------------------------------------------------------

class TestTickCreature:
    def test_damage_effect_expires_in_same_pass(self):
        creature = _make_creature(effects=[Effect(name="Poison", duration=1, health_effect=-5)])
        messages = tick_creature(creature, "Thornling")

        assert creature.current_health == 25
        assert creature.active_effects == []
        assert messages == [
            "Thornling damaged for 5 from Poison",
            "Poison effect has expired on Thornling",
        ]

    def test_damage_clamps_at_zero(self):
        creature = _make_creature(health=3,
                                  effects=[Effect(name="Poison", duration=2, health_effect=-5)])
        tick_creature(creature, "Thornling")

        assert creature.current_health == 0

    def test_heal_clamps_at_max(self):
        creature = _make_creature(health=28,
                                  effects=[Effect(name="Regeneration", duration=2, health_effect=5)])
        messages = tick_creature(creature, "Thornling")

        assert creature.current_health == 30
        assert messages == ["Thornling healed for 2 from Regeneration"]

    def test_stat_effect_is_permanent(self):
        creature = _make_creature(effects=[
            Effect(name="Empower", duration=1, stat_effect={"physical_attack": 3}),
        ])
        tick_creature(creature, "Thornling")

        assert creature.active_effects == []
        assert creature.battle_stats.physical_attack == 11

    def test_stat_effect_reapplies_each_tick(self):
        creature = _make_creature(effects=[
            Effect(name="Empower", duration=2, stat_effect={"physical_attack": 1}),
        ])
        tick_creature(creature, "Thornling")
        tick_creature(creature, "Thornling")

        assert creature.battle_stats.physical_attack == 10
        assert creature.active_effects == []

    def test_duration_decrements(self):
        creature = _make_creature(effects=[Effect(name="Poison", duration=3, health_effect=-1)])
        tick_creature(creature, "Thornling")

        assert creature.active_effects[0].duration == 2

    def test_unknown_stat_is_ignored(self):
        creature = _make_creature(effects=[
            Effect(name="Luck", duration=1, stat_effect={"luck": 5}),
        ])
        tick_creature(creature, "Thornling")

        assert creature.battle_stats.get_stat("luck") is None

    def test_none_effects_are_dropped(self):
        creature = _make_creature(effects=[None, Effect(name="Poison", duration=2, health_effect=-1)])
        tick_creature(creature, "Thornling")

        assert len(creature.active_effects) == 1
        assert creature.active_effects[0].name == "Poison"

    def test_defensive_stance_ends(self):
        creature = _make_creature(is_defending=True)
        tick_creature(creature, "Thornling")

        assert not creature.is_defending


# ---------------------------------------------------------------------------
# apply_ongoing_effects
# ---------------------------------------------------------------------------

class TestApplyOngoingEffects:
    def test_removes_fallen_and_labels_enemies(self):
        doomed = _make_creature(health=2,
                                effects=[Effect(name="Poison", duration=2, health_effect=-5)])
        battle = BattleState(enemy=SideState(field=[doomed]))
        lines = apply_ongoing_effects(battle)

        assert battle.enemy.field == []
        assert lines == ["Enemy Thornling damaged for 2 from Poison"]

    def test_combines_messages_per_creature(self):
        creature = _make_creature(effects=[Effect(name="Poison", duration=1, health_effect=-5)])
        battle = BattleState(player=SideState(field=[creature]))
        lines = apply_ongoing_effects(battle)

        assert lines == [
            "Thornling damaged for 5 from Poison. Poison effect has expired on Thornling",
        ]

    def test_no_effects_no_lines(self):
        battle = BattleState(player=SideState(field=[_make_creature()]))

        assert apply_ongoing_effects(battle) == []
        assert len(battle.player.field) == 1
