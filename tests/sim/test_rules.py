"""Tests for BasicCombatRules."""

from creature_battle.sim.core.entities import Effect, SpellItem, ToolItem


class TestProcessAttack:
    def test_physical_attack(self, rules, battle):
        attacker, defender = battle.player.field[0], battle.enemy.field[0]
        result = rules.process_attack(attacker, defender)

        assert result.updated_defender.current_health == 30
        assert result.battle_log == "Emberfox attacked Galewing for 10 physical damage!"
        # Inputs are never mutated.
        assert defender.current_health == 40
        assert result.updated_attacker is not attacker

    def test_magical_when_not_strictly_physical(self, rules, battle):
        attacker = battle.player.field[0]
        attacker.battle_stats.physical_attack = 6
        result = rules.process_attack(attacker, battle.enemy.field[0])

        assert "4 magical damage" in result.battle_log

    def test_explicit_attack_type(self, rules, battle):
        result = rules.process_attack(battle.player.field[0], battle.enemy.field[0], "magical")
        assert result.updated_defender.current_health == 36

    def test_defending_halves_damage(self, rules, battle):
        battle.enemy.field[0].is_defending = True
        result = rules.process_attack(battle.player.field[0], battle.enemy.field[0])
        assert result.updated_defender.current_health == 35

    def test_minimum_damage(self, rules, battle):
        battle.enemy.field[0].battle_stats.physical_defense = 100
        result = rules.process_attack(battle.player.field[0], battle.enemy.field[0])
        assert result.updated_defender.current_health == 39

    def test_defeat_message(self, rules, battle):
        battle.enemy.field[0].current_health = 4
        result = rules.process_attack(battle.player.field[0], battle.enemy.field[0])

        assert result.updated_defender.current_health == 0
        assert result.battle_log == (
            "Emberfox attacked Galewing for 4 physical damage! Galewing was defeated!"
        )


class TestApplyTool:
    def test_stat_changes_skip_unknown_stats(self, rules, battle):
        tool = ToolItem(name="Odd Charm", effect={"stat_changes": {"speed": 2, "luck": 9}})
        result = rules.apply_tool(battle.player.field[0], tool, "easy")

        assert result.updated_creature.battle_stats.speed == 7
        assert result.tool_effect == {"stat_changes": {"speed": 2}, "health_change": 0}

    def test_heal_is_capped(self, rules, battle):
        battle.player.field[0].current_health = 35
        result = rules.apply_tool(battle.player.field[0], battle.enemy.tools[0], "easy")

        assert result.updated_creature.current_health == 40
        assert result.tool_effect["health_change"] == 5

    def test_over_time_effect_attached(self, rules, battle):
        tool = ToolItem(name="Regen Charm", effect={
            "over_time": {"name": "Regeneration", "duration": 3, "health_effect": 5},
        })
        result = rules.apply_tool(battle.player.field[0], tool, "easy")

        assert result.updated_creature.active_effects == [
            Effect(name="Regeneration", duration=3, health_effect=5),
        ]
        assert battle.player.field[0].active_effects == []

    def test_no_effect(self, rules, battle):
        assert rules.apply_tool(battle.player.field[0], ToolItem(name="Dud"), "easy") is None


class TestApplySpell:
    def test_damage_scales_with_magic(self, rules, battle):
        result = rules.apply_spell(
            battle.player.field[0], battle.enemy.field[0], battle.player.spells[0], "easy",
        )

        assert result.updated_target.current_health == 25
        assert result.spell_effect == {"damage": 15, "healing": 0}
        assert result.updated_caster.id == "p_field"

    def test_self_cast_returns_one_creature(self, rules, battle):
        caster = battle.player.field[0]
        caster.current_health = 20
        spell = SpellItem(name="Mend", effect={"heal": 25})
        result = rules.apply_spell(caster, caster, spell, "easy")

        assert result.updated_caster is result.updated_target
        assert result.updated_target.current_health == 40
        assert result.spell_effect["healing"] == 20

    def test_fizzle(self, rules, battle):
        spell = SpellItem(name="Blank", effect={})
        assert rules.apply_spell(battle.player.field[0], battle.enemy.field[0], spell, "easy") is None


class TestDefendCreature:
    def test_defend_returns_copy(self, rules, battle):
        creature = battle.player.field[0]
        updated = rules.defend_creature(creature, "easy")

        assert updated.is_defending
        assert not creature.is_defending
