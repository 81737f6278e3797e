"""Tests for the battle AI policies."""

from __future__ import annotations

import pytest

from creature_battle.config import BattleConfig, EnergyCosts
from creature_battle.sim.ai_policies import GreedyPolicy, RandomPolicy, legal_actions
from creature_battle.sim.ai_policies.base import is_offensive_spell
from creature_battle.sim.core.actions import END_TURN, AIActionKind
from creature_battle.sim.core.entities import BattleStats, Creature, SpellItem, ToolItem
from creature_battle.sim.core.rng import BattleRNG


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_creature(cid: str, attack: int = 10, health: int = 40, cost: int = 5, **kwargs) -> Creature:
    return Creature(
        id=cid,
        species_name=cid.capitalize(),
        battle_stats=BattleStats(
            max_health=40, physical_attack=attack, magical_attack=attack // 2, energy_cost=cost,
        ),
        current_health=health,
        **kwargs,
    )


_SALVE = ToolItem(id="salve", name="Healing Salve", effect={"heal": 20})
_GAUNTLET = ToolItem(id="gauntlet", name="Power Gauntlet",
                     effect={"stat_changes": {"physical_attack": 3}})
_FIREBALL = SpellItem(id="fireball", name="Fireball", effect={"damage": 12})
_MEND = SpellItem(id="mend", name="Mend", effect={"heal": 25})
_POISON = SpellItem(id="poison", name="Poison Cloud",
                    effect={"over_time": {"name": "Poison", "duration": 3, "health_effect": -4}})


def _decide(policy, hand=(), field=(), opponent=(), tools=(), spells=(), energy=10):
    return policy.determine_action(
        "medium", list(hand), list(field), list(opponent), list(tools), list(spells), energy,
    )


# ---------------------------------------------------------------------------
# legal_actions
# ---------------------------------------------------------------------------

class TestLegalActions:
    def test_nothing_available(self):
        assert legal_actions([], [], [], [], [], 10) == []

    def test_deploy_respects_energy(self):
        cheap, pricey = _make_creature("cheap", cost=5), _make_creature("pricey", cost=8)
        actions = legal_actions([cheap, pricey], [], [], [], [], 6)

        assert [(a.type, a.creature.id, a.energy_cost) for a in actions] == [
            (AIActionKind.DEPLOY, "cheap", 5),
        ]

    def test_no_deploy_on_full_field(self):
        field = [_make_creature(f"f{i}") for i in range(4)]
        actions = legal_actions([_make_creature("h")], field, [], [], [], 10)

        assert all(a.type is not AIActionKind.DEPLOY for a in actions)

    def test_attack_pairs_and_defend(self):
        field = [_make_creature("a"), _make_creature("b", is_defending=True)]
        opponent = [_make_creature("x"), _make_creature("y")]
        actions = legal_actions([], field, opponent, [], [], 10)
        kinds = [a.type for a in actions]

        assert kinds.count(AIActionKind.ATTACK) == 4
        assert [a.creature.id for a in actions if a.type is AIActionKind.DEFEND] == ["a"]

    def test_spell_targets(self):
        field = [_make_creature("a")]
        opponent = [_make_creature("x")]
        actions = legal_actions([], field, opponent, [], [_FIREBALL, _MEND], 10)
        spells = {a.spell.id: a.target.id for a in actions if a.type is AIActionKind.USE_SPELL}

        assert spells == {"fireball": "x", "mend": "a"}

    def test_spells_need_energy(self):
        actions = legal_actions([], [_make_creature("a")], [_make_creature("x")], [], [_FIREBALL], 3)
        assert all(a.type is not AIActionKind.USE_SPELL for a in actions)


class TestIsOffensiveSpell:
    @pytest.mark.parametrize("spell,expected", [
        (_FIREBALL, True),
        (_POISON, True),
        (_MEND, False),
    ])
    def test_classification(self, spell, expected):
        assert is_offensive_spell(spell) is expected


# ---------------------------------------------------------------------------
# RandomPolicy
# ---------------------------------------------------------------------------

class TestRandomPolicy:
    def test_ends_turn_without_options(self):
        assert _decide(RandomPolicy(BattleRNG(1)), energy=0) is END_TURN

    def test_always_end_turn(self):
        policy = RandomPolicy(BattleRNG(1), end_turn_chance=1.0)
        assert _decide(policy, field=[_make_creature("a")], opponent=[_make_creature("x")]) is END_TURN

    def test_sequences(self):
        policy = RandomPolicy(BattleRNG(1), end_turn_chance=0.0, sequence_chance=1.0, max_sequence=3)
        decision = _decide(policy, field=[_make_creature("a")], opponent=[_make_creature("x")])

        assert isinstance(decision, list)
        assert 2 <= len(decision) <= 3

    def test_single_action_is_legal(self):
        field = [_make_creature("a")]
        opponent = [_make_creature("x")]
        legal = legal_actions([], field, opponent, [_GAUNTLET], [], 10)
        policy = RandomPolicy(BattleRNG(4), end_turn_chance=0.0, sequence_chance=0.0)

        for _ in range(20):
            assert _decide(policy, field=field, opponent=opponent, tools=[_GAUNTLET]) in legal

    def test_same_seed_same_choices(self):
        field = [_make_creature("a"), _make_creature("b")]
        opponent = [_make_creature("x"), _make_creature("y")]

        def _play(seed):
            policy = RandomPolicy(BattleRNG(seed))
            return [_decide(policy, field=field, opponent=opponent) for _ in range(10)]

        assert _play(5) == _play(5)


# ---------------------------------------------------------------------------
# GreedyPolicy
# ---------------------------------------------------------------------------

class TestGreedyPolicy:
    def test_patch_up_injured_creature(self):
        hurt = _make_creature("hurt", health=10)
        decision = _decide(
            GreedyPolicy(), field=[_make_creature("a"), hurt], opponent=[_make_creature("x")],
            tools=[_GAUNTLET, _SALVE],
        )

        assert decision.type is AIActionKind.USE_TOOL
        assert decision.tool.id == "salve"
        assert decision.target.id == "hurt"

    def test_open_with_strongest_deploy(self):
        hand = [_make_creature("weak", attack=5), _make_creature("strong", attack=20)]
        decision = _decide(GreedyPolicy(), hand=hand, opponent=[_make_creature("x")])

        assert decision.type is AIActionKind.DEPLOY
        assert decision.creature.id == "strong"

    def test_deploy_when_nothing_to_attack(self):
        decision = _decide(GreedyPolicy(), hand=[_make_creature("h")], field=[_make_creature("a")])
        assert decision.type is AIActionKind.DEPLOY

    def test_strike_weakest_with_hardest_hitter(self):
        field = [_make_creature("soft", attack=5), _make_creature("hard", attack=15)]
        opponent = [_make_creature("full"), _make_creature("low", health=12)]
        decision = _decide(GreedyPolicy(), field=field, opponent=opponent)

        assert decision.type is AIActionKind.ATTACK
        assert decision.attacker.id == "hard"
        assert decision.target.id == "low"
        assert decision.energy_cost == 2

    def test_cast_when_attacks_are_too_expensive(self):
        config = BattleConfig(costs=EnergyCosts(attack=6))
        decision = _decide(
            GreedyPolicy(config), field=[_make_creature("a")], opponent=[_make_creature("x")],
            spells=[_MEND, _FIREBALL], energy=5,
        )

        assert decision.type is AIActionKind.USE_SPELL
        assert decision.spell.id == "fireball"
        assert decision.target.id == "x"

    def test_buff(self):
        decision = _decide(GreedyPolicy(), field=[_make_creature("a")], tools=[_GAUNTLET])

        assert decision.type is AIActionKind.USE_TOOL
        assert decision.tool.id == "gauntlet"

    def test_brace_when_low(self):
        hurt = _make_creature("hurt", health=12)
        decision = _decide(GreedyPolicy(), field=[hurt], opponent=[_make_creature("x")], energy=1)

        assert decision.type is AIActionKind.DEFEND
        assert decision.creature.id == "hurt"

    def test_end_turn(self):
        assert _decide(GreedyPolicy(), field=[_make_creature("a")], energy=0) is END_TURN
