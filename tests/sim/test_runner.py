"""Tests for the headless battle runner and telemetry."""

import pytest

from creature_battle.config import BattleConfig, TimingConfig
from creature_battle.sim.ai_policies import GreedyPolicy, RandomPolicy
from creature_battle.sim.core.actions import END_TURN, AIActionDescriptor, AIActionKind
from creature_battle.sim.core.rng import BattleRNG
from creature_battle.sim.orchestrator import IntentType
from creature_battle.sim.runner import (
    BatchRunner,
    BattleRunner,
    intent_from_descriptor,
    make_policy,
)
from creature_battle.sim.telemetry import BattleTelemetry, summarize

_RESULTS = {"win", "loss", "timeout"}


@pytest.fixture(scope="module")
def instant() -> BattleConfig:
    return BattleConfig(timing=TimingConfig.instant())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_make_policy(self):
        assert isinstance(make_policy(GreedyPolicy, BattleRNG(1)), GreedyPolicy)
        assert isinstance(make_policy(RandomPolicy, BattleRNG(1)), RandomPolicy)

    def test_tool_descriptor_targets_source_creature(self, battle):
        descriptor = AIActionDescriptor(
            type=AIActionKind.USE_TOOL, tool=battle.player.tools[0], target=battle.player.field[0],
        )
        intent = intent_from_descriptor(descriptor)

        assert intent.type is IntentType.USE_TOOL
        assert intent.source_creature.id == "p_field"
        assert intent.tool.id == "t_gauntlet"

    def test_attack_descriptor(self, battle):
        descriptor = AIActionDescriptor(
            type=AIActionKind.ATTACK, attacker=battle.player.field[0], target=battle.enemy.field[0],
        )
        intent = intent_from_descriptor(descriptor)

        assert intent.type is IntentType.ATTACK
        assert intent.source_creature.id == "p_field"
        assert intent.target_creature.id == "e_field"

    def test_end_turn_descriptor(self):
        assert intent_from_descriptor(END_TURN).type is IntentType.END_TURN


# ---------------------------------------------------------------------------
# BattleRunner
# ---------------------------------------------------------------------------

class TestBattleRunner:
    def test_build_starts_a_battle(self, instant):
        orchestrator, scheduler, policy = BattleRunner("easy", config=instant).build(3)

        assert orchestrator.state.is_in_battle
        assert orchestrator.is_idle
        assert scheduler.is_idle
        assert isinstance(policy, GreedyPolicy)
        assert len(orchestrator.state.player.hand) == 3

    def test_run_completes(self, instant):
        telemetry = BattleRunner("easy", config=instant).run(5)

        assert telemetry.seed == 5
        assert telemetry.difficulty == "easy"
        assert telemetry.result in _RESULTS
        assert telemetry.turns >= 1
        assert 0 <= telemetry.enemies_defeated <= 5
        assert telemetry.log_length > 0

    def test_run_is_deterministic(self, instant):
        runner = BattleRunner("medium", config=instant)
        assert runner.run(11) == runner.run(11)

    def test_turn_cap(self, instant):
        telemetry = BattleRunner("medium", config=instant, max_turns=1).run(2)

        assert telemetry.result == "timeout"
        assert telemetry.turns == 2

    def test_random_vs_random(self, instant):
        runner = BattleRunner(
            "hard", player_policy_class=RandomPolicy, enemy_policy_class=RandomPolicy,
            config=instant,
        )
        assert runner.run(8).result in _RESULTS


class TestBatchRunner:
    def test_consecutive_seeds(self, instant):
        results = BatchRunner("easy", config=instant).run_batch(3, base_seed=20)

        assert [r.seed for r in results] == [20, 21, 22]
        assert all(r.result in _RESULTS for r in results)


# ---------------------------------------------------------------------------
# Telemetry
# ---------------------------------------------------------------------------

def _telemetry(result: str, turns: int, combo: int = 0) -> BattleTelemetry:
    return BattleTelemetry(
        seed=0, difficulty="easy", result=result, turns=turns,
        remaining_creatures=0, enemies_defeated=0, combos_achieved=combo, log_length=0,
    )


class TestSummarize:
    def test_empty(self):
        assert summarize([]) == {"runs": 0, "win_rate": 0.0, "avg_turns": 0.0, "avg_combo": 0.0, "timeouts": 0}

    def test_aggregates(self):
        stats = summarize([
            _telemetry("win", 10, combo=4),
            _telemetry("loss", 20, combo=2),
            _telemetry("timeout", 30),
            _telemetry("win", 20, combo=2),
        ])

        assert stats["runs"] == 4
        assert stats["win_rate"] == pytest.approx(0.5)
        assert stats["avg_turns"] == pytest.approx(20.0)
        assert stats["avg_combo"] == pytest.approx(2.0)
        assert stats["timeouts"] == 1
