"""Headless battle runner -- plays whole battles without a UI.

Provides two classes:

- **BattleRunner**: sets up and plays one battle to completion, driving
  the player side through ``BattleOrchestrator.dispatch_intent`` with an
  ``AIPolicy`` and the enemy side with another, on a ``VirtualScheduler``.
- **BatchRunner**: runs many seeds (optionally in parallel).
"""

from __future__ import annotations

import logging
import multiprocessing
from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.content.difficulty import DifficultyRegistry
from creature_battle.content.generator import (
    BasicStatDeriver,
    RandomEnemyGenerator,
    random_roster,
    starter_items,
)
from creature_battle.sim.ai_policies.greedy_policy import GreedyPolicy
from creature_battle.sim.ai_policies.random_policy import RandomPolicy
from creature_battle.sim.core.actions import AIActionKind
from creature_battle.sim.core.game_state import GameStatus
from creature_battle.sim.core.rng import BattleRNG
from creature_battle.sim.core.scheduler import VirtualScheduler
from creature_battle.sim.orchestrator import BattleOrchestrator, IntentType, PlayerIntent
from creature_battle.sim.setup import build_start_battle
from creature_battle.sim.telemetry import BattleTelemetry

if TYPE_CHECKING:
    from creature_battle.sim.ai_policies.base import AIPolicy
    from creature_battle.sim.core.actions import AIActionDescriptor

logger = logging.getLogger(__name__)

_MAX_TURNS = 100
_MAX_PLAYER_ACTIONS_PER_TURN = 20

_RESULTS = {GameStatus.VICTORY: "win", GameStatus.DEFEAT: "loss"}


def make_policy(
    policy_class: type[AIPolicy],
    rng: BattleRNG,
    config: BattleConfig = DEFAULT_CONFIG,
) -> AIPolicy:
    """Instantiate a policy, handing it an RNG if it takes one."""
    if issubclass(policy_class, RandomPolicy):
        return policy_class(rng=rng, config=config)
    return policy_class(config=config)


def intent_from_descriptor(descriptor: AIActionDescriptor) -> PlayerIntent:
    """Translate a policy descriptor into the equivalent player intent."""
    kind = descriptor.type
    if kind is AIActionKind.DEPLOY:
        return PlayerIntent(type=IntentType.DEPLOY, source_creature=descriptor.creature)
    if kind is AIActionKind.ATTACK:
        return PlayerIntent(
            type=IntentType.ATTACK,
            source_creature=descriptor.attacker,
            target_creature=descriptor.target,
        )
    if kind is AIActionKind.DEFEND:
        return PlayerIntent(type=IntentType.DEFEND, source_creature=descriptor.creature)
    if kind is AIActionKind.USE_TOOL:
        return PlayerIntent(
            type=IntentType.USE_TOOL, tool=descriptor.tool, source_creature=descriptor.target,
        )
    if kind is AIActionKind.USE_SPELL:
        return PlayerIntent(
            type=IntentType.USE_SPELL,
            spell=descriptor.spell,
            source_creature=descriptor.caster,
            target_creature=descriptor.target,
        )
    return PlayerIntent(type=IntentType.END_TURN)


# =====================================================================
# BattleRunner
# =====================================================================

class BattleRunner:
    """Plays single battles end to end.

    Parameters
    ----------
    difficulty:
        Difficulty tier for every battle.
    player_policy_class, enemy_policy_class:
        Policies for each side, instantiated per battle with a forked RNG.
    registry:
        Difficulty tiers.
    config:
        Balance constants.  Delays are irrelevant under the virtual
        scheduler but are honoured for ordering.
    roster_size:
        Number of creatures in the generated player roster.
    max_turns:
        Turn cap; a battle still running past it is a ``"timeout"``.
    """

    def __init__(
        self,
        difficulty: str = "medium",
        player_policy_class: type[AIPolicy] = GreedyPolicy,
        enemy_policy_class: type[AIPolicy] = RandomPolicy,
        registry: DifficultyRegistry | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
        roster_size: int = 5,
        max_turns: int = _MAX_TURNS,
    ) -> None:
        self.difficulty = difficulty
        self.player_policy_class = player_policy_class
        self.enemy_policy_class = enemy_policy_class
        self.registry = registry or DifficultyRegistry()
        self.config = config
        self.roster_size = roster_size
        self.max_turns = max_turns

    def build(self, seed: int) -> tuple[BattleOrchestrator, VirtualScheduler, AIPolicy]:
        """Set up a battle for *seed* without playing it.

        Returns the started orchestrator, its scheduler and the player policy.
        """
        rng = BattleRNG(seed)
        config = self.config

        roster = random_roster(rng.fork("roster"), self.roster_size)
        tools, spells = starter_items(rng.fork("items"))
        start = build_start_battle(
            self.difficulty,
            roster,
            deriver=BasicStatDeriver(config),
            generator=RandomEnemyGenerator(rng.fork("enemy"), self.registry),
            registry=self.registry,
            player_tools=tools,
            player_spells=spells,
            config=config,
        )

        scheduler = VirtualScheduler()
        orchestrator = BattleOrchestrator(
            policy=make_policy(self.enemy_policy_class, rng.fork("enemy_policy"), config),
            scheduler=scheduler,
            registry=self.registry,
            rng=rng.fork("ai_continuation"),
            config=config,
        )
        orchestrator.start_battle(start)
        scheduler.run_until_idle()

        player_policy = make_policy(self.player_policy_class, rng.fork("player_policy"), config)
        return orchestrator, scheduler, player_policy

    def run(self, seed: int) -> BattleTelemetry:
        """Play one battle to completion (or the turn cap)."""
        orchestrator, scheduler, player_policy = self.build(seed)

        while orchestrator.state.is_in_battle and orchestrator.state.turn <= self.max_turns:
            self._play_player_turn(orchestrator, scheduler, player_policy)
            if not orchestrator.state.is_in_battle:
                break
            orchestrator.dispatch_intent(PlayerIntent(type=IntentType.END_TURN))
            scheduler.run_until_idle()

        telemetry = self._collect(seed, orchestrator)
        logger.debug(
            "Seed %d: %s in %d turns", seed, telemetry.result, telemetry.turns,
        )
        return telemetry

    def _play_player_turn(
        self,
        orchestrator: BattleOrchestrator,
        scheduler: VirtualScheduler,
        policy: AIPolicy,
    ) -> None:
        for _ in range(_MAX_PLAYER_ACTIONS_PER_TURN):
            if not orchestrator.is_idle:
                return
            state = orchestrator.state
            player = state.player
            decision = policy.determine_action(
                state.difficulty,
                list(player.hand),
                list(player.field),
                list(state.enemy.field),
                list(player.tools),
                list(player.spells),
                player.energy,
            )
            steps = decision if isinstance(decision, list) else [decision]
            for step in steps:
                if step.is_end_turn:
                    return
                outcome = orchestrator.dispatch_intent(intent_from_descriptor(step))
                scheduler.run_until_idle()
                if not outcome.accepted:
                    return

    def _collect(self, seed: int, orchestrator: BattleOrchestrator) -> BattleTelemetry:
        state = orchestrator.state
        settings = self.registry.get_settings(state.difficulty)
        return BattleTelemetry(
            seed=seed,
            difficulty=state.difficulty,
            result=_RESULTS.get(state.game_state, "timeout"),
            turns=state.turn,
            remaining_creatures=len(state.player.field) + len(state.player.hand),
            enemies_defeated=max(0, settings.enemy_deck_size - state.enemy.remaining_creatures),
            combos_achieved=orchestrator.max_player_combo,
            log_length=len(state.battle_log),
            player_energy_end=state.player.energy,
            enemy_energy_end=state.enemy.energy,
        )


# =====================================================================
# BatchRunner
# =====================================================================

def _worker_run_single(args: tuple) -> BattleTelemetry:
    """Worker for parallel batches (top-level so it can be pickled)."""
    difficulty, player_cls, enemy_cls, config_json, seed = args
    runner = BattleRunner(
        difficulty=difficulty,
        player_policy_class=player_cls,
        enemy_policy_class=enemy_cls,
        config=BattleConfig.model_validate_json(config_json),
    )
    return runner.run(seed)


class BatchRunner:
    """Runs many battles with consecutive seeds, optionally in parallel."""

    def __init__(
        self,
        difficulty: str = "medium",
        player_policy_class: type[AIPolicy] = GreedyPolicy,
        enemy_policy_class: type[AIPolicy] = RandomPolicy,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self.difficulty = difficulty
        self.player_policy_class = player_policy_class
        self.enemy_policy_class = enemy_policy_class
        self.config = config

    def run_batch(
        self,
        n_runs: int,
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[BattleTelemetry]:
        """Run *n_runs* battles with seeds ``base_seed .. base_seed + n_runs - 1``."""
        seeds = [base_seed + i for i in range(n_runs)]
        if parallel and n_runs > 1:
            return self._run_parallel(seeds)
        return self._run_sequential(seeds)

    def _run_sequential(self, seeds: list[int]) -> list[BattleTelemetry]:
        runner = BattleRunner(
            difficulty=self.difficulty,
            player_policy_class=self.player_policy_class,
            enemy_policy_class=self.enemy_policy_class,
            config=self.config,
        )
        return [runner.run(seed) for seed in seeds]

    def _run_parallel(self, seeds: list[int]) -> list[BattleTelemetry]:
        config_json = self.config.model_dump_json()
        work_items = [
            (self.difficulty, self.player_policy_class, self.enemy_policy_class, config_json, seed)
            for seed in seeds
        ]
        n_workers = min(len(seeds), multiprocessing.cpu_count() or 1)
        with multiprocessing.Pool(processes=n_workers) as pool:
            return pool.map(_worker_run_single, work_items)
