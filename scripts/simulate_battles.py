"""Run headless battles and print win rate and average turns.

Usage:
    uv run python scripts/simulate_battles.py [--difficulty medium] [--runs 20] [--seed 42]
        [--policy greedy|random] [--enemy-policy greedy|random] [--config path] [--verbose]
"""

from __future__ import annotations

import argparse
import logging
import time

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.content.difficulty import DifficultyRegistry
from creature_battle.sim.ai_policies import GreedyPolicy, RandomPolicy
from creature_battle.sim.runner import BatchRunner
from creature_battle.sim.telemetry import summarize

_POLICIES = {"greedy": GreedyPolicy, "random": RandomPolicy}


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate creature battles")
    parser.add_argument("--difficulty", default="medium", help="Difficulty tier")
    parser.add_argument("--runs", type=int, default=20, help="Number of battles")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--policy", choices=sorted(_POLICIES), default="greedy",
                        help="Player policy")
    parser.add_argument("--enemy-policy", choices=sorted(_POLICIES), default="random",
                        help="Enemy policy")
    parser.add_argument("--config", type=str, default=None, help="BattleConfig JSON file")
    parser.add_argument("--parallel", action="store_true", help="Run battles in parallel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("simulate_battles")

    registry = DifficultyRegistry()
    if args.difficulty not in registry:
        parser.error(f"unknown difficulty {args.difficulty!r} (choose from {registry.names})")

    config = BattleConfig.load(args.config) if args.config else DEFAULT_CONFIG

    runner = BatchRunner(
        difficulty=args.difficulty,
        player_policy_class=_POLICIES[args.policy],
        enemy_policy_class=_POLICIES[args.enemy_policy],
        config=config,
    )

    logger.info("Running %d %s battles (%s vs %s)...",
                args.runs, args.difficulty, args.policy, args.enemy_policy)
    t0 = time.perf_counter()
    results = runner.run_batch(args.runs, base_seed=args.seed, parallel=args.parallel)
    elapsed = time.perf_counter() - t0
    logger.info("Done in %.1fs", elapsed)

    stats = summarize(results)
    print()
    print(f"Difficulty:  {args.difficulty}")
    print(f"Runs:        {stats['runs']}")
    print(f"Win rate:    {stats['win_rate']:.1%}")
    print(f"Avg turns:   {stats['avg_turns']:.1f}")
    print(f"Avg combo:   {stats['avg_combo']:.1f}")
    print(f"Timeouts:    {stats['timeouts']}")


if __name__ == "__main__":
    main()
