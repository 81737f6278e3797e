"""Telemetry data models for headless battles.

``BattleTelemetry`` records the statistics the results screen shows
(turns, surviving creatures, enemies defeated, best combo) plus a few
extras useful for balance runs.  It is a plain ``dataclass`` so batch
runs stay cheap.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BattleTelemetry:
    """Stats from a single battle.

    Attributes
    ----------
    seed:
        Seed the battle was generated and played with.
    difficulty:
        Difficulty tier.
    result:
        ``"win"``, ``"loss"`` or ``"timeout"`` (turn cap reached).
    turns:
        Turn counter at the end of the battle.
    remaining_creatures:
        Player creatures left on the field and in hand.
    enemies_defeated:
        Enemy creatures no longer anywhere in the enemy roster.
    combos_achieved:
        Longest player action streak seen.
    log_length:
        Number of battle log entries.
    player_energy_end, enemy_energy_end:
        Energy at the end of the battle.
    """

    seed: int
    difficulty: str
    result: str
    turns: int
    remaining_creatures: int
    enemies_defeated: int
    combos_achieved: int
    log_length: int
    player_energy_end: int = 0
    enemy_energy_end: int = 0


def summarize(results: list[BattleTelemetry]) -> dict[str, float]:
    """Aggregate a batch into win rate, average turns and combos."""
    if not results:
        return {"runs": 0, "win_rate": 0.0, "avg_turns": 0.0, "avg_combo": 0.0, "timeouts": 0}
    wins = sum(1 for r in results if r.result == "win")
    timeouts = sum(1 for r in results if r.result == "timeout")
    return {
        "runs": len(results),
        "win_rate": wins / len(results),
        "avg_turns": sum(r.turns for r in results) / len(results),
        "avg_combo": sum(r.combos_achieved for r in results) / len(results),
        "timeouts": timeouts,
    }
