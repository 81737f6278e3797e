"""Energy economy -- costs, spending, regeneration, momentum and decay.

Energy rules:
    - Both sides start with ``starting_energy`` (10).
    - Every successful costed action spends energy and adds the same amount
      to that side's momentum.
    - A regeneration cycle grants ``base + field bonus (+ difficulty bonus
      for the enemy) + floor(momentum / 10)``, capped at ``max_energy``,
      and resets momentum for both sides.
    - Decay removes ``floor(energy * rate)`` from sides above the decay
      threshold.  It runs at each side's end-turn step, so up to twice per
      round.

These helpers mutate the state passed to them; the reducer only calls
them on its private working copy.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.core.entities import Side

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature
    from creature_battle.sim.core.game_state import BattleState


def deploy_cost(form: int | None, config: BattleConfig = DEFAULT_CONFIG) -> int:
    """Energy needed to deploy a creature of the given *form*.

    Higher forms cost more: form 0 costs 5, form 3 costs 8.
    """
    return config.costs.deploy_base + (form or 0)


def can_afford(battle: BattleState, side: Side, cost: int) -> bool:
    return battle.side(side).energy >= cost


def spend_energy(
    battle: BattleState,
    side: Side,
    cost: int,
    momentum: bool = True,
    config: BattleConfig = DEFAULT_CONFIG,
) -> bool:
    """Spend *cost* energy for *side* and, unless *momentum* is False,
    record it as momentum.

    Returns False (and changes nothing) if the cost is negative or the
    side cannot afford it.
    """
    side_state = battle.side(side)
    if cost < 0 or side_state.energy < cost:
        return False
    side_state.energy = max(0, min(config.max_energy, side_state.energy - cost))
    if momentum:
        battle.energy_momentum.add(side, cost)
    return True


def field_energy_bonus(field: list[Creature], config: BattleConfig = DEFAULT_CONFIG) -> int:
    """Bonus regen from the total ``energy`` stat of deployed creatures.

    Every full ``field_energy_divisor`` (50) points grant +1 energy.
    """
    total = sum(c.stats.get("energy", 0) for c in field)
    return total // config.field_energy_divisor


def difficulty_regen_bonus(enemy_energy_regen: float) -> int:
    """Enemy-only regen modifier derived from the difficulty tier."""
    return math.floor(enemy_energy_regen or 0) - 2


def compute_regen(
    battle: BattleState,
    enemy_energy_regen: float,
    config: BattleConfig = DEFAULT_CONFIG,
) -> tuple[int, int]:
    """Return ``(player_regen, enemy_regen)`` before the momentum bonus.

    The momentum bonus is added by the ``RegenerateEnergy`` transition
    itself because it depends on momentum at the moment of regeneration.
    """
    player_regen = config.base_energy_regen + field_energy_bonus(battle.player.field, config)
    enemy_regen = (
        config.base_energy_regen
        + field_energy_bonus(battle.enemy.field, config)
        + difficulty_regen_bonus(enemy_energy_regen)
    )
    return player_regen, enemy_regen


def regenerate(
    battle: BattleState,
    player_regen: int,
    enemy_regen: int,
    config: BattleConfig = DEFAULT_CONFIG,
) -> dict[Side, int]:
    """Apply one regeneration cycle.  Returns the energy actually gained per side."""
    gained: dict[Side, int] = {}
    for side, regen in ((Side.PLAYER, player_regen), (Side.ENEMY, enemy_regen)):
        side_state = battle.side(side)
        momentum_bonus = battle.energy_momentum.get(side) // config.momentum_divisor
        before = side_state.energy
        side_state.energy = max(0, min(config.max_energy, before + regen + momentum_bonus))
        gained[side] = side_state.energy - before
    battle.energy_momentum.reset()
    return gained


def decay_amount(energy: int, config: BattleConfig = DEFAULT_CONFIG) -> int:
    """Energy lost to decay at *energy*; zero at or below the threshold."""
    if energy <= config.decay_threshold:
        return 0
    return math.floor(energy * config.energy_decay_rate)


def should_decay(battle: BattleState, config: BattleConfig = DEFAULT_CONFIG) -> bool:
    """True if either side currently holds more than the decay threshold."""
    return (
        battle.player.energy > config.decay_threshold
        or battle.enemy.energy > config.decay_threshold
    )


def apply_decay(battle: BattleState, config: BattleConfig = DEFAULT_CONFIG) -> dict[Side, int]:
    """Apply anti-hoarding decay.  Returns the energy lost per side."""
    lost: dict[Side, int] = {}
    for side in (Side.PLAYER, Side.ENEMY):
        side_state = battle.side(side)
        amount = decay_amount(side_state.energy, config)
        side_state.energy = max(0, side_state.energy - amount)
        lost[side] = amount
    return lost
