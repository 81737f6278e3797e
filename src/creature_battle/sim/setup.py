"""Battle setup -- turns owned rosters into a ``StartBattle`` action.

Player and enemy records are stamped into battle creatures (derived
stats, deploy cost, full health, no effects), split into opening hands
and decks, and packed together with both sides' items.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.core.actions import StartBattle
from creature_battle.sim.core.entities import Creature
from creature_battle.sim.mechanics.energy import deploy_cost

if TYPE_CHECKING:
    from creature_battle.content.difficulty import DifficultyRegistry
    from creature_battle.content.generator import EnemyGenerator, OwnedCreature, StatDeriver
    from creature_battle.sim.core.entities import SpellItem, ToolItem

logger = logging.getLogger(__name__)


def stamp_creature(
    owned: OwnedCreature,
    deriver: StatDeriver,
    config: BattleConfig = DEFAULT_CONFIG,
) -> Creature:
    """Create the battle instance of an owned creature."""
    stats = deriver.calculate_derived_stats(owned)
    stats.energy_cost = deploy_cost(owned.form, config)
    return Creature(
        id=owned.id,
        species_name=owned.species_name,
        form=owned.form,
        rarity=owned.rarity,
        stats=dict(owned.stats),
        battle_stats=stats,
        current_health=stats.max_health,
        active_effects=[],
        is_defending=False,
    )


def build_start_battle(
    difficulty: str,
    player_roster: list[OwnedCreature],
    *,
    deriver: StatDeriver,
    generator: EnemyGenerator,
    registry: DifficultyRegistry,
    player_tools: list[ToolItem] | None = None,
    player_spells: list[SpellItem] | None = None,
    config: BattleConfig = DEFAULT_CONFIG,
) -> StartBattle:
    """Assemble the ``StartBattle`` action for a new battle.

    Parameters
    ----------
    difficulty:
        Difficulty tier name.
    player_roster:
        The player's owned creatures, in draw order.
    deriver:
        Stat derivation used for both sides.
    generator:
        Produces the enemy roster and enemy items.
    registry:
        Difficulty tier table.
    player_tools, player_spells:
        The player's items; empty when omitted.

    Returns
    -------
    StartBattle
        Ready to dispatch to a ``BattleStore``.

    Raises
    ------
    ValueError
        If *player_roster* is empty.
    """
    if not player_roster:
        raise ValueError("You need creatures to battle!")

    settings = registry.get_settings(difficulty)

    player = [stamp_creature(c, deriver, config) for c in player_roster]
    enemy_records = generator.generate_creatures(
        difficulty, settings.enemy_deck_size, player_roster,
    )
    enemy = [stamp_creature(c, deriver, config) for c in enemy_records]
    enemy_tools, enemy_spells = generator.generate_items(difficulty)

    player_hand_size = min(config.player_initial_hand_size, len(player))
    enemy_hand_size = settings.initial_hand_size

    logger.debug(
        "Setup %s: %d player creatures, %d enemies, %d enemy tools, %d enemy spells",
        difficulty, len(player), len(enemy), len(enemy_tools), len(enemy_spells),
    )

    return StartBattle(
        difficulty=difficulty,
        player_deck=player[player_hand_size:],
        player_hand=player[:player_hand_size],
        player_tools=list(player_tools or []),
        player_spells=list(player_spells or []),
        enemy_deck=enemy[enemy_hand_size:],
        enemy_hand=enemy[:enemy_hand_size],
        enemy_tools=enemy_tools,
        enemy_spells=enemy_spells,
    )
