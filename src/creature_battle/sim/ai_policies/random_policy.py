"""Random policy -- picks uniformly among affordable actions.

The ``RandomPolicy`` is the baseline opponent for batch runs.  It lets
us check that every action path works end to end and gives a lower
bound for a smarter policy to beat.

Behaviour:
    - With ``end_turn_chance`` it ends the turn even if it could act.
    - Otherwise, with ``sequence_chance`` it returns a short list of
      random actions (energy permitting at execution time).
    - Otherwise it returns one random action.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.ai_policies.base import AIDecision, AIPolicy, legal_actions
from creature_battle.sim.core.actions import END_TURN
from creature_battle.sim.core.rng import BattleRNG

if TYPE_CHECKING:
    from creature_battle.sim.core.entities import Creature, SpellItem, ToolItem


class RandomPolicy(AIPolicy):
    """Policy that plays random affordable actions.

    Parameters
    ----------
    rng:
        Seeded RNG.  Defaults to ``BattleRNG(seed=0)``.
    end_turn_chance:
        Probability of passing when an action is available.
    sequence_chance:
        Probability of returning a multi-step sequence.
    max_sequence:
        Longest sequence returned.
    """

    def __init__(
        self,
        rng: BattleRNG | None = None,
        end_turn_chance: float = 0.10,
        sequence_chance: float = 0.2,
        max_sequence: int = 3,
        config: BattleConfig = DEFAULT_CONFIG,
    ) -> None:
        self._rng = rng or BattleRNG(seed=0)
        self._end_turn_chance = end_turn_chance
        self._sequence_chance = sequence_chance
        self._max_sequence = max_sequence
        self._config = config

    def determine_action(
        self,
        difficulty: str,
        hand: list[Creature],
        field: list[Creature],
        opponent_field: list[Creature],
        tools: list[ToolItem],
        spells: list[SpellItem],
        energy: int,
    ) -> AIDecision:
        options = legal_actions(hand, field, opponent_field, tools, spells, energy, self._config)
        if not options:
            return END_TURN

        if self._rng.chance(self._end_turn_chance):
            return END_TURN

        if self._max_sequence > 1 and self._rng.chance(self._sequence_chance):
            length = self._rng.roll(2, self._max_sequence)
            return [self._rng.pick(options) for _ in range(length)]

        return self._rng.pick(options)
