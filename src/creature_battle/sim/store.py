"""Battle store -- single owner of the current ``BattleState``.

The store is the only writer.  Everything else reads ``store.state`` (a
snapshot that is never mutated in place) and asks for changes by
dispatching actions.  Listeners are told about every accepted
transition, which is how the orchestrator schedules its settle check.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from creature_battle.config import DEFAULT_CONFIG, BattleConfig
from creature_battle.sim.core.game_state import BattleState
from creature_battle.sim.reducer import BattleReducer

if TYPE_CHECKING:
    from creature_battle.sim.core.actions import BattleAction
    from creature_battle.sim.core.results import TransitionResult
    from creature_battle.sim.rules.base import CombatRules

logger = logging.getLogger(__name__)

Listener = Callable[[BattleState, "BattleAction"], None]


class BattleStore:
    """Holds one battle state and applies actions to it.

    Parameters
    ----------
    rules:
        Combat rules handed to the reducer.
    config:
        Balance constants.
    initial:
        Starting state; defaults to an empty state in ``setup``.
    """

    def __init__(
        self,
        rules: CombatRules | None = None,
        config: BattleConfig = DEFAULT_CONFIG,
        initial: BattleState | None = None,
    ) -> None:
        self.reducer = BattleReducer(rules, config)
        self._state = initial if initial is not None else BattleState()
        self._listeners: list[Listener] = []
        self.action_count = 0

    @property
    def state(self) -> BattleState:
        """The current state.  Treat it as read-only."""
        return self._state

    def subscribe(self, listener: Listener) -> None:
        """Call *listener(new_state, action)* after every accepted transition."""
        self._listeners.append(listener)

    def dispatch(self, action: BattleAction) -> TransitionResult:
        """Apply *action* and, if accepted, make the result current."""
        result = self.reducer.reduce(self._state, action)
        if result.accepted:
            self._state = result.state
            self.action_count += 1
            for listener in list(self._listeners):
                listener(self._state, action)
        return result

    def reset(self, state: BattleState | None = None) -> None:
        """Replace the current state outright (e.g. back to setup)."""
        self._state = state if state is not None else BattleState()
        logger.debug("Store reset to %s", self._state.game_state.value)
