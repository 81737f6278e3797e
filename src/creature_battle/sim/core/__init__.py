"""Core primitives for the creature battle simulator."""

from creature_battle.sim.core.actions import (
    AIActionDescriptor,
    AIActionKind,
    BattleAction,
    BattleActionType,
)
from creature_battle.sim.core.entities import (
    BattleStats,
    Creature,
    Effect,
    Side,
    SpellItem,
    ToolItem,
)
from creature_battle.sim.core.game_state import (
    BattleState,
    GameStatus,
    LogEntry,
    SidePair,
    SideState,
)
from creature_battle.sim.core.results import RejectionReason, TransitionResult
from creature_battle.sim.core.rng import BattleRNG
from creature_battle.sim.core.scheduler import (
    AsyncioScheduler,
    Scheduler,
    VirtualScheduler,
)

__all__ = [
    # rng
    "BattleRNG",
    # entities
    "Side",
    "Effect",
    "BattleStats",
    "Creature",
    "ToolItem",
    "SpellItem",
    # game_state
    "GameStatus",
    "SideState",
    "SidePair",
    "LogEntry",
    "BattleState",
    # actions
    "BattleActionType",
    "BattleAction",
    "AIActionKind",
    "AIActionDescriptor",
    # results
    "RejectionReason",
    "TransitionResult",
    # scheduler
    "Scheduler",
    "VirtualScheduler",
    "AsyncioScheduler",
]
