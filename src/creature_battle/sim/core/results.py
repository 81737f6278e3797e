"""Transition results returned by the reducer.

A rejected transition is not an error: the reducer hands back the input
state untouched together with the reason, and the caller decides what
(if anything) to tell the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from creature_battle.sim.core.game_state import BattleState


class RejectionReason(str, Enum):
    INSUFFICIENT_RESOURCE = "insufficient_resource"
    """Energy below the requested cost."""

    INVALID_TARGET = "invalid_target"
    """Missing or malformed creature, tool, spell or collaborator result."""

    DUPLICATE_ENTITY = "duplicate_entity"
    """Creature id already present in the destination container."""

    EMPTY_SOURCE = "empty_source"
    """Draw from an empty deck."""

    FIELD_FULL = "field_full"
    """Destination field already holds the maximum number of creatures."""

    NOT_FOUND = "not_found"
    """Update of a creature that is not on the expected field."""

    BELOW_THRESHOLD = "below_threshold"
    """Combo check with a streak under the threshold."""


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of one ``BattleReducer.reduce`` call.

    Attributes
    ----------
    state:
        The resulting state.  For rejections this is the *same object*
        that was passed in.
    accepted:
        ``True`` if the transition took effect.
    reason:
        Why the transition was rejected, ``None`` when accepted.
    detail:
        Human-readable diagnostic for rejections.
    skipped_steps:
        For AI sequences: how many steps were skipped.
    """

    state: BattleState
    accepted: bool = True
    reason: RejectionReason | None = None
    detail: str = ""
    skipped_steps: int = 0

    @classmethod
    def ok(cls, state: BattleState, skipped_steps: int = 0) -> TransitionResult:
        return cls(state=state, skipped_steps=skipped_steps)

    @classmethod
    def rejected(
        cls,
        state: BattleState,
        reason: RejectionReason,
        detail: str = "",
    ) -> TransitionResult:
        return cls(state=state, accepted=False, reason=reason, detail=detail)

    def __bool__(self) -> bool:
        return self.accepted
