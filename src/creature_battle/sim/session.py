"""Session handle for deferred orchestrator work.

Every continuation the orchestrator schedules captures a
``ContinuationToken``.  Starting a new battle or finishing the current
one bumps the session generation, so continuations issued before that
point see a stale token and drop themselves.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContinuationToken:
    session_id: str
    generation: int


@dataclass
class BattleSession:
    """Identity and generation counter of the battle being orchestrated."""

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    generation: int = 0

    def token(self) -> ContinuationToken:
        """A token valid until the next ``invalidate``."""
        return ContinuationToken(self.session_id, self.generation)

    def is_current(self, token: ContinuationToken) -> bool:
        return token.session_id == self.session_id and token.generation == self.generation

    def invalidate(self) -> None:
        """Make every outstanding token stale."""
        self.generation += 1
