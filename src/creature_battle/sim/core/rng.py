"""Seeded randomness for battles.

Rolls made during a battle (AI multi-action continuation, policy choices,
enemy roster and item generation) come from a ``BattleRNG``.  Each
consumer gets its own named stream via :meth:`BattleRNG.fork`, so adding
a roll in one place never changes what another consumer sees.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class BattleRNG:
    """A seeded stream with named child streams.

    ``stream`` is the slash-joined path of fork names that produced this
    instance (``"root"`` for a fresh one); it only shows up in ``repr``
    and log lines.
    """

    def __init__(self, seed: int, stream: str = "root") -> None:
        self._seed = seed
        self._stream = stream
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def stream(self) -> str:
        return self._stream

    def chance(self, probability: float) -> bool:
        """Roll once and return True with the given *probability*.

        Exactly one value is drawn even for probabilities of 0 or 1.
        """
        return self._rng.random() < probability

    def roll(self, low: int, high: int) -> int:
        """Inclusive integer roll in ``[low, high]``."""
        return self._rng.randint(low, high)

    def pick(self, options: Sequence[T]) -> T:
        """One element of a non-empty *options*."""
        return self._rng.choice(options)

    def fork(self, name: str) -> BattleRNG:
        # Child seed comes from (seed, name) only, not from draws made so far.
        digest = hashlib.sha256(f"{self._seed}:{name}".encode()).digest()
        return BattleRNG(int.from_bytes(digest[:8], "big"), f"{self._stream}/{name}")

    def __repr__(self) -> str:
        return f"BattleRNG(seed={self._seed}, stream={self._stream!r})"
