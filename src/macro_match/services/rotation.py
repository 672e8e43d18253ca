"""Stable-but-rotating selection of a visible window from a combination pool."""

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from macro_match.domain.matching import Combination
from macro_match.services.cache import Cache


def pool_signature(pool: Sequence[Combination]) -> str:
    """Order-independent signature of a pool's composition."""
    return "::".join(sorted(combo.key for combo in pool))


@dataclass
class SelectionRotator:
    """Pages through one shuffled ordering of a pool across repeated queries.

    The ordering holds combination keys and is reshuffled only when the
    pool's composition changes, so identical queries walk the same
    permutation. Windows are always read from the pool passed in.
    """

    rng: random.Random = field(default_factory=random.Random)
    signature: str = ""
    order: list[str] = field(default_factory=list)
    cursor: int = 0

    def select(self, pool: Sequence[Combination], count: int) -> list[Combination]:
        """Return ``count`` combinations starting at the cursor, wrapping."""
        if not pool:
            return []
        if len(pool) <= count:
            return list(pool)
        by_key = {combo.key: combo for combo in pool}
        signature = pool_signature(pool)
        if signature != self.signature:
            self.signature = signature
            self.order = list(by_key)
            self.rng.shuffle(self.order)
            self.cursor = 0
        start = self.cursor
        size = len(self.order)
        selected = [
            by_key[self.order[(start + offset) % size]] for offset in range(count)
        ]
        self.cursor = (start + count) % size
        return selected


@dataclass
class RotatorRegistry:
    """Keeps one rotator per client session, expiring idle ones."""

    cache: Cache
    ttl_seconds: int = 3600
    default_session: str = "default"

    def for_session(self, session_id: str | None) -> SelectionRotator:
        """Return the rotator for a session, creating it on first use."""
        cache_key = f"rotation:{session_id or self.default_session}"
        cached = self.cache.get(cache_key)
        rotator = cached if isinstance(cached, SelectionRotator) else None
        if rotator is None:
            rotator = SelectionRotator()
        self.cache.set(cache_key, rotator, ttl_seconds=self.ttl_seconds)
        return rotator
