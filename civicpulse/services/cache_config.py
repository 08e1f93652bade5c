"""Centralized cache TTL configuration and the stored entry envelope.

TTL values are defined in hours for each cached result kind:
- Analyses: 168 hours (1 week - keyed by preference fingerprint, so a
  preference change already bypasses stale entries)
- Scripts: 168 hours (1 week - a script only depends on bill and stance)
"""

import json
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


class CacheTTL(Enum):
    """Cache TTL values in hours for different result kinds."""

    ANALYSIS = 168     # 1 week (7 * 24)
    SCRIPT = 168       # 1 week (7 * 24)


def get_ttl_timedelta(ttl: CacheTTL) -> timedelta:
    """Get timedelta for a cache TTL value.

    Args:
        ttl: CacheTTL enum value

    Returns:
        timedelta representing the TTL duration
    """
    return timedelta(hours=ttl.value)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class CacheEntry(Generic[T]):
    """Envelope stored under every cache key.

    Attributes:
        data: The cached value (must be JSON-serializable)
        cached_at: Epoch milliseconds when the value was written
        expires_at: Epoch milliseconds after which the entry is absent
    """

    data: T
    cached_at: int
    expires_at: int

    @classmethod
    def create(cls, data: T, ttl: timedelta, now: int) -> "CacheEntry[T]":
        """Create an entry expiring ttl after now."""
        return cls(
            data=data,
            cached_at=now,
            expires_at=now + int(ttl.total_seconds() * 1000),
        )

    def is_valid(self, now: int) -> bool:
        """True while now is strictly before expires_at."""
        return now < self.expires_at

    def to_json(self) -> str:
        return json.dumps(
            {"data": self.data, "cachedAt": self.cached_at, "expiresAt": self.expires_at}
        )

    @classmethod
    def from_json(cls, raw: str) -> "CacheEntry[Any]":
        """Parse a stored envelope.

        Raises:
            ValueError: If raw is not a JSON envelope with data and expiresAt
        """
        parsed = json.loads(raw)
        if not isinstance(parsed, dict) or "data" not in parsed:
            raise ValueError("Cache entry is not an envelope")
        expires_at: Optional[Any] = parsed.get("expiresAt")
        if not isinstance(expires_at, (int, float)):
            raise ValueError("Cache entry has no expiry")
        cached_at = parsed.get("cachedAt", expires_at)
        return cls(data=parsed["data"], cached_at=int(cached_at), expires_at=int(expires_at))
