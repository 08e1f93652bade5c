"""Deterministic fingerprint of a preference set.

The fingerprint partitions cached analyses: changing any position yields a
different key, so stale recommendations are never served. It is a cache
key, not a security boundary; a 32-bit rolling hash is enough.
"""

from typing import Iterable

from civicpulse.models.preference import UserPreference

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def _rolling_hash(text: str) -> int:
    """31-multiplier string hash with signed 32-bit wraparound."""
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def fingerprint(preferences: Iterable[UserPreference]) -> str:
    """Fingerprint a preference set independently of insertion order.

    Args:
        preferences: The user's preferences, at most one per issue

    Returns:
        Base-36 digest of the sorted "issueId:position" pairs
    """
    ordered = sorted(preferences, key=lambda p: p.issue_id)
    canonical = "|".join(f"{p.issue_id}:{p.position}" for p in ordered)
    return _to_base36(abs(_rolling_hash(canonical)))
