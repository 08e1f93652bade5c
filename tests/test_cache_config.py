"""Unit tests for cache configuration and the stored envelope."""

import json
from datetime import timedelta

import pytest

from civicpulse.services.cache_config import CacheEntry, CacheTTL, get_ttl_timedelta


class TestCacheTTLValues:
    """Test that TTL values are configured correctly."""

    def test_analysis_ttl_is_one_week(self):
        """Analyses live for 168 hours."""
        assert CacheTTL.ANALYSIS.value == 168
        assert CacheTTL.ANALYSIS.value == 7 * 24

    def test_script_ttl_is_one_week(self):
        """Scripts live for 168 hours."""
        assert CacheTTL.SCRIPT.value == 168


class TestGetTTLTimedelta:
    """Test the get_ttl_timedelta function."""

    def test_analysis_timedelta(self):
        """Analysis TTL should be seven days."""
        assert get_ttl_timedelta(CacheTTL.ANALYSIS) == timedelta(days=7)

    def test_script_timedelta(self):
        """Script TTL converts to a seven day timedelta."""
        assert get_ttl_timedelta(CacheTTL.SCRIPT) == timedelta(hours=168)


class TestCacheEntry:
    """Tests for the {data, cachedAt, expiresAt} envelope."""

    def test_create_sets_expiry_from_ttl(self):
        """create stamps expiry as cached time plus TTL."""
        entry = CacheEntry.create({"a": 1}, timedelta(seconds=10), now=1000)
        assert entry.cached_at == 1000
        assert entry.expires_at == 11000

    def test_valid_until_expiry(self):
        """An entry is valid strictly before expires_at."""
        entry = CacheEntry.create("x", timedelta(seconds=1), now=0)
        assert entry.is_valid(999) is True
        assert entry.is_valid(1000) is False

    def test_json_uses_camel_case_envelope(self):
        """Serialized entries use the data/cachedAt/expiresAt envelope."""
        entry = CacheEntry.create([1, 2], timedelta(seconds=1), now=5)
        assert json.loads(entry.to_json()) == {"data": [1, 2], "cachedAt": 5, "expiresAt": 1005}

    def test_from_json_reads_envelope(self):
        """from_json parses a stored envelope."""
        entry = CacheEntry.from_json('{"data": "hi", "cachedAt": 1, "expiresAt": 2}')
        assert entry.data == "hi"
        assert entry.expires_at == 2

    @pytest.mark.parametrize("raw", [
        "not json",
        "[1, 2]",
        '{"cachedAt": 1, "expiresAt": 2}',
        '{"data": 1, "expiresAt": "soon"}',
    ])
    def test_from_json_rejects_bad_envelopes(self, raw):
        """Malformed envelopes raise ValueError."""
        with pytest.raises(ValueError):
            CacheEntry.from_json(raw)
