"""Local result cache for AI-generated analyses and call scripts.

Values are stored as JSON envelopes ({data, cachedAt, expiresAt}) under
namespaced keys:

    civicpulse_v1_analysis_{billId}_{preferenceFingerprint}
    civicpulse_v1_script_{billId}_{recommendation}

Bumping CACHE_VERSION orphans every old entry, so format changes never
have to migrate stored data. Reads and writes fail soft: a corrupt or
expired entry reads as absent, and a write that hits the storage quota or
a database error is logged and dropped.
"""

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Any, Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from civicpulse.config import get_settings
from civicpulse.database import create_cache_engine, init_db
from civicpulse.exceptions import StorageQuotaExceeded
from civicpulse.models.analysis import BillAnalysis, Recommendation
from civicpulse.services.cache_config import CacheEntry, CacheTTL, get_ttl_timedelta, now_ms
from civicpulse.services.storage import KeyValueStore, MemoryStore, SQLStore

logger = logging.getLogger(__name__)

CACHE_PREFIX = "civicpulse_"
CACHE_VERSION = "v1_"

DEFAULT_TTL = timedelta(days=7)


def analysis_cache_key(bill_id: str, preferences_hash: str) -> str:
    return f"{CACHE_PREFIX}{CACHE_VERSION}analysis_{bill_id}_{preferences_hash}"


def script_cache_key(bill_id: str, recommendation: str) -> str:
    return f"{CACHE_PREFIX}{CACHE_VERSION}script_{bill_id}_{recommendation}"


class LocalResultCache:
    """TTL cache over an injected key-value store."""

    def __init__(self, store: KeyValueStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self.clock = clock

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing, corrupt, or expired."""
        try:
            raw = self.store.get_item(key)
        except SQLAlchemyError as e:
            logger.warning("Failed to read cache entry %s: %s", key, e)
            return None
        if raw is None:
            return None

        try:
            entry = CacheEntry.from_json(raw)
        except ValueError:
            # json.JSONDecodeError is a ValueError
            logger.debug("Ignoring unreadable cache entry %s", key)
            return None

        if not entry.is_valid(self.clock()):
            self._remove(key)
            return None

        return entry.data

    def set(self, key: str, value: Any, ttl: timedelta = DEFAULT_TTL) -> None:
        """Store value under key; never raises on storage failure."""
        entry = CacheEntry.create(value, ttl, self.clock())
        try:
            self.store.set_item(key, entry.to_json())
        except StorageQuotaExceeded as e:
            logger.warning("Failed to cache %s: %s", key, e)
        except (TypeError, ValueError) as e:
            # ValueError: circular reference
            logger.warning("Failed to cache %s: value is not serializable (%s)", key, e)
        except SQLAlchemyError as e:
            logger.warning("Failed to cache %s: %s", key, e)

    def _remove(self, key: str) -> bool:
        try:
            self.store.remove_item(key)
        except SQLAlchemyError as e:
            logger.warning("Failed to remove cache entry %s: %s", key, e)
            return False
        return True

    def _keys(self) -> list[str]:
        try:
            return [key for key in self.store.keys() if key.startswith(CACHE_PREFIX)]
        except SQLAlchemyError as e:
            logger.warning("Failed to list cache keys: %s", e)
            return []

    def clear_all(self) -> int:
        """Remove every entry under CACHE_PREFIX.

        Returns:
            Number of entries removed
        """
        return sum(1 for key in self._keys() if self._remove(key))

    def stats(self) -> dict[str, int]:
        """Count cached analyses and scripts and their total stored size."""
        analysis_count = 0
        script_count = 0
        total_size = 0

        for key in self._keys():
            try:
                value = self.store.get_item(key)
            except SQLAlchemyError as e:
                logger.warning("Failed to read cache entry %s: %s", key, e)
                value = None
            if value:
                total_size += len(value)
            if "analysis_" in key:
                analysis_count += 1
            if "script_" in key:
                script_count += 1

        return {
            "analysisCount": analysis_count,
            "scriptCount": script_count,
            "totalSize": total_size,
        }

    def get_analysis(self, bill_id: str, preferences_hash: str) -> Optional[BillAnalysis]:
        data = self.get(analysis_cache_key(bill_id, preferences_hash))
        if data is None:
            return None
        try:
            return BillAnalysis.model_validate(data)
        except ValidationError:
            logger.debug("Cached analysis for %s no longer matches the schema", bill_id)
            return None

    def set_analysis(
        self, bill_id: str, preferences_hash: str, analysis: BillAnalysis
    ) -> None:
        self.set(
            analysis_cache_key(bill_id, preferences_hash),
            analysis.to_api(),
            get_ttl_timedelta(CacheTTL.ANALYSIS),
        )

    def get_script(self, bill_id: str, recommendation: Recommendation | str) -> Optional[str]:
        data = self.get(script_cache_key(bill_id, Recommendation(recommendation).value))
        return data if isinstance(data, str) else None

    def set_script(
        self, bill_id: str, recommendation: Recommendation | str, script: str
    ) -> None:
        self.set(
            script_cache_key(bill_id, Recommendation(recommendation).value),
            script,
            get_ttl_timedelta(CacheTTL.SCRIPT),
        )


def build_store() -> KeyValueStore:
    """Create the configured store; an empty database URL means in-memory."""
    settings = get_settings()
    if not settings.cache_database_url:
        return MemoryStore(quota_bytes=settings.cache_quota_bytes)

    engine = create_cache_engine(settings.cache_database_url)
    init_db(engine)
    return SQLStore(engine, quota_bytes=settings.cache_quota_bytes)


@lru_cache
def get_result_cache() -> LocalResultCache:
    """Get the process-wide cache, creating its store on first access."""
    return LocalResultCache(build_store())
