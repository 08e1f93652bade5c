"""Key-value stores backing the local result cache.

Both stores mirror the browser local-storage API (get_item, set_item,
remove_item, keys) and enforce a byte quota the way browsers do: a write
that would push the total size of keys and values over the quota raises
StorageQuotaExceeded and leaves the store unchanged.
"""

from typing import Optional, Protocol

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from civicpulse.exceptions import StorageQuotaExceeded
from civicpulse.models.cache_record import CacheRecord

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class KeyValueStore(Protocol):
    """String-to-string store with local-storage semantics."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...


def _entry_size(key: str, value: str) -> int:
    return len(key) + len(value)


class MemoryStore:
    """In-process store, used in tests and when no cache database is set."""

    def __init__(self, quota_bytes: int = DEFAULT_QUOTA_BYTES):
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}
        self._size = 0

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        previous = self._items.get(key)
        freed = _entry_size(key, previous) if previous is not None else 0
        new_size = self._size - freed + _entry_size(key, value)
        if new_size > self.quota_bytes:
            raise StorageQuotaExceeded(
                f"Writing {key!r} would use {new_size} of {self.quota_bytes} bytes"
            )
        self._items[key] = value
        self._size = new_size

    def remove_item(self, key: str) -> None:
        value = self._items.pop(key, None)
        if value is not None:
            self._size -= _entry_size(key, value)

    def keys(self) -> list[str]:
        return list(self._items)

    @property
    def size(self) -> int:
        return self._size


class SQLStore:
    """Store persisted to a local database table through SQLAlchemy."""

    def __init__(self, engine: Engine, quota_bytes: int = DEFAULT_QUOTA_BYTES):
        self.engine = engine
        self.quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            record = session.get(CacheRecord, key)
            return record.value if record else None

    def set_item(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            used = session.execute(
                select(
                    func.coalesce(
                        func.sum(func.length(CacheRecord.key) + func.length(CacheRecord.value)),
                        0,
                    )
                )
            ).scalar_one()
            existing = session.get(CacheRecord, key)
            freed = _entry_size(key, existing.value) if existing else 0
            new_size = int(used) - freed + _entry_size(key, value)
            if new_size > self.quota_bytes:
                raise StorageQuotaExceeded(
                    f"Writing {key!r} would use {new_size} of {self.quota_bytes} bytes"
                )

            if existing:
                existing.value = value
            else:
                session.add(CacheRecord(key=key, value=value))
            session.commit()

    def remove_item(self, key: str) -> None:
        with Session(self.engine) as session:
            session.execute(delete(CacheRecord).where(CacheRecord.key == key))
            session.commit()

    def keys(self) -> list[str]:
        with Session(self.engine) as session:
            return list(session.execute(select(CacheRecord.key)).scalars().all())
