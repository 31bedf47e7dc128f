from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ttl_kv.domain.entities import Entry
from ttl_kv.domain.interface import TTL, CacheInterface
from ttl_kv.domain.validator import Validator
from ttl_kv.infrastructure.time_utils import expiration_from_ttl, now_timestamp
from ttl_kv.infrastructure.ttl_index import TTLIndex

logger = logging.getLogger(__name__)


class Cache(CacheInterface):
    """In-process key-value cache with per-entry TTL.

    Entries live in a primary dict; expiring entries are also registered in a
    TTLIndex bucket keyed by their expiration timestamp. Expired entries are
    removed lazily on access, or all at once by gc(). When an access finds an
    expired entry, its whole bucket is swept since every key in it shares the
    same expiration.

    Not thread-safe: wrap the instance in a lock if it is shared.
    """

    def __init__(self, validator: Validator | None = None) -> None:
        self._validator = validator or Validator()
        self._storage: dict[str, Entry] = {}
        self._ttl_index = TTLIndex()

    @classmethod
    def create(cls) -> Cache:
        """Return a new, independent cache."""
        return cls()

    def items_count(self) -> int:
        """Return the number of stored entries, expired-but-unswept ones included.

        Call gc() first for an exact count of live entries.
        """
        return len(self._storage)

    # ------------------------------------------------------------------
    # Single-key operations
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        self._validator.validate_key(key)
        return self._fetch(key, default)

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store value under key. Returns False when value cannot be cached."""
        self._validator.validate_key(key)
        if not self._validator.validate_data(value):
            logger.debug("Rejected unserializable value for key %r", key)
            return False
        self._put(key, value, expiration_from_ttl(ttl, self._validator))
        return True

    def delete(self, key: str) -> bool:
        self._validator.validate_key(key)
        return self._remove(key)

    def has(self, key: str) -> bool:
        self._validator.validate_key(key)
        return self._exists(key)

    def clear(self) -> bool:
        self._storage.clear()
        self._ttl_index.clear()
        return True

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        keys = self._validator.validate_key_list(keys)
        return {key: self._fetch(key, default) for key in keys}

    def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        """Store every pair with the same TTL, or nothing if any value is rejected."""
        if not self._validator.validate_set_multiple(values):
            logger.debug("Rejected batch of %d values: unserializable value present", len(values))
            return False
        expires_at = expiration_from_ttl(ttl, self._validator)
        for key, value in values.items():
            self._put(key, value, expires_at)
        return True

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete every key. Returns True only if every removal succeeded."""
        keys = self._validator.validate_key_list(keys)
        result = True
        for key in keys:
            result = self._remove(key) and result
        return result

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def gc(self) -> None:
        """Remove every entry whose expiration is at or before now."""
        for timestamp in self._ttl_index.expired(now_timestamp()):
            self._expire(timestamp)

    def _expire(self, timestamp: int) -> None:
        keys = self._ttl_index.pop(timestamp)
        for key in keys:
            self._storage.pop(key, None)
        logger.debug("Swept %d expired key(s) at timestamp %d", len(keys), timestamp)

    def _exists(self, key: str) -> bool:
        entry = self._storage.get(key)
        if entry is None:
            return False
        if entry.is_expired(now_timestamp()):
            self._expire(entry.expires_at)  # type: ignore[arg-type]
            return False
        return True

    # ------------------------------------------------------------------
    # Storage primitives (arguments already validated)
    # ------------------------------------------------------------------

    def _fetch(self, key: str, default: Any) -> Any:
        if not self._exists(key):
            return default
        return self._storage[key].value

    def _put(self, key: str, value: Any, expires_at: int | None) -> None:
        if expires_at is not None and expires_at <= now_timestamp():
            logger.debug("Value for key %r is already expired; removing key", key)
            self._remove(key)
            return
        self._detach(key)
        if expires_at is not None:
            self._ttl_index.add(expires_at, key)
        self._storage[key] = Entry(value=value, expires_at=expires_at)

    def _remove(self, key: str) -> bool:
        try:
            self._detach(key)
        except Exception as exc:  # index out of sync with storage
            logger.exception("Failed to remove cache key %r: %s", key, exc)
            return False
        return True

    def _detach(self, key: str) -> None:
        """Drop key from both the primary table and the TTL index."""
        entry = self._storage.get(key)
        if entry is None:
            return
        if entry.expires_at is not None:
            self._ttl_index.discard(entry.expires_at, key)
        del self._storage[key]
