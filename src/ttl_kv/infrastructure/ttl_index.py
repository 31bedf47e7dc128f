from __future__ import annotations


class TTLIndex:
    """Secondary index grouping cache keys by their exact expiration timestamp.

    A bucket exists only while at least one key references it, so the number
    of buckets never exceeds the number of expiring entries.
    """

    def __init__(self) -> None:
        self._buckets: dict[int, set[str]] = {}

    def add(self, timestamp: int, key: str) -> None:
        """Register key under timestamp."""
        self._buckets.setdefault(timestamp, set()).add(key)

    def discard(self, timestamp: int, key: str) -> None:
        """Remove key from its bucket, dropping the bucket once empty."""
        bucket = self._buckets.get(timestamp)
        if bucket is None:
            return
        bucket.discard(key)
        if not bucket:
            del self._buckets[timestamp]

    def pop(self, timestamp: int) -> set[str]:
        """Remove and return every key expiring at timestamp."""
        return self._buckets.pop(timestamp, set())

    def keys_at(self, timestamp: int) -> frozenset[str]:
        return frozenset(self._buckets.get(timestamp, ()))

    def expired(self, now: int) -> list[int]:
        """Return the bucket timestamps at or before now, oldest first."""
        return sorted(ts for ts in self._buckets if ts <= now)

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, timestamp: object) -> bool:
        return timestamp in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
