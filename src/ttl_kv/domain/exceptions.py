from __future__ import annotations


class CacheError(Exception):
    """Base exception for all ttl_kv errors."""


class InvalidArgumentError(CacheError, ValueError):
    """Raised when a key, key list or batch argument is not a legal value.

    Always raised before the cache is touched, so the cache state is unchanged.
    """
