"""ttl_kv

In-process key-value cache with per-entry TTL, lazy expiry and
timestamp-bucketed garbage collection.
"""
from __future__ import annotations

from ttl_kv.config import Settings, configure_logging
from ttl_kv.domain.entities import Entry
from ttl_kv.domain.exceptions import CacheError, InvalidArgumentError
from ttl_kv.domain.interface import TTL, CacheInterface
from ttl_kv.domain.validator import KEY_MAX_LENGTH, Serializable, Validator
from ttl_kv.infrastructure.cache import Cache
from ttl_kv.infrastructure.ttl_index import TTLIndex


def create_cache() -> Cache:
    """Create a new, independent cache instance."""
    return Cache.create()


__all__ = [
    "Cache",
    "CacheInterface",
    "CacheError",
    "InvalidArgumentError",
    "Entry",
    "KEY_MAX_LENGTH",
    "Serializable",
    "Settings",
    "TTL",
    "TTLIndex",
    "Validator",
    "configure_logging",
    "create_cache",
]

__version__ = "0.1.0"
