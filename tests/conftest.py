"""Shared pytest fixtures for the ttl_kv test suite."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ttl_kv.domain.validator import Validator
from ttl_kv.infrastructure.cache import Cache

FROZEN_AT = datetime(2026, 2, 24, 14, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def validator() -> Validator:
    return Validator()


@pytest.fixture
def cache() -> Cache:
    return Cache.create()


@pytest.fixture
def frozen_now(freezer) -> int:  # type: ignore[no-untyped-def]
    """Freeze time at 2026-02-24T14:00:00Z and return it as a Unix timestamp.

    Requires pytest-freezer; advance the clock with freezer.tick().
    """
    freezer.move_to(FROZEN_AT)
    return int(FROZEN_AT.timestamp())


@pytest.fixture
def sample_values() -> dict:  # type: ignore[type-arg]
    """One value of each plain data shape the cache must round-trip."""
    return {
        "string": "hello world",
        "empty_string": "",
        "integer": 2**63 - 1,
        "negative": -42,
        "float": 3.14159,
        "true": True,
        "false": False,
        "none": None,
        "list": [1, 2, 3],
        "mapping": {"a": 1, "b": 2, "c": 3},
        "nested": {"a": {"a": 1, "b": 2}, "b": [1, 2, 3], "c": {1: "a", 2: "b"}},
        "tuple": (1, "two", 3.0),
        "bytes": bytes(range(256)),
        "datetime": FROZEN_AT,
    }
