from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Any

from ttl_kv.domain.validator import Validator

UTC_TZ = timezone.utc


def now_utc() -> datetime:
    """Return the current moment as a timezone-aware datetime in UTC."""
    return datetime.now(tz=UTC_TZ)


def now_timestamp() -> int:
    """Return the current Unix time in whole seconds."""
    return int(time.time())


def to_timestamp(dt: datetime) -> int:
    """Convert a timezone-aware datetime to a whole-second Unix timestamp."""
    return int(dt.timestamp())


def expiration_from_ttl(ttl: Any, validator: Validator | None = None) -> int | None:
    """Turn a TTL argument into an absolute expiration timestamp.

    - int: seconds from now (zero or negative yields a timestamp already due)
    - timedelta: added to the current UTC time
    - anything else, None included: no expiration

    An unsupported TTL shape is not an error; it is stored without expiration.
    A timedelta beyond the datetime range means never (positive) or already
    expired (negative).
    """
    validator = validator or Validator()
    if not validator.validate_ttl(ttl):
        return None
    if isinstance(ttl, timedelta):
        try:
            return to_timestamp(now_utc() + ttl)
        except OverflowError:
            return None if ttl > timedelta(0) else now_timestamp()
    return now_timestamp() + ttl
