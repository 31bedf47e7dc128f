from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Entry:
    """A single cached value and its absolute expiration."""

    value: Any
    expires_at: int | None = None  # Unix timestamp in whole seconds; None = never expires

    def is_expired(self, now: int) -> bool:
        """Return True when the entry expires at or before now."""
        return self.expires_at is not None and self.expires_at <= now
