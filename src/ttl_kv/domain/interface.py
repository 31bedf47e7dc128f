from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

TTL = int | timedelta | None


class CacheInterface(ABC):
    """The simple-cache contract: single and bulk get/set/delete plus has and clear.

    Keys are strings of 1-64 characters from ``A-Z a-z 0-9 _ .``; implementations
    raise InvalidArgumentError for anything else.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def delete_multiple(self, keys: Iterable[str]) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def has(self, key: str) -> bool:  # pragma: no cover - interface
        raise NotImplementedError
