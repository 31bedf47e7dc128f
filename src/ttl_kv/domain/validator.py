from __future__ import annotations

import io
import math
import pickle
import re
import types
from abc import ABC
from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from ttl_kv.domain.exceptions import InvalidArgumentError

KEY_MAX_LENGTH = 64
RESERVED_CHARACTERS = "{}()/\\@:"

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_.]+")

# Code objects cannot be restored faithfully; pickle would store them by reference.
_CODE_TYPES = (
    types.FunctionType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.BuiltinMethodType,
)


class Serializable(ABC):
    """Marker for values that declare themselves safe to cache.

    Subclass it, or call ``Serializable.register(cls)`` for classes you do not own.
    Instances skip the pickle round-trip probe in ``Validator.validate_data``.
    """


class _ProbePickler(pickle.Pickler):
    """Pickler that refuses function and method objects anywhere in the graph."""

    def reducer_override(self, obj: Any) -> Any:
        if isinstance(obj, _CODE_TYPES):
            raise pickle.PicklingError(f"Cannot cache {type(obj).__name__} objects")
        return NotImplemented


def _round_trip(value: Any) -> Any:
    buffer = io.BytesIO()
    _ProbePickler(buffer, protocol=pickle.HIGHEST_PROTOCOL).dump(value)
    return pickle.loads(buffer.getvalue())


def _equivalent(original: Any, restored: Any, seen: set[tuple[int, int]] | None = None) -> bool:
    """Loose equality between a value and its unpickled copy.

    Objects without ``__eq__`` compare by identity, so they are compared
    field by field through ``__dict__`` instead. Pairs already under
    comparison count as equal, which lets cyclic graphs terminate.
    """
    if seen is None:
        seen = set()
    pair = (id(original), id(restored))
    if pair in seen:
        return True
    seen.add(pair)
    try:
        if original == restored:
            return True
    except RecursionError:  # self-referencing containers; compared structurally below
        pass
    if type(original) is not type(restored):
        return False
    if isinstance(original, float):
        return math.isnan(original) and math.isnan(restored)
    if isinstance(original, Mapping):
        if list(original.keys()) != list(restored.keys()):
            return False
        return all(_equivalent(original[k], restored[k], seen) for k in original)
    if isinstance(original, (list, tuple)):
        if len(original) != len(restored):
            return False
        return all(_equivalent(a, b, seen) for a, b in zip(original, restored))
    state = getattr(original, "__dict__", None)
    if state is None:
        return False
    return _equivalent(state, vars(restored), seen)


class Validator:
    """Argument checks shared by every cache operation. Never touches cache state."""

    def validate_key(self, key: Any) -> None:
        """Raise InvalidArgumentError unless key is a legal cache key.

        A legal key is a non-empty str of at most 64 characters drawn from
        ``A-Z a-z 0-9 _ .``. The reserved characters ``{}()/\\@:`` and every
        other character are rejected.
        """
        if not isinstance(key, str):
            raise InvalidArgumentError(f"Cache key must be a string, got {type(key).__name__}")
        if len(key) > KEY_MAX_LENGTH:
            raise InvalidArgumentError(
                f"Cache key exceeds {KEY_MAX_LENGTH} characters: {key!r}"
            )
        if key == "":
            raise InvalidArgumentError("Cache key must not be empty")
        if _KEY_PATTERN.fullmatch(key) is None:
            raise InvalidArgumentError(f"Cache key contains illegal characters: {key!r}")

    def validate_key_list(self, keys: Any) -> list[str]:
        """Raise InvalidArgumentError unless keys is an iterable of legal keys.

        A str or bytes is a single value, not a list of keys, and is rejected.
        Returns the keys as a list so one-shot iterators can be reused.
        """
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
            raise InvalidArgumentError(
                f"Cache keys must be an iterable of strings, got {type(keys).__name__}"
            )
        keys = list(keys)
        for key in keys:
            self.validate_key(key)
        return keys

    def validate_data(self, value: Any) -> bool:
        """Return True when value can be cached and returned without corruption."""
        if isinstance(value, Serializable):
            return True
        try:
            return _equivalent(value, _round_trip(value))
        except Exception:  # pickling errors, or an __eq__ whose result has no truth value
            return False

    def validate_ttl(self, ttl: Any) -> bool:
        """Return True for an int number of seconds or a timedelta.

        None is not a valid TTL shape; callers treat it as "no expiration".
        """
        if isinstance(ttl, timedelta):
            return True
        return isinstance(ttl, int) and not isinstance(ttl, bool)

    def validate_set_multiple(self, values: Any) -> bool:
        """Check a set_multiple batch.

        Raises InvalidArgumentError when values is not a mapping or holds an
        illegal key. Returns False when any value cannot be cached.
        """
        if not isinstance(values, Mapping):
            raise InvalidArgumentError(
                f"Cache values must be a mapping of key to value, got {type(values).__name__}"
            )
        self.validate_key_list(values.keys())
        return all(self.validate_data(value) for value in values.values())
