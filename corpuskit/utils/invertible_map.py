# corpuskit/utils/invertible_map.py
from __future__ import annotations

"""
Bidirectional mappings used when exporting documents.

This module defines:
- InvertibleMap: a bijective key <-> value map with lookups in both directions
- LabelMapping: the protocol a label -> integer encoder must implement
- LabelIndex: a thread-safe LabelMapping assigning 0, 1, 2, ... in first-seen order
"""

import logging
import threading
from typing import Any, Dict, Generic, Hashable, Iterator, List, Protocol, Tuple, TypeVar, runtime_checkable

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)

logger = logging.getLogger(__name__)


class InvertibleMap(Generic[K, V]):
    """
    A one-to-one mapping that can be queried by key or by value.

    Inserting a key or a value that is already bound to something else
    raises ValueError, so the forward and backward tables always agree.
    """

    def __init__(self) -> None:
        self._forward: Dict[K, V] = {}
        self._backward: Dict[V, K] = {}

    def insert(self, key: K, value: V) -> None:
        """Bind key to value. Re-inserting an identical pair is a no-op."""
        if key in self._forward:
            if self._forward[key] == value:
                return
            raise ValueError(f"key {key!r} is already mapped to {self._forward[key]!r}")
        if value in self._backward:
            raise ValueError(f"value {value!r} is already mapped from {self._backward[value]!r}")
        self._forward[key] = value
        self._backward[value] = key

    def get_value(self, key: K) -> V:
        """Value bound to key; KeyError if absent."""
        return self._forward[key]

    def get_key(self, value: V) -> K:
        """Key bound to value; KeyError if absent."""
        return self._backward[value]

    def contains_key(self, key: K) -> bool:
        return key in self._forward

    def contains_value(self, value: V) -> bool:
        return value in self._backward

    def items(self) -> List[Tuple[K, V]]:
        return list(self._forward.items())

    def clear(self) -> None:
        self._forward.clear()
        self._backward.clear()

    def is_empty(self) -> bool:
        return not self._forward

    def __len__(self) -> int:
        return len(self._forward)

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward)

    def __contains__(self, key: object) -> bool:
        return key in self._forward

    def __repr__(self) -> str:
        return f"InvertibleMap(size={len(self)})"


@runtime_checkable
class LabelMapping(Protocol):
    """
    Encoder from class labels to stable integers.

    get_or_assign must be atomic with respect to concurrent callers if the
    same mapping is shared between threads.
    """

    def get_or_assign(self, label: str) -> int: ...

    def get_label(self, value: int) -> str: ...


class LabelIndex:
    """
    LabelMapping backed by an InvertibleMap[str, int].

    New labels receive the next unused integer, starting at 0.
    """

    def __init__(self) -> None:
        self._map: InvertibleMap[str, int] = InvertibleMap()
        self._lock = threading.Lock()
        self._next_value = 0

    def get_or_assign(self, label: str) -> int:
        with self._lock:
            if self._map.contains_key(label):
                return self._map.get_value(label)
            value = self._next_value
            self._map.insert(label, value)
            self._next_value += 1
        logger.debug("Assigned label %r -> %d", label, value)
        return value

    def get_label(self, value: int) -> str:
        with self._lock:
            return self._map.get_key(value)

    def labels(self) -> List[str]:
        """Labels ordered by their assigned integer."""
        with self._lock:
            return [k for k, _ in sorted(self._map.items(), key=lambda kv: kv[1])]

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, label: object) -> bool:
        return self._map.contains_key(label)  # type: ignore[arg-type]

    def to_dict(self) -> Dict[str, int]:
        """Convert the label table to a plain dictionary."""
        with self._lock:
            return dict(self._map.items())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LabelIndex:
        """
        Rebuild a LabelIndex from to_dict output.

        Integers must be unique; later assignments continue after the
        largest stored value.
        """
        index = cls()
        for label, value in sorted(data.items(), key=lambda kv: int(kv[1])):
            index._map.insert(str(label), int(value))
            index._next_value = max(index._next_value, int(value) + 1)
        return index

    def __repr__(self) -> str:
        return f"LabelIndex(labels={len(self)})"
