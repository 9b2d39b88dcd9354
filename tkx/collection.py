"""
Immutable accumulator of discovered translation keys.

Every mutating operation returns a new collection, so a collection handed
to a caller can never change underneath it. Keys are unique; adding a key
that is already present overwrites its default value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class TranslationCollection:
    """
    Ordered mapping ``key -> default value``.

    Insertion order is preserved for deterministic output.
    """
    values: Dict[str, str] = field(default_factory=dict)

    def add(self, key: str, value: str = "") -> TranslationCollection:
        return TranslationCollection({**self.values, key: value})

    def add_keys(self, keys: Iterable[str]) -> TranslationCollection:
        values = dict(self.values)
        for key in keys:
            values[key] = ""
        return TranslationCollection(values)

    def remove(self, key: str) -> TranslationCollection:
        return self.filter(lambda k, _v: k != key)

    def filter(self, predicate: Callable[[str, str], bool]) -> TranslationCollection:
        return TranslationCollection({k: v for k, v in self.values.items() if predicate(k, v)})

    def map(self, fn: Callable[[str, str], str]) -> TranslationCollection:
        """Return a collection with every value replaced by ``fn(key, value)``."""
        return TranslationCollection({k: fn(k, v) for k, v in self.values.items()})

    def union(self, other: TranslationCollection) -> TranslationCollection:
        """Keys of both collections; values from ``other`` win on conflicts."""
        return TranslationCollection({**self.values, **other.values})

    def intersect(self, other: TranslationCollection) -> TranslationCollection:
        """Keys present in both collections, with values taken from ``other``."""
        return TranslationCollection({k: other.values[k] for k in self.values if k in other.values})

    def has(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def keys(self) -> List[str]:
        return list(self.values)

    def count(self) -> int:
        return len(self.values)

    def is_empty(self) -> bool:
        return not self.values

    def sort(self, key: Optional[Callable[[str], object]] = None) -> TranslationCollection:
        """Return a collection ordered by key (natural string order by default)."""
        return TranslationCollection({k: self.values[k] for k in sorted(self.values, key=key)})

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)


__all__ = ["TranslationCollection"]
