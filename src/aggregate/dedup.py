"""First-seen-wins deduplication by identity key."""

from __future__ import annotations

from typing import Callable, Generic, Hashable, Iterable, List, Set, TypeVar

T = TypeVar("T")


class Deduplicator(Generic[T]):
    """Keeps the first element seen for each identity key.

    The set of seen keys belongs to the instance. Build a new instance for
    every run; sharing one across runs would drop entries that were only
    seen in an earlier run.
    """

    def __init__(self, key: Callable[[T], Hashable]):
        self._key = key
        self._seen: Set[Hashable] = set()

    def admit(self, item: T) -> bool:
        """Record ``item``; return False if its key was already seen."""
        key = self._key(item)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def apply(self, items: Iterable[T]) -> List[T]:
        return [item for item in items if self.admit(item)]

    def __len__(self) -> int:
        return len(self._seen)


def distinct_by_key(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """One-shot helper around a fresh ``Deduplicator``."""
    return Deduplicator(key).apply(items)
