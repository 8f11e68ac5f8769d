"""
Exclusion sets: connections that are currently impassable.

An exclusion set belongs to the caller and is passed into each search, so the
same network can be queried under different closure scenarios. Membership is
direction agnostic. Searches also accept a plain ``set`` of key tuples; they
test both orientations of every pair themselves through ``is_excluded``.
"""

from typing import Any, Collection, Iterable, Iterator, Optional, Set, Tuple

Pair = Tuple[Any, Any]


def normalize_pair(a: Any, b: Any) -> Pair:
    """Orient a pair so the smaller key comes first."""
    return (b, a) if b < a else (a, b)


def is_excluded(excluded: Optional[Collection[Pair]], a: Any, b: Any) -> bool:
    """Check whether the connection between ``a`` and ``b`` is excluded, in either direction."""
    if not excluded:
        return False
    return (a, b) in excluded or (b, a) in excluded


class ExclusionSet:
    """
    Mutable set of unordered key pairs.

    Pairs are stored once, smaller key first, and ``(a, b) in s`` holds
    exactly when ``(b, a) in s`` does.

    Example:
        >>> blocked = ExclusionSet([("b", "a")])
        >>> ("a", "b") in blocked
        True
        >>> list(blocked)
        [('a', 'b')]
    """

    def __init__(self, pairs: Optional[Iterable[Pair]] = None) -> None:
        self._pairs: Set[Pair] = set()
        for a, b in pairs or ():
            self.add(a, b)

    def add(self, a: Any, b: Any) -> None:
        self._pairs.add(normalize_pair(a, b))

    def discard(self, a: Any, b: Any) -> None:
        self._pairs.discard(normalize_pair(a, b))

    def clear(self) -> None:
        self._pairs.clear()

    def copy(self) -> "ExclusionSet":
        clone = ExclusionSet()
        clone._pairs = set(self._pairs)
        return clone

    def with_pair(self, a: Any, b: Any) -> "ExclusionSet":
        """Copy of this set with one more pair; the original is untouched."""
        clone = self.copy()
        clone.add(a, b)
        return clone

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        try:
            return normalize_pair(*pair) in self._pairs
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Pair]:
        """Yield pairs in ascending order."""
        return iter(sorted(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __bool__(self) -> bool:
        return bool(self._pairs)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExclusionSet):
            return self._pairs == other._pairs
        return NotImplemented

    def __repr__(self) -> str:
        return f"ExclusionSet({sorted(self._pairs)!r})"
