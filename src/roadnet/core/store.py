"""
Ordered key store backing the graph's node table.

The store maps unique, totally ordered keys to values and enumerates values in
ascending key order. It is a plain binary search tree: lookups are logarithmic
on typical input, and strict balancing is not required because only ordering
and first-write-wins semantics matter to callers.

All walks are iterative, so a store filled in sorted order (a degenerate,
list-shaped tree) never runs into the interpreter recursion limit.

Example:
    >>> store = OrderedKeyStore[str, int]()
    >>> store.insert("b", 2)
    True
    >>> store.insert("a", 1)
    True
    >>> store.insert("a", 99)
    False
    >>> list(store.entries_in_order())
    [1, 2]
"""

from dataclasses import dataclass
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class _TreeNode(Generic[K, V]):
    """Single tree cell."""

    __slots__ = ("key", "value", "left", "right")

    key: K
    value: V
    left: Optional["_TreeNode[K, V]"]
    right: Optional["_TreeNode[K, V]"]


class OrderedKeyStore(Generic[K, V]):
    """
    Binary search tree keyed by totally ordered keys.

    Attributes:
        _root: Root cell of the tree, None while empty
        _size: Number of stored keys
    """

    def __init__(self) -> None:
        self._root: Optional[_TreeNode[K, V]] = None
        self._size = 0

    def insert(self, key: K, value: V) -> bool:
        """
        Insert a value under a key unless the key is already present.

        The first write wins: inserting an existing key leaves the store
        unchanged.

        Args:
            key: Key to insert
            value: Value stored under the key

        Returns:
            True if the value was inserted, False if the key already existed
        """
        cell = _TreeNode(key, value, None, None)
        if self._root is None:
            self._root = cell
            self._size = 1
            return True

        current = self._root
        while True:
            if key < current.key:
                if current.left is None:
                    current.left = cell
                    break
                current = current.left
            elif current.key < key:
                if current.right is None:
                    current.right = cell
                    break
                current = current.right
            else:
                return False

        self._size += 1
        return True

    def _find_cell(self, key: K) -> Optional[_TreeNode[K, V]]:
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif current.key < key:
                current = current.right
            else:
                return current
        return None

    def find(self, key: K) -> Optional[V]:
        """Return the value stored under ``key``, or None if absent."""
        cell = self._find_cell(key)
        return cell.value if cell is not None else None

    def _walk(self) -> Iterator[_TreeNode[K, V]]:
        """In-order walk with an explicit stack."""
        stack: List[_TreeNode[K, V]] = []
        current = self._root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current
            current = current.right

    def entries_in_order(self) -> Iterator[V]:
        """
        Lazily yield all values in ascending key order.

        Every call returns a fresh generator, so the enumeration can be
        restarted at will. The store must not be modified while a generator
        is being consumed.
        """
        for cell in self._walk():
            yield cell.value

    def keys_in_order(self) -> Iterator[K]:
        """Lazily yield all keys in ascending order."""
        for cell in self._walk():
            yield cell.key

    def items_in_order(self) -> Iterator[Tuple[K, V]]:
        """Lazily yield ``(key, value)`` pairs in ascending key order."""
        for cell in self._walk():
            yield cell.key, cell.value

    def __contains__(self, key: object) -> bool:
        try:
            return self._find_cell(key) is not None  # type: ignore[arg-type]
        except TypeError:
            return False

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[K]:
        return self.keys_in_order()
