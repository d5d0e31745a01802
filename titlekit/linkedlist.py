"""A doubly linked list with a removable iterator."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterable, Iterator, Optional

Compare = Callable[[Any, Any], int]


class _Node:
    __slots__ = ("prev", "next", "value")

    def __init__(self, value: Any) -> None:
        self.prev: Optional[_Node] = None
        self.next: Optional[_Node] = None
        self.value = value


class LinkedList:
    """Ordered values held in doubly linked nodes."""

    def __init__(self, iterable: Iterable[Any] | None = None) -> None:
        self._first: Optional[_Node] = None
        self._last: Optional[_Node] = None
        self._size = 0
        if iterable is not None:
            for value in iterable:
                self.add(value)

    def __len__(self) -> int:
        return self._size

    def _nodes(self) -> Iterator[_Node]:
        node = self._first
        while node is not None:
            following = node.next
            yield node
            node = following

    def __iter__(self) -> Iterator[Any]:
        for node in self._nodes():
            yield node.value

    def __contains__(self, value: Any) -> bool:
        return self.index_of(value) != -1

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"

    def clear(self) -> None:
        self._first = None
        self._last = None
        self._size = 0

    def index_of(self, value: Any) -> int:
        """Return the index of the first equal value, or -1."""
        for index, item in enumerate(self):
            if item == value:
                return index
        return -1

    def _node_at(self, index: int) -> Optional[_Node]:
        if not 0 <= index < self._size:
            return None
        if index > (self._size - 1) // 2:
            node = self._last
            for _ in range(self._size - 1 - index):
                node = node.prev
        else:
            node = self._first
            for _ in range(index):
                node = node.next
        return node

    def get(self, index: int) -> Any:
        node = self._node_at(index)
        if node is None:
            raise IndexError(f"index {index} out of range")
        return node.value

    def add(self, value: Any) -> None:
        """Append a value."""
        node = _Node(value)
        if self._last is None:
            self._first = node
        else:
            node.prev = self._last
            self._last.next = node
        self._last = node
        self._size += 1

    def add_at(self, index: int, value: Any) -> None:
        """Insert a value so that it ends up at ``index``."""
        node = _Node(value)
        if index == 0:
            node.next = self._first
            self._first = node
        else:
            prev = self._node_at(index - 1)
            if prev is None:
                raise IndexError(f"index {index} out of range")
            node.prev = prev
            node.next = prev.next
            prev.next = node

        if node.next is not None:
            node.next.prev = node
        else:
            self._last = node
        self._size += 1

    def add_sorted(self, value: Any, compare: Compare | None) -> None:
        """Insert before the first value that compares greater than ``value``."""
        if compare is not None:
            for index, item in enumerate(self):
                if compare(value, item) < 0:
                    self.add_at(index, value)
                    return
        self.add(value)

    def _unlink(self, node: _Node) -> None:
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        if self._first is node:
            self._first = node.next
        if self._last is node:
            self._last = node.prev
        self._size -= 1

    def remove(self, value: Any) -> bool:
        """Remove every equal value; return whether any was found."""
        found = False
        for node in self._nodes():
            if node.value == value:
                found = True
                self._unlink(node)
        return found

    def remove_at(self, index: int) -> None:
        node = self._node_at(index)
        if node is None:
            raise IndexError(f"index {index} out of range")
        self._unlink(node)

    def sort(self, compare: Compare) -> None:
        """Stable in-place sort by a three-way comparison function."""
        ordered = sorted(self, key=cmp_to_key(compare))
        for node, value in zip(self._nodes(), ordered):
            node.value = value

    def iterate(self) -> LinkedListIterator:
        return LinkedListIterator(self)


class LinkedListIterator:
    """Walks a LinkedList and can remove the value it last returned."""

    def __init__(self, linked_list: LinkedList) -> None:
        self._list = linked_list
        self._curr: Optional[_Node] = None
        self._next: Optional[_Node] = None
        self.restart()

    def __iter__(self) -> LinkedListIterator:
        return self

    def __next__(self) -> Any:
        node = self._next
        if node is None:
            raise StopIteration
        self._curr = node
        self._next = node.next
        return node.value

    def has_next(self) -> bool:
        return self._next is not None

    def restart(self) -> None:
        self._curr = None
        self._next = self._list._first

    def remove(self) -> None:
        """Remove the value last returned; does nothing if there is none."""
        if self._curr is None:
            return
        self._list._unlink(self._curr)
        self._curr = None