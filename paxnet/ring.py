"""Fixed-capacity double-ended queue."""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

from paxnet.array import CapacityError

T = TypeVar("T")


class RingQueue(Generic[T]):
    """A double-ended queue that holds at most ``capacity`` elements.

    Elements are added and removed at either end; any element can be
    read or replaced by its position counted from the head.
    """

    __slots__ = ("_items", "_capacity", "_default")

    def __init__(self, capacity: int, default: Optional[T] = None) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._default = default
        self._items: Deque[Optional[T]] = deque()

    @property
    def capacity(self) -> int:
        """Maximum number of elements the queue can hold."""
        return self._capacity

    @property
    def default(self) -> Optional[T]:
        """Value given to elements created without one."""
        return self._default

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def copy(self, amount: Optional[int] = None) -> "RingQueue[T]":
        """Return a new queue of capacity ``amount`` holding the elements nearest the head."""
        if amount is None:
            amount = len(self._items)
        result: RingQueue[T] = RingQueue(amount, self._default)
        for _, value in zip(range(amount), self._items):
            result._items.append(value)
        return result

    def clear(self) -> None:
        self._items.clear()

    def fill(self) -> None:
        """Grow to full capacity, padding the tail with the default value."""
        missing = self._capacity - len(self._items)
        self._items.extend([self._default] * missing)

    def _ensure_room(self) -> None:
        if self.is_full:
            raise CapacityError(f"queue is full ({self._capacity} elements)")

    def _ensure_items(self) -> None:
        if not self._items:
            raise IndexError("queue is empty")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range 0..{len(self._items) - 1}")

    def insert_head(self, value: T) -> None:
        self._ensure_room()
        self._items.appendleft(value)

    def insert_tail(self, value: T) -> None:
        self._ensure_room()
        self._items.append(value)

    def create_head(self) -> None:
        """Add the default value at the head."""
        self.insert_head(self._default)

    def create_tail(self) -> None:
        """Add the default value at the tail."""
        self.insert_tail(self._default)

    def remove_head(self) -> Optional[T]:
        self._ensure_items()
        return self._items.popleft()

    def remove_tail(self) -> Optional[T]:
        self._ensure_items()
        return self._items.pop()

    def update(self, index: int, value: T) -> None:
        self._check_index(index)
        self._items[index] = value

    def update_head(self, value: T) -> None:
        self.update(0, value)

    def update_tail(self, value: T) -> None:
        self.update(len(self._items) - 1, value)

    def head(self) -> Optional[T]:
        return self[0]

    def tail(self) -> Optional[T]:
        return self[len(self._items) - 1]

    def __getitem__(self, index: int) -> Optional[T]:
        self._check_index(index)
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Optional[T]]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"RingQueue(capacity={self._capacity}, items={list(self._items)!r})"