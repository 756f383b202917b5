"""Fixed-capacity array with positional insertion and removal."""

from __future__ import annotations

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class CapacityError(Exception):
    """Raised when an element is added to a container that is already full."""


class BoundedArray(Generic[T]):
    """A sequence that holds at most ``capacity`` elements.

    Elements created without an explicit value (``create``, ``fill``)
    take the array's ``default`` value.
    """

    __slots__ = ("_items", "_capacity", "_default")

    def __init__(self, capacity: int, default: Optional[T] = None) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._default = default
        self._items: List[Optional[T]] = []

    @property
    def capacity(self) -> int:
        """Maximum number of elements the array can hold."""
        return self._capacity

    @property
    def default(self) -> Optional[T]:
        """Value given to elements created without one."""
        return self._default

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def copy(self, amount: Optional[int] = None) -> "BoundedArray[T]":
        """Return a new array of capacity ``amount`` holding the first elements.

        ``amount`` defaults to the current number of elements.
        """
        if amount is None:
            amount = len(self._items)
        result: BoundedArray[T] = BoundedArray(amount, self._default)
        result._items = self._items[:amount]
        return result

    def clear(self) -> None:
        self._items.clear()

    def fill(self) -> None:
        """Grow to full capacity, padding with the default value."""
        missing = self._capacity - len(self._items)
        self._items.extend([self._default] * missing)

    def _ensure_room(self) -> None:
        if self.is_full:
            raise CapacityError(f"array is full ({self._capacity} elements)")

    def _check_index(self, index: int, limit: int) -> None:
        if not 0 <= index < limit:
            raise IndexError(f"index {index} out of range 0..{limit - 1}")

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before position ``index`` (``index`` may equal the size)."""
        self._ensure_room()
        self._check_index(index, len(self._items) + 1)
        self._items.insert(index, value)

    def insert_head(self, value: T) -> None:
        self.insert(0, value)

    def insert_tail(self, value: T) -> None:
        self.insert(len(self._items), value)

    def create(self, index: int) -> None:
        """Insert the default value before position ``index``."""
        self.insert(index, self._default)

    def create_head(self) -> None:
        self.create(0)

    def create_tail(self) -> None:
        self.create(len(self._items))

    def remove(self, index: int) -> Optional[T]:
        """Remove and return the element at ``index``."""
        self._check_index(index, len(self._items))
        return self._items.pop(index)

    def remove_head(self) -> Optional[T]:
        return self.remove(0)

    def remove_tail(self) -> Optional[T]:
        return self.remove(len(self._items) - 1)

    def update(self, index: int, value: T) -> None:
        self._check_index(index, len(self._items))
        self._items[index] = value

    def update_head(self, value: T) -> None:
        self.update(0, value)

    def update_tail(self, value: T) -> None:
        self.update(len(self._items) - 1, value)

    def head(self) -> Optional[T]:
        """Return the first element."""
        return self[0]

    def tail(self) -> Optional[T]:
        """Return the last element."""
        return self[len(self._items) - 1]

    def __getitem__(self, index: int) -> Optional[T]:
        self._check_index(index, len(self._items))
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Optional[T]]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"BoundedArray(capacity={self._capacity}, items={self._items!r})"