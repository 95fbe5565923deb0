"""Fixed-capacity FIFO used by the gauge widgets."""

from collections import deque
from typing import Deque, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar('T')


class BoundedHistory(Generic[T]):
    """
    Ordered ring buffer: pushing past capacity evicts the oldest value.

    Args:
        capacity: Maximum number of retained values (must be positive)
        initial: Optional values to pre-load, oldest first
    """

    def __init__(self, capacity: int, initial: Optional[Iterable[T]] = None):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._items: Deque[T] = deque(initial or (), maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen

    def push(self, value: T) -> None:
        self._items.append(value)

    def latest(self) -> Optional[T]:
        return self._items[-1] if self._items else None

    def values(self) -> List[T]:
        """Snapshot of the contents, oldest first."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"BoundedHistory(capacity={self.capacity}, len={len(self)})"
