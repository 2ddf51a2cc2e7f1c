"""Double-buffered queue: appended items become visible only after a slide."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class SlidingQueue(Generic[T]):
    """A queue whose readable window moves forward on :meth:`slide_window`."""

    def __init__(self):
        self._items: list[T] = []
        self._out_start = 0
        self._out_end = 0

    def push_back(self, item: T) -> None:
        self._items.append(item)

    def empty(self) -> bool:
        return self._out_start == self._out_end

    def reset(self) -> None:
        self._items.clear()
        self._out_start = 0
        self._out_end = 0

    def slide_window(self) -> None:
        self._out_start = self._out_end
        self._out_end = len(self._items)

    def window(self) -> list[T]:
        """The items in the current window, as a list."""
        return self._items[self._out_start:self._out_end]

    def _extend(self, items: list[T]) -> None:
        self._items.extend(items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.window())

    def __len__(self) -> int:
        return self._out_end - self._out_start


class QueueBuffer(Generic[T]):
    """Local buffer that appends to a :class:`SlidingQueue` in bulk."""

    def __init__(self, queue: SlidingQueue[T], size: int = 16384):
        if size <= 0:
            raise ValueError("buffer size must be positive")
        self._queue = queue
        self._size = size
        self._local: list[T] = []

    def push_back(self, item: T) -> None:
        if len(self._local) == self._size:
            self.flush()
        self._local.append(item)

    def flush(self) -> None:
        self._queue._extend(self._local)
        self._local = []

    def __len__(self) -> int:
        return len(self._local)