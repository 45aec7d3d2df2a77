"""Fixed-size first-in first-out buffer for received radio packets."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")

MAX_SIZE = 255


class BufferFullError(Exception):
    """Raised when a record is pushed into a full buffer."""


class BufferEmptyError(Exception):
    """Raised when a record is read from an empty buffer."""


class CircularBuffer(Generic[T]):
    """A ring of ``size`` slots; records are pushed at the front and taken from the back."""

    def __init__(self, size: int) -> None:
        if not 1 <= size <= MAX_SIZE:
            raise ValueError(f"buffer size must be between 1 and {MAX_SIZE}, got {size}")
        self._size = size
        self._slots: list[T | None] = [None] * size
        self._front = 0
        self._fill = 0

    @property
    def size(self) -> int:
        """Number of records the buffer can hold."""
        return self._size

    def clear(self) -> None:
        """Drop all records."""
        self._front = 0
        self._fill = 0
        self._slots = [None] * self._size

    def full(self) -> bool:
        """Return True when no more records fit."""
        return self._fill == self._size

    def push(self, record: T) -> None:
        """Add a record at the front; raise BufferFullError when full."""
        if self.full():
            raise BufferFullError("circular buffer is full")
        self._slots[self._front] = record
        self._front = (self._front + 1) % self._size
        self._fill += 1

    def _back(self) -> int:
        return (self._front - self._fill + self._size) % self._size

    def peek(self) -> T:
        """Return the oldest record without removing it."""
        if not self._fill:
            raise BufferEmptyError("circular buffer is empty")
        return self._slots[self._back()]  # type: ignore[return-value]

    def pop(self) -> T:
        """Remove and return the oldest record."""
        record = self.peek()
        self._slots[self._back()] = None
        self._fill -= 1
        return record

    def __len__(self) -> int:
        return self._fill

    def __bool__(self) -> bool:
        return self._fill > 0