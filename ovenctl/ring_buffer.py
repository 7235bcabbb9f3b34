"""Fixed-size byte ring buffer used for transmit queues."""

from __future__ import annotations


class RingBufferEmpty(Exception):
    """Raised when data is requested from an empty ring buffer."""


class RingBufferFull(Exception):
    """Raised when data does not fit into the ring buffer."""


class RingBuffer:
    """A byte ring buffer that can hold exactly ``size`` bytes."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("ring buffer size must be positive")
        self.size = size
        self._data = bytearray(size)
        self._read = 0
        self._write = 0
        self._full = False

    def __len__(self) -> int:
        if self._full:
            return self.size
        return (self._write - self._read) % self.size

    @property
    def is_empty(self) -> bool:
        return self._read == self._write and not self._full

    @property
    def is_full(self) -> bool:
        return self._full

    def read(self) -> int:
        """Remove and return the oldest byte."""
        if self.is_empty:
            raise RingBufferEmpty("ring buffer is empty")
        value = self._data[self._read]
        self._read = (self._read + 1) % self.size
        self._full = False
        return value

    def read_block(self, max_size: int) -> bytes:
        """Remove and return up to ``max_size`` of the oldest bytes."""
        if self.is_empty:
            raise RingBufferEmpty("ring buffer is empty")
        if max_size <= 0:
            return b""

        if self._read >= self._write:
            first = self.size - self._read
            second = self._write
        else:
            first = self._write - self._read
            second = 0
        first = min(first, max_size)
        second = min(second, max_size - first)

        block = bytes(self._data[self._read:self._read + first]) + bytes(self._data[:second])
        self._read = (self._read + first + second) % self.size
        self._full = False
        return block

    def write(self, value: int) -> None:
        """Append one byte."""
        if self._full:
            raise RingBufferFull("ring buffer is full")
        self._data[self._write] = value
        self._write = (self._write + 1) % self.size
        if self._write == self._read:
            self._full = True

    def write_block(self, data: bytes) -> None:
        """Append all of ``data`` or nothing at all."""
        chunk = bytes(data)
        if self._full:
            raise RingBufferFull("ring buffer is full")
        if len(chunk) > self.size - len(self):
            raise RingBufferFull(
                f"{len(chunk)} bytes do not fit into {self.size - len(self)} free bytes"
            )
        if not chunk:
            return

        end = self._write + len(chunk)
        if end <= self.size:
            self._data[self._write:end] = chunk
        else:
            head = self.size - self._write
            self._data[self._write:] = chunk[:head]
            self._data[:end - self.size] = chunk[head:]
        self._write = end % self.size
        if self._write == self._read:
            self._full = True

    def peek(self) -> bytes:
        """Return the contiguous run of readable bytes without removing it."""
        if self.is_empty:
            return b""
        if self._read >= self._write:
            return bytes(self._data[self._read:])
        return bytes(self._data[self._read:self._write])

    def clear(self, count: int) -> None:
        """Discard up to ``count`` of the oldest bytes."""
        if self.is_empty or count <= 0:
            return
        self.read_block(count)