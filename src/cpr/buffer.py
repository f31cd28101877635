"""Append-only byte buffer with amortized doubling growth.

The resolver accumulates every package's flags into one :class:`Buffer`.
Subprocess capture writes straight into space reserved at the tail, so the
buffer exposes its spare capacity as a writable ``memoryview``::

    with Buffer() as buf:
        with buf.reserve(1024) as tail:
            n = stream.readinto(tail)
        buf.commit(n)

Capacity only ever grows.  Rolling back (:meth:`Buffer.truncate`) moves the
logical length; the storage is released when the buffer is closed.
"""

from __future__ import annotations

from types import TracebackType

# Capacity of the first allocation; later growth doubles from here.
INITIAL_CAPACITY = 128


class Buffer:
    """Growable byte sequence with separate logical length and capacity."""

    def __init__(self) -> None:
        self._data = bytearray()
        self._length = 0

    def __enter__(self) -> Buffer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        """Number of bytes allocated for the buffer."""
        return len(self._data)

    @property
    def last(self) -> int | None:
        """Final byte of the logical content, or ``None`` when empty."""
        if self._length == 0:
            return None
        return self._data[self._length - 1]

    def _grow(self, required: int) -> None:
        capacity = len(self._data)
        if required <= capacity:
            return
        if capacity == 0:
            capacity = INITIAL_CAPACITY
        while required > capacity:
            capacity *= 2
        self._data.extend(bytes(capacity - len(self._data)))

    def append(self, byte: int) -> None:
        """Append a single byte value (0-255)."""
        self._grow(self._length + 1)
        self._data[self._length] = byte
        self._length += 1

    def append_many(self, data: bytes | None, count: int | None = None) -> None:
        """Append *count* bytes of *data* (all of it when *count* is ``None``).

        Passing ``data=None`` only reserves room for *count* more bytes and
        leaves the length alone; see :meth:`reserve`.
        """
        if data is None:
            if count is None:
                raise ValueError("count is required when reserving space")
            self._grow(self._length + count)
            return
        if count is None:
            count = len(data)
        elif count > len(data):
            raise ValueError(f"count {count} exceeds data length {len(data)}")
        end = self._length + count
        self._grow(end)
        self._data[self._length : end] = data[:count]
        self._length = end

    def reserve(self, count: int) -> memoryview:
        """Grow so *count* bytes fit past the end and return a view onto them.

        The view must be released (``with`` block or ``.release()``) before
        the buffer grows again.  Call :meth:`commit` with the number of bytes
        actually written.
        """
        self.append_many(None, count)
        return memoryview(self._data)[self._length : self._length + count]

    def commit(self, count: int) -> None:
        """Extend the logical length over *count* bytes written via :meth:`reserve`."""
        if count < 0 or self._length + count > len(self._data):
            raise ValueError(f"cannot commit {count} bytes past capacity {len(self._data)}")
        self._length += count

    def truncate(self, length: int) -> None:
        """Shrink the logical length to *length*; capacity is kept."""
        if length < 0 or length > self._length:
            raise ValueError(f"cannot truncate buffer of length {self._length} to {length}")
        self._length = length

    def getvalue(self, start: int = 0, end: int | None = None) -> bytes:
        """Return a copy of the logical content between *start* and *end*."""
        if end is None or end > self._length:
            end = self._length
        return bytes(self._data[start:end])

    def clear(self) -> None:
        self._length = 0

    def close(self) -> None:
        """Release the storage.  The buffer is empty afterwards."""
        self._data = bytearray()
        self._length = 0
