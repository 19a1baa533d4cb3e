"""Circular byte history for terminal scrollback.

Bytes are addressed by their logical offset in the whole stream, counted
from 0 at construction. The storage length is always a power of two, so the
physical slot of offset ``i`` is simply ``i & mask``:

    buf[i & mask]  holds byte i  for  cursor - length <= i < cursor

``cursor`` is the total number of bytes ever added (one past the newest
byte) and ``length`` is how many of the newest bytes are still readable.
Nothing here is thread safe; callers serialize access.
"""
from typing import Optional, Tuple

from scrollback import config
from scrollback.logger import logger

MIN_CAPACITY = 2
MAX_CAPACITY = 1 << 23


def next_power_of_two(n: int) -> int:
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


class RingStore:
    def __init__(self, min_capacity: Optional[int] = None):
        if min_capacity is None:
            min_capacity = config.HISTORY_MIN_CAPACITY
        requested = int(min_capacity)
        capacity = min(max(next_power_of_two(requested), MIN_CAPACITY), MAX_CAPACITY)
        self.buf = bytearray(capacity)
        self.mask = capacity - 1
        self.cursor = 0
        self.length = 0
        if requested > MAX_CAPACITY:
            logger.debug("RingStore: requested=%d capped to capacity=%d", requested, capacity)
        else:
            logger.debug("RingStore: requested=%d capacity=%d", requested, capacity)

    @property
    def capacity(self) -> int:
        return len(self.buf)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return '<RingStore capacity=%d index=%d len=%d>' % (self.capacity, self.get_index(), self.length)

    def add(self, data: bytes) -> None:
        """Append ``data``, overwriting the oldest bytes once full.

        Only the last ``capacity`` bytes of an oversized write ever reach
        storage; the rest are logically overwritten within the same call.
        """
        view = memoryview(data).cast('B')
        n = len(view)
        if not n:
            return

        size = len(self.buf)
        evicted = max(0, self.length + n - size)
        self.cursor += n
        self.length = min(self.length + n, size)

        stored = min(n, size)
        start = (self.cursor - stored) & self.mask
        end = self.cursor & self.mask

        if end > start:
            self.buf[start:end] = view
        else:
            tail = view[n - stored:]
            first = size - start
            self.buf[start:size] = tail[:first]
            self.buf[0:end] = tail[first:]

        if evicted:
            logger.debug("RingStore.add: evicted=%d, index=%d", evicted, self.get_index())

    def clear(self) -> None:
        """Drop all history. The bytes stay in storage but are no longer readable."""
        if self.length:
            logger.debug("RingStore.clear: dropped=%d, index=%d", self.length, self.cursor)
        self.length = 0

    def clear_at(self, new_start_index: int) -> None:
        """Drop all history before ``new_start_index``. Never extends history."""
        new_length = min(self.length, max(0, self.cursor - new_start_index))
        if new_length < self.length:
            logger.debug("RingStore.clear_at(%d): dropped=%d", new_start_index, self.length - new_length)
        self.length = new_length

    def get(self, index: int) -> Optional[int]:
        if self.cursor - self.length <= index < self.cursor:
            return self.buf[index & self.mask]
        return None

    def get_index(self) -> int:
        """Offset of the oldest readable byte."""
        return self.cursor - self.length

    def get_last_index(self) -> int:
        """Offset of the newest readable byte.

        With an empty history this collapses to ``get_index()``; check
        ``get_len()`` to tell "empty" from "one byte at this offset".
        """
        if self.length:
            return self.cursor - 1
        return self.cursor

    def get_len(self) -> int:
        return self.length

    def get_recent(self, max_len: int) -> bytes:
        size = min(max_len, self.length)
        data, _ = self.get_vec_and_index(self.cursor - size, max_len)
        return data

    def get_vec(self, start_index: int, max_len: int) -> bytes:
        data, _ = self.get_vec_and_index(start_index, max_len)
        return data

    def get_vec_and_index(self, start_index: int, max_len: int) -> Tuple[bytes, int]:
        """Return up to ``max_len`` bytes from ``start_index`` and the offset they start at.

        The window is clipped to what is still retained, so the data can start
        later than ``start_index`` (older bytes were evicted or cleared) and be
        shorter than ``max_len`` (newer bytes were not written yet).

        An empty window returns ``(b'', 0)``, not the clipped start offset;
        don't rely on the offset when the data is empty.
        """
        out = min(start_index + max_len, self.cursor)
        inn = min(max(start_index, self.cursor - self.length), out)
        num = out - inn
        if num <= 0:
            return b'', 0

        inndx = inn & self.mask
        outdx = out & self.mask
        if outdx > inndx:
            return bytes(self.buf[inndx:outdx]), inn

        data = bytes(self.buf[inndx:])
        data += bytes(self.buf[0:outdx])
        return data, inn

    def last_byte(self) -> Optional[int]:
        if self.length:
            return self.buf[(self.cursor - 1) & self.mask]
        return None
