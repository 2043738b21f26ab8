"""DayBits: a fixed-capacity bit vector, one bit per day of the year.

Storage is a 46-byte ``bytearray`` (366 day bits plus two padding bits
in the last byte) allocated once and never resized, so every year
serializes to the same size. Bit ``i`` lives in
byte ``i // 8`` at bit ``i % 8`` (LSB first), which is exactly the bit
order of the little-endian integer formed from the buffer. Range
operations use that integer view.
"""

from __future__ import annotations

from collections.abc import Iterator

from signsheet.domain.calendar import MAX_YEAR_LENGTH

CAPACITY_BITS = MAX_YEAR_LENGTH
CAPACITY_BYTES = (CAPACITY_BITS + 7) // 8
_STORAGE_BITS = CAPACITY_BYTES * 8


class DayBits:
    """Fixed 366-bit vector addressed by zero-based day index."""

    __slots__ = ("_buf",)

    def __init__(self, data: bytes | None = None) -> None:
        if data is None:
            self._buf = bytearray(CAPACITY_BYTES)
            return
        if len(data) != CAPACITY_BYTES:
            msg = f"DayBits needs exactly {CAPACITY_BYTES} bytes, got {len(data)}"
            raise ValueError(msg)
        self._buf = bytearray(data)

    @staticmethod
    def _check(index: int) -> None:
        if not 0 <= index < CAPACITY_BITS:
            msg = f"Bit index {index} outside 0..{CAPACITY_BITS - 1}"
            raise IndexError(msg)

    def get(self, index: int) -> bool:
        self._check(index)
        return bool(self._buf[index >> 3] & (1 << (index & 7)))

    def set(self, index: int) -> None:
        self._check(index)
        self._buf[index >> 3] |= 1 << (index & 7)

    def _window(self, start: int, stop: int) -> int:
        """Bits ``[start, stop)`` shifted down to bit 0."""
        if not 0 <= start <= stop <= _STORAGE_BITS:
            msg = f"Invalid bit range [{start}, {stop})"
            raise IndexError(msg)
        value = int.from_bytes(self._buf, "little")
        return (value >> start) & ((1 << (stop - start)) - 1)

    def count(self, start: int = 0, stop: int = CAPACITY_BITS) -> int:
        """Number of set bits in ``[start, stop)``."""
        return self._window(start, stop).bit_count()

    def indices(
        self, start: int = 0, stop: int = CAPACITY_BITS, *, value: bool = True
    ) -> Iterator[int]:
        """Ascending indices in ``[start, stop)`` whose bit equals *value*.

        ``value=False`` inverts only the requested window before scanning,
        so nothing outside ``[start, stop)`` is ever reported.
        """
        window = self._window(start, stop)
        if not value:
            window ^= (1 << (stop - start)) - 1
        while window:
            low = window & -window
            yield start + low.bit_length() - 1
            window ^= low

    def set_from(self, start: int) -> list[int]:
        """Set indices at or above *start*, padding bits of the last byte included."""
        return list(self.indices(start, _STORAGE_BITS))

    def clear_from(self, start: int) -> list[int]:
        """Zero every bit at or above *start*; return the indices cleared."""
        cleared = self.set_from(start)
        for index in cleared:
            self._buf[index >> 3] &= ~(1 << (index & 7)) & 0xFF
        return cleared

    def to_bytes(self) -> bytes:
        return bytes(self._buf)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayBits):
            return NotImplemented
        return self._buf == other._buf

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DayBits(set={self.count()})"
