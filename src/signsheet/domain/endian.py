"""Fixed-width integer <-> bytes conversion in a selectable byte order.

Pure functions with no state. Little-endian is the default everywhere.
Decoding reads from *offset* and ignores anything past the declared
width; encoding wraps values to the width (two's complement), the same
as reinterpreting the raw integer.
"""

from __future__ import annotations

import struct
from enum import StrEnum

SHORT_BYTES = 2
LONG_BYTES = 8


class ByteOrder(StrEnum):
    """Byte order for multi-byte integers."""

    LITTLE = "little"
    BIG = "big"


_PREFIX: dict[ByteOrder, str] = {ByteOrder.LITTLE: "<", ByteOrder.BIG: ">"}


def _wrap(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def short_to_bytes(value: int, byte_order: ByteOrder = ByteOrder.LITTLE) -> bytes:
    return struct.pack(f"{_PREFIX[byte_order]}h", _wrap(value, 16))


def bytes_to_short(data: bytes, offset: int = 0, byte_order: ByteOrder = ByteOrder.LITTLE) -> int:
    (value,) = struct.unpack_from(f"{_PREFIX[byte_order]}h", data, offset)
    return value


def long_to_bytes(value: int, byte_order: ByteOrder = ByteOrder.LITTLE) -> bytes:
    return struct.pack(f"{_PREFIX[byte_order]}q", _wrap(value, 64))


def bytes_to_long(data: bytes, offset: int = 0, byte_order: ByteOrder = ByteOrder.LITTLE) -> int:
    (value,) = struct.unpack_from(f"{_PREFIX[byte_order]}q", data, offset)
    return value
