"""
Binary Writer

Little-endian primitive encoding used by on-chain programs (borsh layout):
fixed-width integers, u32 length-prefixed strings and vectors, 1-byte option
tags, plus the compact-u16 varint used in transaction messages.
"""

import struct
from typing import Any, Callable, List, Optional, Sequence

from ..runtime.errors import CodecError

U16_MAX = 0xFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


class BinaryWriter:
    """
    Binary writer accumulating bytes in call order.

    Every method returns nothing; call ``to_bytes`` when done. Integers that
    do not fit their width raise ``CodecError`` instead of wrapping.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def _fixed(self, fmt: str, name: str, v: int, lo: int, hi: int) -> None:
        if not lo <= v <= hi:
            raise CodecError(f"{name} value {v} out of range", {"min": lo, "max": hi, "value": v})
        self._bb.extend(struct.pack(fmt, v))

    def u8(self, v: int) -> None:
        """Write unsigned 8-bit integer."""
        self._fixed('<B', "u8", v, 0, 0xFF)

    def bool(self, v: bool) -> None:
        """Write boolean as a single byte."""
        self.u8(1 if v else 0)

    def u16le(self, v: int) -> None:
        """Write unsigned 16-bit integer in little-endian format."""
        self._fixed('<H', "u16", v, 0, 0xFFFF)

    def u32le(self, v: int) -> None:
        """Write unsigned 32-bit integer in little-endian format."""
        self._fixed('<I', "u32", v, 0, 0xFFFFFFFF)

    def u64le(self, v: int) -> None:
        """Write unsigned 64-bit integer in little-endian format."""
        self._fixed('<Q', "u64", v, 0, U64_MAX)

    def i64le(self, v: int) -> None:
        """Write signed 64-bit integer in little-endian format."""
        self._fixed('<q', "i64", v, I64_MIN, I64_MAX)

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def public_key(self, v: Any) -> None:
        """Write a 32-byte public key."""
        self.bytes(bytes(v))

    def string(self, s: str) -> None:
        """
        Write UTF-8 string with u32 little-endian length prefix.

        Args:
            s: String to write
        """
        b = s.encode('utf-8')
        self.u32le(len(b))
        self.bytes(b)

    def option(self, v: Optional[Any], write: Callable[[Any], None]) -> None:
        """
        Write an optional value: tag 0 for None, tag 1 followed by the value.

        Args:
            v: Value or None
            write: Callable encoding the present value
        """
        if v is None:
            self.u8(0)
        else:
            self.u8(1)
            write(v)

    def vec(self, items: Sequence[Any], write: Callable[[Any], None]) -> None:
        """Write a u32 length-prefixed sequence."""
        self.u32le(len(items))
        for item in items:
            write(item)

    def uvarint(self, v: int) -> None:
        """
        Write unsigned varint in ULEB128 format.

        Transaction messages use this as compact-u16 for array lengths.

        Args:
            v: Unsigned integer value to encode as varint
        """
        if not 0 <= v <= U64_MAX:
            raise CodecError(f"varint value {v} out of range", {"max": U64_MAX, "value": v})
        x = v
        while x >= 0x80:
            self.u8((x & 0x7F) | 0x80)
            x >>= 7
        self.u8(x)

    def shortvec(self, items: Sequence[Any], write: Callable[[Any], None]) -> None:
        """Write a compact-u16 length-prefixed sequence."""
        if len(items) > U16_MAX:
            raise CodecError(f"shortvec length {len(items)} exceeds u16", {"length": len(items)})
        self.uvarint(len(items))
        for item in items:
            write(item)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
