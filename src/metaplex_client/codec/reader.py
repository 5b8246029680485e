"""
Binary Reader

Decodes the little-endian layouts produced by ``BinaryWriter``. Every read
past the end of the buffer raises ``CodecError``.
"""

import builtins
import struct
from typing import Any, Callable, List, Optional, TypeVar

from ..runtime.errors import CodecError
from ..runtime.pubkey import PUBLIC_KEY_LENGTH, PublicKey

T = TypeVar("T")


class BinaryReader:
    """
    Binary reader over an immutable buffer with a moving offset.
    """

    def __init__(self, buf: builtins.bytes, offset: int = 0):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
            offset: Starting offset
        """
        self._buf = bytes(buf)
        self._off = offset

    @property
    def eof(self) -> bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _take(self, n: int, what: str) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise CodecError(
                f"Buffer overflow: attempting to read {what} beyond end",
                {"offset": self._off, "length": n, "size": len(self._buf)},
            )
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def u8(self) -> int:
        """
        Read unsigned 8-bit integer.

        Returns:
            Unsigned 8-bit integer value
        """
        return self._take(1, "u8")[0]

    def bool(self) -> builtins.bool:
        """Read a strict 0/1 boolean byte."""
        v = self.u8()
        if v > 1:
            raise CodecError(f"Invalid boolean byte {v}", {"offset": self._off - 1})
        return v == 1

    def u16le(self) -> int:
        """Read unsigned 16-bit integer in little-endian format."""
        return struct.unpack("<H", self._take(2, "u16le"))[0]

    def u32le(self) -> int:
        """Read unsigned 32-bit integer in little-endian format."""
        return struct.unpack("<I", self._take(4, "u32le"))[0]

    def u64le(self) -> int:
        """Read unsigned 64-bit integer in little-endian format."""
        return struct.unpack("<Q", self._take(8, "u64le"))[0]

    def i64le(self) -> int:
        """Read signed 64-bit integer in little-endian format."""
        return struct.unpack("<q", self._take(8, "i64le"))[0]

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        return self._take(n, f"{n} bytes")

    def public_key(self) -> PublicKey:
        """Read a 32-byte public key."""
        return PublicKey(self._take(PUBLIC_KEY_LENGTH, "public key"))

    def string(self) -> str:
        """
        Read UTF-8 string with u32 little-endian length prefix.

        Returns:
            Decoded string
        """
        n = self.u32le()
        raw = self._take(n, f"string of {n} bytes")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError("Invalid UTF-8 string", {"offset": self._off - n}, e)

    def option(self, read: Callable[[], T]) -> Optional[T]:
        """Read an optional value written with a 0/1 tag."""
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise CodecError(f"Invalid option tag {tag}", {"offset": self._off - 1})

    def vec(self, read: Callable[[], T]) -> List[T]:
        """Read a u32 length-prefixed sequence."""
        n = self.u32le()
        if n > self.remaining:
            raise CodecError(f"Vector length {n} exceeds remaining buffer", {"offset": self._off})
        return [read() for _ in range(n)]

    def uvarint(self) -> int:
        """
        Read unsigned varint in ULEB128 format.

        Returns:
            Decoded unsigned integer value
        """
        x = 0
        s = 0
        while True:
            b = self.u8()
            if b < 0x80:
                x |= b << s
                break
            x |= (b & 0x7F) << s
            s += 7
            if s > 63:
                raise CodecError("Varint overflow", {"offset": self._off})
        return x

    def shortvec(self, read: Callable[[], T]) -> List[T]:
        """Read a compact-u16 length-prefixed sequence."""
        n = self.uvarint()
        if n > 0xFFFF:
            raise CodecError(f"shortvec length {n} exceeds u16", {"offset": self._off})
        return [read() for _ in range(n)]

    def discriminator(self, expected: builtins.bytes) -> None:
        """Consume an 8-byte account discriminator and check it."""
        actual = self._take(len(expected), "discriminator")
        if actual != expected:
            raise CodecError(
                "Account discriminator mismatch",
                {"expected": expected.hex(), "actual": actual.hex()},
            )
