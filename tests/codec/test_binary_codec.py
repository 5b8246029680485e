"""
Tests for BinaryWriter/BinaryReader and discriminators.
"""

import hashlib

import pytest

from metaplex_client.codec import (
    BinaryReader,
    BinaryWriter,
    account_discriminator,
    instruction_discriminator,
)
from metaplex_client.runtime.errors import CodecError

from helpers import mk_public_key


class TestWriterLayout:
    """Test byte-exact encodings."""

    def test_little_endian_integers(self):
        writer = BinaryWriter()
        writer.u16le(0x0102)
        writer.u32le(1)
        writer.u64le(2)
        writer.i64le(-1)

        assert writer.to_bytes() == (
            b"\x02\x01" + b"\x01\x00\x00\x00" + b"\x02" + b"\x00" * 7 + b"\xff" * 8
        )

    def test_string_has_u32_length_prefix(self):
        writer = BinaryWriter()
        writer.string("hé")

        assert writer.to_bytes() == b"\x03\x00\x00\x00h\xc3\xa9"

    def test_option_tags(self):
        writer = BinaryWriter()
        writer.option(None, writer.u8)
        writer.option(5, writer.u8)

        assert writer.to_bytes() == b"\x00\x01\x05"

    @pytest.mark.parametrize("length,prefix", [
        (0, b"\x00"),
        (0x7F, b"\x7f"),
        (0x80, b"\x80\x01"),
        (0x3FFF, b"\xff\x7f"),
        (0x4000, b"\x80\x80\x01"),
    ])
    def test_shortvec_length_prefix(self, length, prefix):
        writer = BinaryWriter()
        writer.shortvec([0] * length, writer.u8)

        assert writer.to_bytes()[:len(prefix)] == prefix
        assert len(writer.to_bytes()) == len(prefix) + length


class TestWriterRange:
    """Test that values outside an integer's width are rejected."""

    @pytest.mark.parametrize("method,value", [
        ("u8", 256),
        ("u8", -1),
        ("u16le", 0x10000),
        ("u32le", 2**32),
        ("u64le", 2**64 + 5),
        ("u64le", -1),
        ("i64le", 2**63),
        ("i64le", -(2**63) - 1),
        ("uvarint", 2**64),
    ])
    def test_out_of_range_raises(self, method, value):
        writer = BinaryWriter()

        with pytest.raises(CodecError):
            getattr(writer, method)(value)

        assert writer.to_bytes() == b""

    def test_bounds_are_encoded(self):
        writer = BinaryWriter()
        writer.u8(255)
        writer.u64le(2**64 - 1)
        writer.i64le(-(2**63))

        assert writer.to_bytes() == b"\xff" + b"\xff" * 8 + b"\x00" * 7 + b"\x80"


class TestReader:
    """Test decoding and its failure modes."""

    def test_reads_what_writer_wrote(self):
        key = mk_public_key("key")
        writer = BinaryWriter()
        writer.u8(7)
        writer.bool(True)
        writer.public_key(key)
        writer.string("name")
        writer.vec([1, 2, 3], writer.u16le)
        writer.option(None, writer.u64le)

        reader = BinaryReader(writer.to_bytes())

        assert reader.u8() == 7
        assert reader.bool() is True
        assert reader.public_key() == key
        assert reader.string() == "name"
        assert reader.vec(reader.u16le) == [1, 2, 3]
        assert reader.option(reader.u64le) is None
        assert reader.eof

    def test_truncated_buffer(self):
        with pytest.raises(CodecError) as exc_info:
            BinaryReader(b"\x01\x02").u32le()

        assert exc_info.value.details["size"] == 2

    def test_invalid_bool(self):
        with pytest.raises(CodecError):
            BinaryReader(b"\x02").bool()

    def test_invalid_option_tag(self):
        with pytest.raises(CodecError):
            BinaryReader(b"\x02\x00").option(BinaryReader(b"").u8)

    def test_vec_length_beyond_buffer(self):
        with pytest.raises(CodecError):
            BinaryReader(b"\xff\xff\xff\xff").vec(lambda: 0)

    def test_invalid_utf8(self):
        with pytest.raises(CodecError):
            BinaryReader(b"\x01\x00\x00\x00\xff").string()

    def test_discriminator_mismatch(self):
        with pytest.raises(CodecError):
            BinaryReader(bytes(8)).discriminator(account_discriminator("CandyMachine"))

    def test_offset_and_remaining(self):
        reader = BinaryReader(b"\x01\x02\x03", offset=1)

        reader.u8()

        assert reader.offset == 2
        assert reader.remaining == 1


class TestDiscriminators:
    """Test Anchor discriminators."""

    def test_account_discriminator(self):
        assert account_discriminator("AuctionHouse") == hashlib.sha256(b"account:AuctionHouse").digest()[:8]

    def test_instruction_discriminator(self):
        assert instruction_discriminator("update_authority") == \
            hashlib.sha256(b"global:update_authority").digest()[:8]
