"""
Token Metadata program accounts.

Layouts of the Metadata and Edition accounts, decoded with ``BinaryReader``.
Strings are stored NUL-padded to fixed widths on chain; decoded values have
the padding removed.
"""

from __future__ import annotations
from enum import IntEnum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ...codec import BinaryReader, BinaryWriter
from ...runtime.errors import CodecError
from ...runtime.pubkey import PublicKey
from ...utils.common import pad_empty_chars, remove_empty_chars

TOKEN_METADATA_PROGRAM_ID = PublicKey("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200


class MetadataKey(IntEnum):
    """First byte of every Token Metadata account."""
    UNINITIALIZED = 0
    EDITION_V1 = 1
    MASTER_EDITION_V1 = 2
    RESERVATION_LIST_V1 = 3
    METADATA_V1 = 4
    RESERVATION_LIST_V2 = 5
    MASTER_EDITION_V2 = 6
    EDITION_MARKER = 7


class Creator(BaseModel):
    """Verified or unverified creator with a royalty share."""
    model_config = ConfigDict(frozen=True)

    address: PublicKey
    verified: bool = False
    share: int = Field(ge=0, le=100)

    @classmethod
    def read(cls, reader: BinaryReader) -> Creator:
        return cls(address=reader.public_key(), verified=reader.bool(), share=reader.u8())

    def write(self, writer: BinaryWriter) -> None:
        writer.public_key(self.address)
        writer.bool(self.verified)
        writer.u8(self.share)


class MetadataData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = Field(ge=0, le=10_000)
    creators: Optional[List[Creator]] = None


class MetadataAccountData(BaseModel):
    """Decoded Metadata account (key MetadataV1)."""
    model_config = ConfigDict(frozen=True)

    key: MetadataKey = MetadataKey.METADATA_V1
    update_authority: PublicKey
    mint: PublicKey
    data: MetadataData
    primary_sale_happened: bool = False
    is_mutable: bool = True
    edition_nonce: Optional[int] = None

    def to_bytes(self) -> bytes:
        """Encode with on-chain padding, the inverse of ``parse_metadata_account``."""
        writer = BinaryWriter()
        writer.u8(self.key)
        writer.public_key(self.update_authority)
        writer.public_key(self.mint)
        writer.string(pad_empty_chars(self.data.name, MAX_NAME_LENGTH))
        writer.string(pad_empty_chars(self.data.symbol, MAX_SYMBOL_LENGTH))
        writer.string(pad_empty_chars(self.data.uri, MAX_URI_LENGTH))
        writer.u16le(self.data.seller_fee_basis_points)
        writer.option(self.data.creators, lambda creators: writer.vec(creators, lambda c: c.write(writer)))
        writer.bool(self.primary_sale_happened)
        writer.bool(self.is_mutable)
        writer.option(self.edition_nonce, writer.u8)
        return writer.to_bytes()


class MasterEditionAccountData(BaseModel):
    """Decoded MasterEditionV2 account: the original of a printable NFT."""
    model_config = ConfigDict(frozen=True)

    key: MetadataKey = MetadataKey.MASTER_EDITION_V2
    supply: int = 0
    max_supply: Optional[int] = None

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.u8(self.key)
        writer.u64le(self.supply)
        writer.option(self.max_supply, writer.u64le)
        return writer.to_bytes()


class EditionAccountData(BaseModel):
    """Decoded Edition account: a numbered print of a master edition."""
    model_config = ConfigDict(frozen=True)

    key: MetadataKey = MetadataKey.EDITION_V1
    parent: PublicKey
    edition: int

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.u8(self.key)
        writer.public_key(self.parent)
        writer.u64le(self.edition)
        return writer.to_bytes()


EditionAccount = Union[MasterEditionAccountData, EditionAccountData]


def _expect_key(reader: BinaryReader, *expected: MetadataKey) -> MetadataKey:
    key = reader.u8()
    if key not in expected:
        raise CodecError(
            f"Unexpected account key {key}",
            {"expected": [k.name for k in expected], "actual": key},
        )
    return MetadataKey(key)


def parse_metadata_account(data: bytes) -> MetadataAccountData:
    """
    Decode a Metadata account.

    Trailing bytes (newer optional fields and zero padding) are ignored.

    Raises:
        CodecError: Wrong key or truncated data
    """
    reader = BinaryReader(data)
    key = _expect_key(reader, MetadataKey.METADATA_V1)
    update_authority = reader.public_key()
    mint = reader.public_key()
    metadata = MetadataData(
        name=remove_empty_chars(reader.string()),
        symbol=remove_empty_chars(reader.string()),
        uri=remove_empty_chars(reader.string()),
        seller_fee_basis_points=reader.u16le(),
        creators=reader.option(lambda: reader.vec(lambda: Creator.read(reader))),
    )
    return MetadataAccountData(
        key=key,
        update_authority=update_authority,
        mint=mint,
        data=metadata,
        primary_sale_happened=reader.bool(),
        is_mutable=reader.bool(),
        edition_nonce=reader.option(reader.u8) if not reader.eof else None,
    )


def parse_edition_account(data: bytes) -> EditionAccount:
    """
    Decode the account at an NFT's edition address.

    Raises:
        CodecError: Not an edition account or truncated data
    """
    reader = BinaryReader(data)
    key = _expect_key(reader, MetadataKey.MASTER_EDITION_V2, MetadataKey.EDITION_V1)
    if key == MetadataKey.MASTER_EDITION_V2:
        return MasterEditionAccountData(
            key=key,
            supply=reader.u64le(),
            max_supply=reader.option(reader.u64le),
        )
    return EditionAccountData(key=key, parent=reader.public_key(), edition=reader.u64le())
