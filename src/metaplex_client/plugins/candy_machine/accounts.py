"""
Candy Machine v2 program account and instruction payload.

``CandyMachineData`` is both embedded in the CandyMachine account and sent
as the argument of the ``update_candy_machine`` instruction.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...codec import BinaryReader, BinaryWriter, account_discriminator
from ...codec.writer import I64_MAX, I64_MIN, U64_MAX
from ...runtime.errors import CodecError
from ...runtime.pubkey import PublicKey
from ..nft.accounts import Creator

CANDY_MACHINE_PROGRAM_ID = PublicKey("cndy3Z4yapfJBmL3ShUp5exZKqR3z33thTzeNMm2gRZ")
CANDY_MACHINE_DISCRIMINATOR = account_discriminator("CandyMachine")

U64 = Annotated[int, Field(ge=0, le=U64_MAX)]
I64 = Annotated[int, Field(ge=I64_MIN, le=I64_MAX)]


class EndSettingType(IntEnum):
    DATE = 0
    AMOUNT = 1


class WhitelistMintMode(IntEnum):
    BURN_EVERY_TIME = 0
    NEVER_BURN = 1


def _read_enum(reader: BinaryReader, enum_type):
    value = reader.u8()
    try:
        return enum_type(value)
    except ValueError as e:
        raise CodecError(f"Invalid {enum_type.__name__} variant {value}", cause=e) from e


class EndSettings(BaseModel):
    """Stop minting at a date or after a number of items."""
    model_config = ConfigDict(frozen=True)

    end_setting_type: EndSettingType
    number: U64

    @classmethod
    def read(cls, reader: BinaryReader) -> EndSettings:
        return cls(end_setting_type=_read_enum(reader, EndSettingType), number=reader.u64le())

    def write(self, writer: BinaryWriter) -> None:
        writer.u8(self.end_setting_type)
        writer.u64le(self.number)


class HiddenSettings(BaseModel):
    """Single shared name and URI for every item until reveal."""
    model_config = ConfigDict(frozen=True)

    name: str
    uri: str
    hash: bytes

    @field_validator("hash")
    @classmethod
    def _check_hash(cls, value: bytes) -> bytes:
        if len(value) != 32:
            raise ValueError(f"hash must be 32 bytes, got {len(value)}")
        return value

    @classmethod
    def read(cls, reader: BinaryReader) -> HiddenSettings:
        return cls(name=reader.string(), uri=reader.string(), hash=reader.bytes(32))

    def write(self, writer: BinaryWriter) -> None:
        writer.string(self.name)
        writer.string(self.uri)
        writer.bytes(self.hash)


class WhitelistMintSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: WhitelistMintMode
    mint: PublicKey
    presale: bool = False
    discount_price: Optional[U64] = None

    @classmethod
    def read(cls, reader: BinaryReader) -> WhitelistMintSettings:
        return cls(
            mode=_read_enum(reader, WhitelistMintMode),
            mint=reader.public_key(),
            presale=reader.bool(),
            discount_price=reader.option(reader.u64le),
        )

    def write(self, writer: BinaryWriter) -> None:
        writer.u8(self.mode)
        writer.public_key(self.mint)
        writer.bool(self.presale)
        writer.option(self.discount_price, writer.u64le)


class GatekeeperConfig(BaseModel):
    """Captcha-style gateway token required to mint."""
    model_config = ConfigDict(frozen=True)

    gatekeeper_network: PublicKey
    expire_on_use: bool = False

    @classmethod
    def read(cls, reader: BinaryReader) -> GatekeeperConfig:
        return cls(gatekeeper_network=reader.public_key(), expire_on_use=reader.bool())

    def write(self, writer: BinaryWriter) -> None:
        writer.public_key(self.gatekeeper_network)
        writer.bool(self.expire_on_use)


class CandyMachineData(BaseModel):
    """Configurable settings of a candy machine."""
    model_config = ConfigDict(frozen=True)

    uuid: str
    price: U64
    symbol: str = ""
    seller_fee_basis_points: int = Field(ge=0, le=10_000)
    max_supply: U64 = 0
    is_mutable: bool = True
    retain_authority: bool = True
    go_live_date: Optional[I64] = None
    end_settings: Optional[EndSettings] = None
    creators: List[Creator] = Field(default_factory=list)
    hidden_settings: Optional[HiddenSettings] = None
    whitelist_mint_settings: Optional[WhitelistMintSettings] = None
    items_available: U64
    gatekeeper: Optional[GatekeeperConfig] = None

    @classmethod
    def read(cls, reader: BinaryReader) -> CandyMachineData:
        return cls(
            uuid=reader.string(),
            price=reader.u64le(),
            symbol=reader.string(),
            seller_fee_basis_points=reader.u16le(),
            max_supply=reader.u64le(),
            is_mutable=reader.bool(),
            retain_authority=reader.bool(),
            go_live_date=reader.option(reader.i64le),
            end_settings=reader.option(lambda: EndSettings.read(reader)),
            creators=reader.vec(lambda: Creator.read(reader)),
            hidden_settings=reader.option(lambda: HiddenSettings.read(reader)),
            whitelist_mint_settings=reader.option(lambda: WhitelistMintSettings.read(reader)),
            items_available=reader.u64le(),
            gatekeeper=reader.option(lambda: GatekeeperConfig.read(reader)),
        )

    def write(self, writer: BinaryWriter) -> None:
        writer.string(self.uuid)
        writer.u64le(self.price)
        writer.string(self.symbol)
        writer.u16le(self.seller_fee_basis_points)
        writer.u64le(self.max_supply)
        writer.bool(self.is_mutable)
        writer.bool(self.retain_authority)
        writer.option(self.go_live_date, writer.i64le)
        writer.option(self.end_settings, lambda s: s.write(writer))
        writer.vec(self.creators, lambda c: c.write(writer))
        writer.option(self.hidden_settings, lambda s: s.write(writer))
        writer.option(self.whitelist_mint_settings, lambda s: s.write(writer))
        writer.u64le(self.items_available)
        writer.option(self.gatekeeper, lambda g: g.write(writer))

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.to_bytes()


class CandyMachineAccountData(BaseModel):
    """Decoded CandyMachine account."""
    model_config = ConfigDict(frozen=True)

    authority: PublicKey
    wallet: PublicKey
    token_mint: Optional[PublicKey] = None
    items_redeemed: U64 = 0
    data: CandyMachineData

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.bytes(CANDY_MACHINE_DISCRIMINATOR)
        writer.public_key(self.authority)
        writer.public_key(self.wallet)
        writer.option(self.token_mint, writer.public_key)
        writer.u64le(self.items_redeemed)
        self.data.write(writer)
        return writer.to_bytes()


def parse_candy_machine_account(data: bytes) -> CandyMachineAccountData:
    """
    Decode a CandyMachine account.

    The config lines stored after the fixed header are not decoded.

    Raises:
        CodecError: Wrong discriminator, bad enum variant or truncated data
    """
    reader = BinaryReader(data)
    reader.discriminator(CANDY_MACHINE_DISCRIMINATOR)
    return CandyMachineAccountData(
        authority=reader.public_key(),
        wallet=reader.public_key(),
        token_mint=reader.option(reader.public_key),
        items_redeemed=reader.u64le(),
        data=CandyMachineData.read(reader),
    )
