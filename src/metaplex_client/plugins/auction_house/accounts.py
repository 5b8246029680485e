"""
Auction House program account.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ...codec import BinaryReader, BinaryWriter, account_discriminator
from ...runtime.pubkey import PublicKey

AUCTION_HOUSE_PROGRAM_ID = PublicKey("hausS13jsjafwWwGqZTUQRmWyvyxn9EQpqMwV1PBBmk")
AUCTION_HOUSE_DISCRIMINATOR = account_discriminator("AuctionHouse")


class AuctionHouseAccountData(BaseModel):
    """Decoded AuctionHouse account."""
    model_config = ConfigDict(frozen=True)

    auction_house_fee_account: PublicKey
    auction_house_treasury: PublicKey
    treasury_withdrawal_destination: PublicKey
    fee_withdrawal_destination: PublicKey
    treasury_mint: PublicKey
    authority: PublicKey
    creator: PublicKey
    bump: int
    treasury_bump: int
    fee_payer_bump: int
    seller_fee_basis_points: int = Field(ge=0, le=10_000)
    requires_sign_off: bool = False
    can_change_sale_price: bool = False

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        writer.bytes(AUCTION_HOUSE_DISCRIMINATOR)
        for key in (
            self.auction_house_fee_account,
            self.auction_house_treasury,
            self.treasury_withdrawal_destination,
            self.fee_withdrawal_destination,
            self.treasury_mint,
            self.authority,
            self.creator,
        ):
            writer.public_key(key)
        writer.u8(self.bump)
        writer.u8(self.treasury_bump)
        writer.u8(self.fee_payer_bump)
        writer.u16le(self.seller_fee_basis_points)
        writer.bool(self.requires_sign_off)
        writer.bool(self.can_change_sale_price)
        return writer.to_bytes()


def parse_auction_house_account(data: bytes) -> AuctionHouseAccountData:
    """
    Raises:
        CodecError: Wrong discriminator or truncated data
    """
    reader = BinaryReader(data)
    reader.discriminator(AUCTION_HOUSE_DISCRIMINATOR)
    return AuctionHouseAccountData(
        auction_house_fee_account=reader.public_key(),
        auction_house_treasury=reader.public_key(),
        treasury_withdrawal_destination=reader.public_key(),
        fee_withdrawal_destination=reader.public_key(),
        treasury_mint=reader.public_key(),
        authority=reader.public_key(),
        creator=reader.public_key(),
        bump=reader.u8(),
        treasury_bump=reader.u8(),
        fee_payer_bump=reader.u8(),
        seller_fee_basis_points=reader.u16le(),
        requires_sign_off=reader.bool(),
        can_change_sale_price=reader.bool(),
    )
