"""
Auction house read model.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from ...runtime.pubkey import PublicKey
from .accounts import AuctionHouseAccountData

NATIVE_MINT = PublicKey("So11111111111111111111111111111111111111112")


class AuctionHouse(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: PublicKey
    account: AuctionHouseAccountData

    @property
    def authority_address(self) -> PublicKey:
        return self.account.authority

    @property
    def treasury_mint_address(self) -> PublicKey:
        return self.account.treasury_mint

    @property
    def seller_fee_basis_points(self) -> int:
        return self.account.seller_fee_basis_points

    @property
    def requires_sign_off(self) -> bool:
        return self.account.requires_sign_off

    @property
    def can_change_sale_price(self) -> bool:
        return self.account.can_change_sale_price

    @property
    def is_native(self) -> bool:
        """Whether sales settle in the native token."""
        return self.account.treasury_mint == NATIVE_MINT


def make_auction_house_model(address: PublicKey, account: AuctionHouseAccountData) -> AuctionHouse:
    return AuctionHouse(address=address, account=account)
