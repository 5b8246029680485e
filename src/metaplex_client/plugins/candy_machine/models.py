"""
Candy machine read model.
"""

from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...runtime.pubkey import PublicKey
from ..nft.accounts import Creator
from .accounts import (
    I64,
    U64,
    CandyMachineAccountData,
    CandyMachineData,
    EndSettings,
    GatekeeperConfig,
    HiddenSettings,
    WhitelistMintSettings,
)

# Fields an UpdateCandyMachine operation may change.
CANDY_MACHINE_UPDATABLE_FIELDS = (
    "price",
    "symbol",
    "seller_fee_basis_points",
    "max_edition_supply",
    "is_mutable",
    "retain_authority",
    "go_live_date",
    "items_available",
    "end_settings",
    "hidden_settings",
    "whitelist_mint_settings",
    "gatekeeper",
    "creators",
)


class CandyMachine(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: PublicKey
    authority_address: PublicKey
    wallet_address: PublicKey
    token_mint_address: Optional[PublicKey] = None
    uuid: str
    price: U64
    symbol: str
    seller_fee_basis_points: int = Field(ge=0, le=10_000)
    max_edition_supply: U64
    is_mutable: bool
    retain_authority: bool
    go_live_date: Optional[I64] = None
    items_available: U64
    items_redeemed: U64 = 0
    end_settings: Optional[EndSettings] = None
    hidden_settings: Optional[HiddenSettings] = None
    whitelist_mint_settings: Optional[WhitelistMintSettings] = None
    gatekeeper: Optional[GatekeeperConfig] = None
    creators: List[Creator] = Field(default_factory=list)

    @property
    def items_remaining(self) -> int:
        return max(self.items_available - self.items_redeemed, 0)

    @property
    def is_fully_minted(self) -> bool:
        return self.items_remaining == 0


def make_candy_machine_model(address: PublicKey, account: CandyMachineAccountData) -> CandyMachine:
    data = account.data
    return CandyMachine(
        address=address,
        authority_address=account.authority,
        wallet_address=account.wallet,
        token_mint_address=account.token_mint,
        uuid=data.uuid,
        price=data.price,
        symbol=data.symbol,
        seller_fee_basis_points=data.seller_fee_basis_points,
        max_edition_supply=data.max_supply,
        is_mutable=data.is_mutable,
        retain_authority=data.retain_authority,
        go_live_date=data.go_live_date,
        items_available=data.items_available,
        items_redeemed=account.items_redeemed,
        end_settings=data.end_settings,
        hidden_settings=data.hidden_settings,
        whitelist_mint_settings=data.whitelist_mint_settings,
        gatekeeper=data.gatekeeper,
        creators=list(data.creators),
    )


def to_candy_machine_instruction_data(candy_machine: CandyMachine) -> CandyMachineData:
    """Settings payload of the ``update_candy_machine`` instruction."""
    return CandyMachineData(
        uuid=candy_machine.uuid,
        price=candy_machine.price,
        symbol=candy_machine.symbol,
        seller_fee_basis_points=candy_machine.seller_fee_basis_points,
        max_supply=candy_machine.max_edition_supply,
        is_mutable=candy_machine.is_mutable,
        retain_authority=candy_machine.retain_authority,
        go_live_date=candy_machine.go_live_date,
        end_settings=candy_machine.end_settings,
        creators=list(candy_machine.creators),
        hidden_settings=candy_machine.hidden_settings,
        whitelist_mint_settings=candy_machine.whitelist_mint_settings,
        items_available=candy_machine.items_available,
        gatekeeper=candy_machine.gatekeeper,
    )
