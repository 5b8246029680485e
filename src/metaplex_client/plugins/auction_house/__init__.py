"""
Auction House plugin.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ...plugin import MetaplexPlugin
from ...runtime.commitment import Commitment
from .accounts import (
    AUCTION_HOUSE_DISCRIMINATOR,
    AUCTION_HOUSE_PROGRAM_ID,
    AuctionHouseAccountData,
    parse_auction_house_account,
)
from .find_auction_house_by_address import (
    FindAuctionHouseByAddressInput,
    FindAuctionHouseByAddressOperationHandler,
    find_auction_house_by_address_operation,
)
from .models import AuctionHouse, make_auction_house_model

if TYPE_CHECKING:
    from ...metaplex import Metaplex


class AuctionHouseClient:
    """Facade exposed as ``metaplex.auction_houses()``."""

    def __init__(self, metaplex: Metaplex):
        self.metaplex = metaplex

    async def find_by_address(self, address, commitment: Optional[Commitment] = None) -> AuctionHouse:
        return await self.metaplex.execute(
            find_auction_house_by_address_operation(FindAuctionHouseByAddressInput(address, commitment))
        )


class AuctionHousePlugin(MetaplexPlugin):
    def install(self, metaplex: Metaplex) -> None:
        metaplex.operations().register(
            find_auction_house_by_address_operation,
            FindAuctionHouseByAddressOperationHandler(),
        )
        metaplex.auction_houses = lambda: AuctionHouseClient(metaplex)


__all__ = [
    "AUCTION_HOUSE_DISCRIMINATOR",
    "AUCTION_HOUSE_PROGRAM_ID",
    "AuctionHouseAccountData",
    "parse_auction_house_account",
    "FindAuctionHouseByAddressInput",
    "FindAuctionHouseByAddressOperationHandler",
    "find_auction_house_by_address_operation",
    "AuctionHouse",
    "make_auction_house_model",
    "AuctionHouseClient",
    "AuctionHousePlugin",
]
