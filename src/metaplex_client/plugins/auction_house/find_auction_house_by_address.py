"""
FindAuctionHouseByAddress operation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...operations.registry import Operation, OperationConstructor, use_operation
from ...rpc.accounts import find_account
from ...runtime.commitment import Commitment
from ...runtime.pubkey import PublicKey, to_public_key
from .accounts import parse_auction_house_account
from .models import AuctionHouse, make_auction_house_model

if TYPE_CHECKING:
    from ...metaplex import Metaplex

KEY = "FindAuctionHouseByAddressOperation"


@dataclass(frozen=True)
class FindAuctionHouseByAddressInput:
    address: PublicKey
    commitment: Optional[Commitment] = None


find_auction_house_by_address_operation: OperationConstructor[FindAuctionHouseByAddressInput, AuctionHouse] = \
    use_operation(KEY)


class FindAuctionHouseByAddressOperationHandler:
    async def handle(
        self,
        operation: Operation[FindAuctionHouseByAddressInput, AuctionHouse],
        metaplex: Metaplex,
    ) -> AuctionHouse:
        address = to_public_key(operation.input.address)
        account = await find_account(
            metaplex.connection,
            address,
            parse_auction_house_account,
            "AuctionHouse",
            operation.input.commitment,
        )
        return make_auction_house_model(address, account)
