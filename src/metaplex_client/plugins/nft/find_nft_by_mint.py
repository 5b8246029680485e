"""
FindNftByMint operation.

Loads the Metadata account (required), the edition account (optional) and
the off-chain JSON (best effort) of the NFT with the given mint.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...operations.registry import Operation, OperationConstructor, use_operation
from ...rpc.accounts import get_accounts, parse_account, parse_optional_account
from ...runtime.commitment import Commitment
from ...runtime.pubkey import PublicKey, to_public_key
from ...utils.fetch import fetch_json
from .accounts import parse_edition_account, parse_metadata_account
from .models import Nft, make_nft_model
from .pdas import find_master_edition_pda, find_metadata_pda

if TYPE_CHECKING:
    from ...metaplex import Metaplex

KEY = "FindNftByMintOperation"


@dataclass(frozen=True)
class FindNftByMintInput:
    mint: PublicKey
    commitment: Optional[Commitment] = None
    load_json_metadata: bool = True


find_nft_by_mint_operation: OperationConstructor[FindNftByMintInput, Nft] = use_operation(KEY)


class FindNftByMintOperationHandler:
    async def handle(self, operation: Operation[FindNftByMintInput, Nft], metaplex: Metaplex) -> Nft:
        params = operation.input
        mint = to_public_key(params.mint)
        metadata_address = find_metadata_pda(mint)
        edition_address = find_master_edition_pda(mint)

        metadata_info, edition_info = await get_accounts(
            metaplex.connection, [metadata_address, edition_address], params.commitment
        )
        metadata = parse_account(metadata_info, parse_metadata_account, "Metadata")
        edition = parse_optional_account(edition_info, parse_edition_account, "Edition")

        json_metadata = None
        if params.load_json_metadata:
            # Off-chain JSON is optional: any fetch failure leaves it unset.
            result = await fetch_json(metadata.data.uri)
            json_metadata = result.value if result.ok and isinstance(result.value, dict) else None

        return make_nft_model(metadata_address, metadata, edition_address, edition, json_metadata)
