"""
NFT plugin: Token Metadata accounts and NFT lookups.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ...plugin import MetaplexPlugin
from ...runtime.commitment import Commitment
from .accounts import (
    TOKEN_METADATA_PROGRAM_ID,
    Creator,
    EditionAccountData,
    MasterEditionAccountData,
    MetadataAccountData,
    MetadataData,
    MetadataKey,
    parse_edition_account,
    parse_metadata_account,
)
from .find_nft_by_mint import (
    FindNftByMintInput,
    FindNftByMintOperationHandler,
    find_nft_by_mint_operation,
)
from .models import Nft, make_nft_model
from .pdas import find_master_edition_pda, find_metadata_pda

if TYPE_CHECKING:
    from ...metaplex import Metaplex


class NftClient:
    """Facade exposed as ``metaplex.nfts()``."""

    def __init__(self, metaplex: Metaplex):
        self.metaplex = metaplex

    async def find_by_mint(
        self,
        mint,
        commitment: Optional[Commitment] = None,
        load_json_metadata: bool = True,
    ) -> Nft:
        return await self.metaplex.execute(
            find_nft_by_mint_operation(FindNftByMintInput(mint, commitment, load_json_metadata))
        )


class NftPlugin(MetaplexPlugin):
    def install(self, metaplex: Metaplex) -> None:
        metaplex.operations().register(find_nft_by_mint_operation, FindNftByMintOperationHandler())
        metaplex.nfts = lambda: NftClient(metaplex)


__all__ = [
    "TOKEN_METADATA_PROGRAM_ID",
    "Creator",
    "EditionAccountData",
    "MasterEditionAccountData",
    "MetadataAccountData",
    "MetadataData",
    "MetadataKey",
    "parse_edition_account",
    "parse_metadata_account",
    "FindNftByMintInput",
    "FindNftByMintOperationHandler",
    "find_nft_by_mint_operation",
    "Nft",
    "make_nft_model",
    "find_master_edition_pda",
    "find_metadata_pda",
    "NftClient",
    "NftPlugin",
]
