"""
NFT read model.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ...runtime.pubkey import PublicKey
from .accounts import (
    Creator,
    EditionAccount,
    MasterEditionAccountData,
    MetadataAccountData,
)


class Nft(BaseModel):
    """
    An NFT: its required Metadata account, its optional edition account and
    its optional off-chain JSON.
    """
    model_config = ConfigDict(frozen=True)

    metadata_address: PublicKey
    metadata: MetadataAccountData
    edition_address: PublicKey
    edition: Optional[EditionAccount] = None
    json_metadata: Optional[Dict[str, Any]] = None

    @property
    def mint_address(self) -> PublicKey:
        return self.metadata.mint

    @property
    def update_authority_address(self) -> PublicKey:
        return self.metadata.update_authority

    @property
    def name(self) -> str:
        return self.metadata.data.name

    @property
    def symbol(self) -> str:
        return self.metadata.data.symbol

    @property
    def uri(self) -> str:
        return self.metadata.data.uri

    @property
    def seller_fee_basis_points(self) -> int:
        return self.metadata.data.seller_fee_basis_points

    @property
    def creators(self) -> List[Creator]:
        return list(self.metadata.data.creators or [])

    @property
    def is_mutable(self) -> bool:
        return self.metadata.is_mutable

    @property
    def is_original(self) -> bool:
        """True for a master edition, False for prints and edition-less NFTs."""
        return isinstance(self.edition, MasterEditionAccountData)


def make_nft_model(
    metadata_address: PublicKey,
    metadata: MetadataAccountData,
    edition_address: PublicKey,
    edition: Optional[EditionAccount] = None,
    json_metadata: Optional[Dict[str, Any]] = None,
) -> Nft:
    return Nft(
        metadata_address=metadata_address,
        metadata=metadata,
        edition_address=edition_address,
        edition=edition,
        json_metadata=json_metadata,
    )
