"""
Test factories for creating test data consistently.

Provides deterministic public keys, instructions, builder steps, a signer
that refuses to sign, and decoded account values for each plugin.
"""

from __future__ import annotations
import hashlib
from typing import Iterable, Optional

from metaplex_client import (
    AccountMeta,
    InstructionWithSigners,
    PublicKey,
    Signer,
    TransactionInstruction,
)
from metaplex_client.plugins.auction_house import AuctionHouseAccountData
from metaplex_client.plugins.candy_machine import (
    CandyMachineAccountData,
    CandyMachineData,
    make_candy_machine_model,
)
from metaplex_client.plugins.nft import Creator, MetadataAccountData, MetadataData

TEST_PROGRAM_ID = PublicKey(hashlib.sha256(b"test-program").digest())


def mk_public_key(label: str) -> PublicKey:
    """
    Create a deterministic public key for testing.

    Args:
        label: Any string; equal labels give equal keys

    Returns:
        PublicKey derived from sha256(label)
    """
    return PublicKey(hashlib.sha256(label.encode("utf-8")).digest())


def mk_instruction(
    data: bytes = b"",
    signers: Iterable[Signer] = (),
    writable: Iterable[PublicKey] = (),
    program_id: PublicKey = TEST_PROGRAM_ID,
) -> TransactionInstruction:
    """Create an instruction requiring the given signers."""
    keys = [AccountMeta(s.public_key, is_signer=True, is_writable=False) for s in signers]
    keys += [AccountMeta(k, is_signer=False, is_writable=True) for k in writable]
    return TransactionInstruction(program_id, keys, data)


def mk_step(
    data: bytes = b"",
    signers: Iterable[Signer] = (),
    key: Optional[str] = None,
) -> InstructionWithSigners:
    """Create a builder step whose instruction requires exactly its signers."""
    signers = tuple(signers)
    return InstructionWithSigners(mk_instruction(data, signers), signers, key)


class FailingSigner(Signer):
    """Signer whose approval always fails."""

    def __init__(self, label: str = "failing"):
        self._public_key = mk_public_key(label)

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        raise RuntimeError("user rejected the request")


def mk_metadata_account(
    mint: PublicKey,
    name: str = "Test NFT",
    uri: str = "https://example.com/nft.json",
    update_authority: Optional[PublicKey] = None,
    creators=None,
) -> MetadataAccountData:
    return MetadataAccountData(
        update_authority=update_authority or mk_public_key("update-authority"),
        mint=mint,
        data=MetadataData(
            name=name,
            symbol="TST",
            uri=uri,
            seller_fee_basis_points=500,
            creators=creators,
        ),
        primary_sale_happened=False,
        is_mutable=True,
        edition_nonce=254,
    )


def mk_auction_house_account(authority: Optional[PublicKey] = None, **overrides) -> AuctionHouseAccountData:
    fields = dict(
        auction_house_fee_account=mk_public_key("ah-fee"),
        auction_house_treasury=mk_public_key("ah-treasury"),
        treasury_withdrawal_destination=mk_public_key("ah-treasury-dest"),
        fee_withdrawal_destination=mk_public_key("ah-fee-dest"),
        treasury_mint=PublicKey("So11111111111111111111111111111111111111112"),
        authority=authority or mk_public_key("ah-authority"),
        creator=mk_public_key("ah-creator"),
        bump=255,
        treasury_bump=254,
        fee_payer_bump=253,
        seller_fee_basis_points=200,
        requires_sign_off=False,
        can_change_sale_price=True,
    )
    fields.update(overrides)
    return AuctionHouseAccountData(**fields)


def mk_candy_machine_account(authority: PublicKey, **data_overrides) -> CandyMachineAccountData:
    data = dict(
        uuid="ABC123",
        price=1_000_000_000,
        symbol="CANDY",
        seller_fee_basis_points=500,
        max_supply=0,
        is_mutable=True,
        retain_authority=True,
        go_live_date=1_650_000_000,
        creators=[Creator(address=authority, verified=True, share=100)],
        items_available=100,
    )
    data.update(data_overrides)
    return CandyMachineAccountData(
        authority=authority,
        wallet=mk_public_key("cm-wallet"),
        token_mint=None,
        items_redeemed=10,
        data=CandyMachineData(**data),
    )


def mk_candy_machine(authority: PublicKey, address: Optional[PublicKey] = None, **data_overrides):
    """Create a CandyMachine model as returned by find_by_address."""
    account = mk_candy_machine_account(authority, **data_overrides)
    return make_candy_machine_model(address or mk_public_key("candy-machine"), account)
