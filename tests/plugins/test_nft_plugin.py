"""
Tests for the NFT plugin: Token Metadata decoding and FindNftByMint.
"""

from unittest.mock import AsyncMock, patch

import pytest

from metaplex_client.plugins.nft import (
    TOKEN_METADATA_PROGRAM_ID,
    Creator,
    EditionAccountData,
    MasterEditionAccountData,
    MetadataKey,
    find_master_edition_pda,
    find_metadata_pda,
    parse_edition_account,
    parse_metadata_account,
)
from metaplex_client.runtime.errors import AccountNotFoundError, CodecError, UnexpectedAccountError
from metaplex_client.utils import FetchResult

from helpers import mk_metadata_account, mk_public_key

FETCH_JSON = "metaplex_client.plugins.nft.find_nft_by_mint.fetch_json"


@pytest.fixture
def mint():
    return mk_public_key("mint")


@pytest.fixture
def metadata(mint):
    return mk_metadata_account(
        mint,
        creators=[Creator(address=mk_public_key("creator"), verified=True, share=100)],
    )


@pytest.fixture
def ledger(connection, mint, metadata):
    """In-memory ledger holding the mint's metadata and master edition."""
    connection.set_account(find_metadata_pda(mint), metadata.to_bytes(), owner=TOKEN_METADATA_PROGRAM_ID)
    connection.set_account(
        find_master_edition_pda(mint),
        MasterEditionAccountData(supply=1, max_supply=10).to_bytes(),
        owner=TOKEN_METADATA_PROGRAM_ID,
    )
    return connection


class TestMetadataLayout:
    """Test Metadata and Edition account decoding."""

    def test_strips_padding(self, metadata):
        data = metadata.to_bytes()

        decoded = parse_metadata_account(data)

        assert decoded == metadata
        assert decoded.data.name == "Test NFT"
        assert b"\x00" * 4 in data

    def test_older_accounts_without_edition_nonce(self, metadata):
        data = metadata.model_copy(update={"edition_nonce": None}).to_bytes()[:-1]

        assert parse_metadata_account(data).edition_nonce is None

    def test_wrong_key_rejected(self, metadata):
        data = bytearray(metadata.to_bytes())
        data[0] = MetadataKey.EDITION_V1

        with pytest.raises(CodecError):
            parse_metadata_account(bytes(data))

    def test_edition_variants(self):
        master = parse_edition_account(MasterEditionAccountData(supply=3).to_bytes())
        print_edition = parse_edition_account(
            EditionAccountData(parent=mk_public_key("parent"), edition=2).to_bytes()
        )

        assert isinstance(master, MasterEditionAccountData)
        assert master.max_supply is None
        assert isinstance(print_edition, EditionAccountData)
        assert print_edition.edition == 2

    def test_creator_share_bounds(self):
        with pytest.raises(ValueError):
            Creator(address=mk_public_key("creator"), share=101)


class TestPdas:
    """Test program derived addresses."""

    def test_pdas_are_deterministic_and_off_curve(self, mint):
        metadata_pda = find_metadata_pda(mint)

        assert metadata_pda == find_metadata_pda(mint)
        assert not metadata_pda.is_on_curve()
        assert find_master_edition_pda(mint) != metadata_pda


class TestFindNftByMint:
    """Test the FindNftByMint operation."""

    @pytest.mark.asyncio
    async def test_loads_metadata_edition_and_json(self, metaplex, ledger, mint):
        fetch = AsyncMock(return_value=FetchResult(value={"name": "Test NFT", "image": "https://x/y.png"}))

        with patch(FETCH_JSON, fetch):
            nft = await metaplex.nfts().find_by_mint(mint)

        assert nft.mint_address == mint
        assert nft.name == "Test NFT"
        assert nft.metadata_address == find_metadata_pda(mint)
        assert nft.is_original
        assert nft.edition.max_supply == 10
        assert nft.json_metadata["image"] == "https://x/y.png"
        assert nft.creators[0].share == 100
        fetch.assert_awaited_once_with("https://example.com/nft.json")

    @pytest.mark.asyncio
    async def test_related_accounts_fetched_in_one_round_trip(self, metaplex, ledger, mint):
        with patch(FETCH_JSON, AsyncMock(return_value=FetchResult(value={}))):
            await metaplex.nfts().find_by_mint(mint)

        assert ledger.rpc_calls == ["getMultipleAccounts"]

    @pytest.mark.asyncio
    async def test_missing_metadata_is_not_found(self, metaplex, mint):
        with pytest.raises(AccountNotFoundError) as exc_info:
            await metaplex.nfts().find_by_mint(mint)

        assert exc_info.value.address == find_metadata_pda(mint)
        assert exc_info.value.account_type == "Metadata"

    @pytest.mark.asyncio
    async def test_malformed_metadata_is_unexpected(self, metaplex, connection, mint):
        connection.set_account(find_metadata_pda(mint), b"\x04\x00\x01")

        with pytest.raises(UnexpectedAccountError):
            await metaplex.nfts().find_by_mint(mint)

    @pytest.mark.asyncio
    async def test_missing_edition_is_none(self, metaplex, ledger, mint):
        ledger.remove_account(find_master_edition_pda(mint))

        with patch(FETCH_JSON, AsyncMock(return_value=FetchResult(value={}))):
            nft = await metaplex.nfts().find_by_mint(mint)

        assert nft.edition is None
        assert not nft.is_original

    @pytest.mark.asyncio
    async def test_malformed_edition_still_fails(self, metaplex, ledger, mint):
        ledger.set_account(find_master_edition_pda(mint), b"\x09")

        with pytest.raises(UnexpectedAccountError) as exc_info:
            await metaplex.nfts().find_by_mint(mint)

        assert exc_info.value.expected_type == "Edition"

    @pytest.mark.asyncio
    async def test_json_failure_yields_none(self, metaplex, ledger, mint):
        failed = FetchResult(error=ValueError("Expecting value"))

        with patch(FETCH_JSON, AsyncMock(return_value=failed)):
            nft = await metaplex.nfts().find_by_mint(mint)

        assert nft.json_metadata is None
        assert nft.name == "Test NFT"

    @pytest.mark.asyncio
    async def test_non_object_json_yields_none(self, metaplex, ledger, mint):
        with patch(FETCH_JSON, AsyncMock(return_value=FetchResult(value=["not", "an", "object"]))):
            nft = await metaplex.nfts().find_by_mint(mint)

        assert nft.json_metadata is None

    @pytest.mark.asyncio
    async def test_skip_json(self, metaplex, ledger, mint):
        fetch = AsyncMock()

        with patch(FETCH_JSON, fetch):
            nft = await metaplex.nfts().find_by_mint(mint, load_json_metadata=False)

        fetch.assert_not_called()
        assert nft.json_metadata is None
