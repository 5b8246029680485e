"""
Tests for read-model accessors and the in-memory ledger.
"""

import pytest

from metaplex_client import InMemoryConnection, UnparsedAccount
from metaplex_client.codec import BinaryReader
from metaplex_client.rpc import find_account, get_accounts, parse_account, parse_optional_account
from metaplex_client.runtime.errors import AccountNotFoundError, CodecError, UnexpectedAccountError

from helpers import mk_public_key


def parse_u64(data: bytes) -> int:
    reader = BinaryReader(data)
    value = reader.u64le()
    if not reader.eof:
        raise CodecError("trailing bytes")
    return value


class TestParseAccount:
    """Test existence checks and decoding failures."""

    def test_decodes_existing_account(self):
        account = UnparsedAccount(mk_public_key("a"), exists=True, data=(7).to_bytes(8, "little"))

        assert parse_account(account, parse_u64, "Counter") == 7

    def test_missing_account_is_not_found_before_decoding(self):
        calls = []

        def parser(data):
            calls.append(data)
            return 0

        with pytest.raises(AccountNotFoundError) as exc_info:
            parse_account(UnparsedAccount.missing(mk_public_key("a")), parser, "Counter")

        assert calls == []
        assert exc_info.value.address == mk_public_key("a")
        assert exc_info.value.account_type == "Counter"

    def test_malformed_account_is_unexpected(self):
        account = UnparsedAccount(mk_public_key("a"), exists=True, data=b"\x01\x02")

        with pytest.raises(UnexpectedAccountError) as exc_info:
            parse_account(account, parse_u64, "Counter")

        assert exc_info.value.expected_type == "Counter"
        assert isinstance(exc_info.value.cause, CodecError)

    def test_optional_missing_account_is_none(self):
        assert parse_optional_account(UnparsedAccount.missing(mk_public_key("a")), parse_u64, "Counter") is None

    def test_optional_malformed_account_still_fails(self):
        account = UnparsedAccount(mk_public_key("a"), exists=True, data=b"\x01")

        with pytest.raises(UnexpectedAccountError):
            parse_optional_account(account, parse_u64, "Counter")


class TestFindAccount:
    """Test fetching through a connection."""

    @pytest.mark.asyncio
    async def test_find_account(self):
        connection = InMemoryConnection()
        connection.set_account(mk_public_key("a"), (9).to_bytes(8, "little"))

        assert await find_account(connection, mk_public_key("a"), parse_u64, "Counter") == 9

    @pytest.mark.asyncio
    async def test_find_account_accepts_base58(self):
        connection = InMemoryConnection()
        address = mk_public_key("a")
        connection.set_account(address, (9).to_bytes(8, "little"))

        assert await find_account(connection, str(address), parse_u64, "Counter") == 9

    @pytest.mark.asyncio
    async def test_find_missing_account(self):
        with pytest.raises(AccountNotFoundError):
            await find_account(InMemoryConnection(), mk_public_key("a"), parse_u64, "Counter")

    @pytest.mark.asyncio
    async def test_get_accounts_single_round_trip(self):
        connection = InMemoryConnection()
        connection.set_account(mk_public_key("b"), b"\x00")

        accounts = await get_accounts(connection, [mk_public_key("a"), mk_public_key("b")])

        assert [a.exists for a in accounts] == [False, True]
        assert connection.rpc_calls == ["getMultipleAccounts"]

    @pytest.mark.asyncio
    async def test_get_accounts_batches_large_requests(self):
        connection = InMemoryConnection()
        addresses = [mk_public_key(f"account-{i}") for i in range(250)]
        connection.set_account(addresses[-1], b"\x00")

        accounts = await get_accounts(connection, addresses)

        assert [a.address for a in accounts] == addresses
        assert accounts[-1].exists
        assert connection.rpc_calls == ["getMultipleAccounts"] * 3


class TestInMemoryConnection:
    """Test the dict-backed ledger."""

    @pytest.mark.asyncio
    async def test_remove_account(self):
        connection = InMemoryConnection()
        connection.set_account(mk_public_key("a"), b"\x00")

        connection.remove_account(mk_public_key("a"))

        assert not (await connection.get_account_info(mk_public_key("a"))).exists

    @pytest.mark.asyncio
    async def test_blockhash_changes_with_slot(self):
        connection = InMemoryConnection()
        first = await connection.get_latest_blockhash()
        connection.slot += 1

        second = await connection.get_latest_blockhash()

        assert first.blockhash != second.blockhash

    @pytest.mark.asyncio
    async def test_unknown_signature_status(self):
        assert await InMemoryConnection().get_signature_status("unknown") is None
