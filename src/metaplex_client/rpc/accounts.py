"""
Read-model accessors.

Fetch raw accounts through a ``Connection``, check existence before decoding
and turn decoding failures into ``UnexpectedAccountError``.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from ..runtime.commitment import Commitment
from ..runtime.errors import AccountNotFoundError, CodecError, UnexpectedAccountError
from ..runtime.pubkey import PublicKey, to_public_key
from ..utils.common import chunk
from .connection import Connection, UnparsedAccount

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest getMultipleAccounts request RPC nodes accept.
MAX_MULTIPLE_ACCOUNTS = 100

AccountParser = Callable[[bytes], T]


def assert_account_exists(account: UnparsedAccount, account_type: Optional[str] = None) -> None:
    """
    Raises:
        AccountNotFoundError: The account does not exist
    """
    if not account.exists:
        raise AccountNotFoundError(account.address, account_type)


def parse_account(account: UnparsedAccount, parser: AccountParser, account_type: str) -> T:
    """
    Decode an existing account.

    Raises:
        AccountNotFoundError: The account does not exist
        UnexpectedAccountError: The bytes do not match the layout
    """
    assert_account_exists(account, account_type)
    try:
        return parser(account.data)
    except (CodecError, ValueError) as e:
        raise UnexpectedAccountError(account.address, account_type, e) from e


def parse_optional_account(account: UnparsedAccount, parser: AccountParser, account_type: str) -> Optional[T]:
    """Decode an account that may be absent; absence yields None, bad bytes still raise."""
    if not account.exists:
        return None
    return parse_account(account, parser, account_type)


async def find_account(
    connection: Connection,
    address,
    parser: AccountParser,
    account_type: str,
    commitment: Optional[Commitment] = None,
) -> T:
    """Fetch and decode one required account."""
    account = await connection.get_account_info(to_public_key(address), commitment)
    return parse_account(account, parser, account_type)


async def get_accounts(
    connection: Connection,
    addresses: Sequence[PublicKey],
    commitment: Optional[Commitment] = None,
    chunk_size: int = MAX_MULTIPLE_ACCOUNTS,
) -> List[UnparsedAccount]:
    """
    Fetch related accounts, in one round trip per ``chunk_size`` addresses.

    Results keep the order of ``addresses``.
    """
    accounts: List[UnparsedAccount] = []
    for batch in chunk([to_public_key(a) for a in addresses], chunk_size):
        accounts.extend(await connection.get_multiple_accounts(batch, commitment))
    logger.debug(f"Fetched {sum(a.exists for a in accounts)}/{len(accounts)} accounts")
    return accounts
