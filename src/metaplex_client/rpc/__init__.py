"""
RPC access: connections, read-model accessors and the submission pipeline.
"""

from ..runtime.commitment import Commitment
from .connection import Connection, JsonRpcConnection, SignatureStatus, UnparsedAccount
from .memory import InMemoryConnection, SentTransaction
from .accounts import (
    assert_account_exists,
    find_account,
    get_accounts,
    parse_account,
    parse_optional_account,
)
from .submission import (
    CONNECTION_DEFAULT,
    ConfirmOptions,
    SendAndConfirmTransactionResponse,
    prepare_transaction,
    send_and_confirm,
    send_transaction,
)

__all__ = [
    "Commitment",
    "Connection",
    "JsonRpcConnection",
    "SignatureStatus",
    "UnparsedAccount",
    "InMemoryConnection",
    "SentTransaction",
    "assert_account_exists",
    "find_account",
    "get_accounts",
    "parse_account",
    "parse_optional_account",
    "CONNECTION_DEFAULT",
    "ConfirmOptions",
    "SendAndConfirmTransactionResponse",
    "prepare_transaction",
    "send_and_confirm",
    "send_transaction",
]
