"""
In-memory ledger connection for tests and offline development.

Holds accounts in a dict, verifies the signatures of submitted
transactions and reports a configurable confirmation level.
"""

from __future__ import annotations
import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import base58

from ..runtime.commitment import Commitment
from ..runtime.errors import RpcError
from ..runtime.pubkey import PublicKey, to_public_key
from ..signers.keypair import verify_signature
from ..tx.transaction import Transaction, TransactionContext
from .connection import Connection, SignatureStatus, UnparsedAccount

logger = logging.getLogger(__name__)


@dataclass
class SentTransaction:
    """A transaction accepted by the in-memory ledger."""
    signature: str
    transaction: Transaction
    slot: int
    status: SignatureStatus


@dataclass
class InMemoryConnection(Connection):
    """
    Dict-backed Connection.

    Attributes:
        confirmation_level: Level reported for accepted transactions; None
            simulates a transaction that never confirms
        transaction_error: On-chain error to report for accepted transactions
        fail_sends: Raise RpcError from send_transaction
        confirm_timeout: Default confirmation deadline in seconds
    """
    confirmation_level: Optional[Commitment] = Commitment.FINALIZED
    transaction_error: Any = None
    fail_sends: bool = False
    confirm_timeout: Optional[float] = 60.0
    accounts: Dict[PublicKey, UnparsedAccount] = field(default_factory=dict)
    sent_transactions: List[SentTransaction] = field(default_factory=list)
    rpc_calls: List[str] = field(default_factory=list)
    slot: int = 1

    def __post_init__(self):
        super().__init__(Commitment.CONFIRMED, self.confirm_timeout)

    # =========================================================================
    # Ledger state
    # =========================================================================

    def set_account(
        self,
        address: Any,
        data: bytes,
        owner: Optional[Any] = None,
        lamports: int = 1_000_000,
    ) -> UnparsedAccount:
        address = to_public_key(address)
        account = UnparsedAccount(
            address=address,
            exists=True,
            data=bytes(data),
            owner=to_public_key(owner) if owner is not None else PublicKey.default(),
            lamports=lamports,
        )
        self.accounts[address] = account
        return account

    def remove_account(self, address: Any) -> None:
        self.accounts.pop(to_public_key(address), None)

    # =========================================================================
    # Connection
    # =========================================================================

    async def get_account_info(self, address, commitment=None) -> UnparsedAccount:
        self.rpc_calls.append("getAccountInfo")
        address = to_public_key(address)
        return self.accounts.get(address) or UnparsedAccount.missing(address)

    async def get_multiple_accounts(self, addresses, commitment=None) -> List[UnparsedAccount]:
        self.rpc_calls.append("getMultipleAccounts")
        result = []
        for address in addresses:
            address = to_public_key(address)
            result.append(self.accounts.get(address) or UnparsedAccount.missing(address))
        return result

    async def get_latest_blockhash(self, commitment=None) -> TransactionContext:
        self.rpc_calls.append("getLatestBlockhash")
        digest = hashlib.sha256(f"blockhash:{self.slot}".encode("utf-8")).digest()
        return TransactionContext(base58.b58encode(digest).decode("ascii"), self.slot + 150)

    async def send_transaction(self, wire_transaction, skip_preflight=False, preflight_commitment=None) -> str:
        self.rpc_calls.append("sendTransaction")
        if self.fail_sends:
            raise RpcError("sendTransaction", "node unavailable")

        transaction = Transaction.deserialize(wire_transaction)
        message_bytes = transaction.message.serialize()
        for key, signature in zip(transaction.message.signer_keys, transaction.signatures):
            if signature is None or not verify_signature(key, signature, message_bytes):
                raise RpcError("sendTransaction", f"signature verification failed for {key}", -32003)

        self.slot += 1
        signature = transaction.signature
        status = SignatureStatus(self.slot, self.confirmation_level, self.transaction_error)
        self.sent_transactions.append(SentTransaction(signature, transaction, self.slot, status))
        logger.debug(f"Accepted transaction {signature} at slot {self.slot}")
        return signature

    async def get_signature_status(self, signature: str) -> Optional[SignatureStatus]:
        self.rpc_calls.append("getSignatureStatuses")
        for sent in self.sent_transactions:
            if sent.signature == signature:
                if sent.status.confirmation_status is None and sent.status.err is None:
                    return None
                return sent.status
        return None
