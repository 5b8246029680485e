"""
RPC connections.

``Connection`` is the narrow capability the client depends on: fetch
accounts, fetch a recent blockhash, send serialized transactions and observe
their confirmation status. ``JsonRpcConnection`` implements it over the
JSON-RPC 2.0 HTTP API of a ledger node.
"""

from __future__ import annotations
import asyncio
import base64
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from ..runtime.commitment import Commitment
from ..runtime.config import ClientConfig
from ..runtime.errors import FailedToConfirmTransactionError, RpcError
from ..runtime.pubkey import PublicKey, to_public_key
from ..tx.transaction import TransactionContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnparsedAccount:
    """Raw account as returned by the ledger."""
    address: PublicKey
    exists: bool
    data: bytes = b""
    owner: Optional[PublicKey] = None
    lamports: int = 0
    executable: bool = False

    @classmethod
    def missing(cls, address: PublicKey) -> UnparsedAccount:
        return cls(address=address, exists=False)


@dataclass(frozen=True)
class SignatureStatus:
    """Confirmation status of a submitted transaction."""
    slot: Optional[int]
    confirmation_status: Optional[Commitment]
    err: Any = None


class Connection(ABC):
    """
    Abstract RPC capability.

    Subclasses implement the raw calls; confirmation polling is shared.
    ``confirm_timeout`` is the default confirmation deadline in seconds.
    """

    def __init__(
        self,
        commitment: Commitment = Commitment.CONFIRMED,
        confirm_timeout: Optional[float] = 60.0,
    ):
        self.commitment = Commitment(commitment)
        self.confirm_timeout = confirm_timeout

    @abstractmethod
    async def get_account_info(
        self, address: PublicKey, commitment: Optional[Commitment] = None
    ) -> UnparsedAccount:
        """Fetch one account; ``exists`` is False when absent."""
        pass

    @abstractmethod
    async def get_multiple_accounts(
        self, addresses: Sequence[PublicKey], commitment: Optional[Commitment] = None
    ) -> List[UnparsedAccount]:
        """Fetch several accounts in one round trip, preserving order."""
        pass

    @abstractmethod
    async def get_latest_blockhash(self, commitment: Optional[Commitment] = None) -> TransactionContext:
        pass

    @abstractmethod
    async def send_transaction(
        self,
        wire_transaction: bytes,
        skip_preflight: bool = False,
        preflight_commitment: Optional[Commitment] = None,
    ) -> str:
        """Transmit a signed transaction; returns its signature."""
        pass

    @abstractmethod
    async def get_signature_status(self, signature: str) -> Optional[SignatureStatus]:
        """Return None while the ledger has not seen the signature."""
        pass

    async def confirm_transaction(
        self,
        signature: str,
        commitment: Optional[Commitment] = None,
        poll_interval: float = 0.5,
    ) -> SignatureStatus:
        """
        Poll until the signature reaches ``commitment``.

        Runs until confirmed, failed or cancelled; callers bound it with a
        deadline.

        Raises:
            FailedToConfirmTransactionError: The transaction failed on chain
        """
        required = Commitment(commitment or self.commitment)
        while True:
            status = await self.get_signature_status(signature)
            if status is not None:
                if status.err is not None:
                    raise FailedToConfirmTransactionError(signature, status.err)
                if status.confirmation_status is not None and status.confirmation_status.satisfies(required):
                    logger.debug(f"Transaction {signature} reached {status.confirmation_status.value}")
                    return status
            await asyncio.sleep(poll_interval)


class JsonRpcConnection(Connection):
    """
    JSON-RPC 2.0 connection over HTTP.

    Example:
        ```python
        async with JsonRpcConnection("devnet") as connection:
            account = await connection.get_account_info(address)
        ```
    """

    def __init__(
        self,
        config: Any = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the connection.

        Args:
            config: A ClientConfig, an endpoint URL or a cluster name
            session: Optional externally owned aiohttp session
        """
        if config is None:
            config = ClientConfig()
        elif isinstance(config, str):
            config = ClientConfig(endpoint=config)
        super().__init__(config.commitment, config.confirm_timeout)

        self.config = config
        self.endpoint = config.rpc_url
        self._session = session
        self._owns_session = session is None
        self._ids = itertools.count(1)
        config.configure_logging()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
            self._owns_session = True
        return self._session

    async def _request(self, method: str, params: List[Any]) -> Any:
        """
        Make a JSON-RPC request.

        Raises:
            RpcError: On transport failure, an undecodable reply or a JSON-RPC error object
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        logger.debug(f"RPC request: {method}")
        try:
            async with self._get_session().post(self.endpoint, json=payload) as response:
                response.raise_for_status()
                body = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RpcError(method, str(e) or type(e).__name__, cause=e) from e
        except ValueError as e:
            raise RpcError(method, f"Invalid JSON reply: {e}", cause=e) from e

        if not isinstance(body, dict):
            raise RpcError(method, f"Malformed reply: expected an object, got {type(body).__name__}")
        if body.get("error") is not None:
            error = body["error"]
            if not isinstance(error, dict):
                raise RpcError(method, str(error))
            raise RpcError(method, error.get("message", "Unknown error"), error.get("code"))
        return body.get("result")

    async def _request_value(self, method: str, params: List[Any]) -> Any:
        """Make a request whose result is wrapped as ``{"context": ..., "value": ...}``."""
        result = await self._request(method, params)
        if not isinstance(result, dict) or "value" not in result:
            raise RpcError(method, f"Malformed result: {result!r}")
        return result["value"]

    def _commitment(self, commitment: Optional[Commitment]) -> str:
        return Commitment(commitment or self.commitment).value

    @staticmethod
    def _parse_account(method: str, address: PublicKey, value: Optional[Dict[str, Any]]) -> UnparsedAccount:
        if value is None:
            return UnparsedAccount.missing(address)
        try:
            data, encoding = value["data"]
            owner = PublicKey(value["owner"])
        except (KeyError, TypeError, ValueError) as e:
            raise RpcError(method, f"Malformed account {address}: {e}", cause=e) from e
        if encoding != "base64":
            raise RpcError(method, f"Unexpected account data encoding {encoding}")
        try:
            decoded = base64.b64decode(data, validate=True)
        except (TypeError, ValueError) as e:
            raise RpcError(method, f"Malformed account data for {address}", cause=e) from e
        return UnparsedAccount(
            address=address,
            exists=True,
            data=decoded,
            owner=owner,
            lamports=int(value.get("lamports", 0)),
            executable=bool(value.get("executable", False)),
        )

    async def get_account_info(self, address, commitment=None) -> UnparsedAccount:
        address = to_public_key(address)
        value = await self._request_value(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self._commitment(commitment)}],
        )
        return self._parse_account("getAccountInfo", address, value)

    async def get_multiple_accounts(self, addresses, commitment=None) -> List[UnparsedAccount]:
        addresses = [to_public_key(a) for a in addresses]
        if not addresses:
            return []
        values = await self._request_value(
            "getMultipleAccounts",
            [[str(a) for a in addresses], {"encoding": "base64", "commitment": self._commitment(commitment)}],
        )
        if not isinstance(values, list) or len(values) != len(addresses):
            raise RpcError("getMultipleAccounts", f"Expected {len(addresses)} accounts, got {values!r}")
        return [self._parse_account("getMultipleAccounts", a, v) for a, v in zip(addresses, values)]

    async def get_latest_blockhash(self, commitment=None) -> TransactionContext:
        value = await self._request_value("getLatestBlockhash", [{"commitment": self._commitment(commitment)}])
        if not isinstance(value, dict) or not isinstance(value.get("blockhash"), str):
            raise RpcError("getLatestBlockhash", f"Malformed blockhash: {value!r}")
        return TransactionContext(value["blockhash"], value.get("lastValidBlockHeight"))

    async def send_transaction(self, wire_transaction, skip_preflight=False, preflight_commitment=None) -> str:
        signature = await self._request(
            "sendTransaction",
            [
                base64.b64encode(wire_transaction).decode("ascii"),
                {
                    "encoding": "base64",
                    "skipPreflight": skip_preflight,
                    "preflightCommitment": self._commitment(preflight_commitment),
                },
            ],
        )
        if not isinstance(signature, str):
            raise RpcError("sendTransaction", f"Malformed signature: {signature!r}")
        return signature

    async def get_signature_status(self, signature: str) -> Optional[SignatureStatus]:
        values = await self._request_value(
            "getSignatureStatuses", [[signature], {"searchTransactionHistory": False}]
        )
        if not isinstance(values, list) or len(values) != 1 or not isinstance(values[0], (dict, type(None))):
            raise RpcError("getSignatureStatuses", f"Malformed statuses: {values!r}")
        value = values[0]
        if value is None:
            return None
        level = value.get("confirmationStatus")
        return SignatureStatus(
            slot=value.get("slot"),
            confirmation_status=Commitment(level) if level else None,
            err=value.get("err"),
        )
