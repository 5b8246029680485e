"""
Metaplex client.

Holds the RPC connection, the identity signer and the operation registry.
Plugins installed with ``use`` register their operation handlers here and
attach facades such as ``metaplex.nfts()``.

Example:
    ```python
    metaplex = Metaplex.make(JsonRpcConnection("devnet")).use_identity(keypair)
    nft = await metaplex.nfts().find_by_mint(mint)
    ```
"""

from __future__ import annotations
import logging
from typing import Any, Optional, TypeVar

from .operations.registry import Operation, OperationRegistry
from .plugin import MetaplexPlugin
from .rpc.connection import Connection, JsonRpcConnection
from .rpc.submission import ConfirmOptions, SendAndConfirmTransactionResponse, send_and_confirm
from .runtime.config import ClientConfig
from .runtime.errors import MissingSignerError
from .signers.signer import Signer
from .tx.builder import TransactionBuilder

logger = logging.getLogger(__name__)

O = TypeVar("O")


class Metaplex:
    """Entry point tying a connection, an identity and installed plugins together."""

    def __init__(
        self,
        connection: Connection,
        identity: Optional[Signer] = None,
        registry: Optional[OperationRegistry] = None,
    ):
        """
        Initialize the client without any plugins.

        Args:
            connection: RPC capability
            identity: Default signer and fee payer
            registry: Operation registry; a fresh one when None
        """
        self.connection = connection
        self._identity = identity
        self._registry = registry if registry is not None else OperationRegistry()

    @classmethod
    def make(cls, connection: Connection, identity: Optional[Signer] = None) -> Metaplex:
        """Create a client with the core plugins installed."""
        from .plugins import core_plugins
        return cls(connection, identity).use(core_plugins())

    @classmethod
    def from_config(cls, config: Optional[ClientConfig] = None, identity: Optional[Signer] = None) -> Metaplex:
        """Create a client on a JSON-RPC connection; config defaults to the environment."""
        config = config or ClientConfig.from_env()
        return cls.make(JsonRpcConnection(config), identity)

    def use(self, plugin: MetaplexPlugin) -> Metaplex:
        plugin.install(self)
        logger.debug(f"Installed plugin {type(plugin).__name__}")
        return self

    def use_identity(self, identity: Signer) -> Metaplex:
        self._identity = identity
        return self

    def identity(self) -> Signer:
        """
        Raises:
            MissingSignerError: No identity was configured
        """
        if self._identity is None:
            raise MissingSignerError("identity")
        return self._identity

    def operations(self) -> OperationRegistry:
        return self._registry

    async def execute(self, operation: Operation[Any, O]) -> O:
        """Dispatch an operation to its registered handler."""
        return await self._registry.execute(operation, self)

    async def send_and_confirm(
        self,
        builder: TransactionBuilder,
        confirm_options: Optional[ConfirmOptions] = None,
    ) -> SendAndConfirmTransactionResponse:
        return await send_and_confirm(builder, self, confirm_options)

    async def close(self) -> None:
        close = getattr(self.connection, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
