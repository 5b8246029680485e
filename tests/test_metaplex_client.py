"""
Tests for the Metaplex client and plugin installation.
"""

import pytest

from metaplex_client import (
    ClientConfig,
    InMemoryConnection,
    JsonRpcConnection,
    Keypair,
    Metaplex,
    MetaplexPlugin,
    __version__,
)
from metaplex_client.plugins import NftPlugin
from metaplex_client.runtime.errors import MissingSignerError, OperationHandlerAlreadyRegisteredError


class TestMetaplex:
    """Test client construction."""

    def test_make_installs_core_plugins(self, metaplex):
        assert metaplex.operations().kinds() == [
            "FindAuctionHouseByAddressOperation",
            "FindCandyMachineByAddressOperation",
            "FindNftByMintOperation",
            "UpdateCandyMachineOperation",
        ]

    def test_bare_client_has_no_handlers(self, connection):
        assert len(Metaplex(connection).operations()) == 0

    def test_installing_a_plugin_twice_is_rejected(self, metaplex):
        with pytest.raises(OperationHandlerAlreadyRegisteredError):
            metaplex.use(NftPlugin())

    def test_custom_plugin(self, connection):
        class CounterPlugin(MetaplexPlugin):
            def install(self, metaplex):
                metaplex.operations().register("Count", self.count)

            async def count(self, operation, metaplex):
                return len(operation.input)

        metaplex = Metaplex(connection).use(CounterPlugin())

        assert metaplex.operations().has_handler("Count")

    def test_identity(self, connection):
        keypair = Keypair.from_seed("me")

        with pytest.raises(MissingSignerError):
            Metaplex(connection).identity()
        assert Metaplex(connection).use_identity(keypair).identity() is keypair

    @pytest.mark.asyncio
    async def test_from_config(self):
        async with Metaplex.from_config(ClientConfig(endpoint="localnet")) as metaplex:
            assert isinstance(metaplex.connection, JsonRpcConnection)
            assert metaplex.connection.endpoint == "http://127.0.0.1:8899"

    @pytest.mark.asyncio
    async def test_close_without_connection_close(self):
        metaplex = Metaplex(InMemoryConnection())

        await metaplex.close()

    def test_version(self):
        assert __version__ == "0.1.0"
