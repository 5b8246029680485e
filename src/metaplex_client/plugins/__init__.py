"""
Bundled plugins.

- nft: Token Metadata lookups (``metaplex.nfts()``)
- auction_house: Auction House lookups (``metaplex.auction_houses()``)
- candy_machine: Candy Machine lookups and updates (``metaplex.candy_machines()``)
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Sequence

from ..plugin import MetaplexPlugin
from .auction_house import AuctionHousePlugin
from .candy_machine import CandyMachinePlugin
from .nft import NftPlugin

if TYPE_CHECKING:
    from ..metaplex import Metaplex


class PluginBundle(MetaplexPlugin):
    """Installs several plugins in order."""

    def __init__(self, plugins: Sequence[MetaplexPlugin]):
        self.plugins: List[MetaplexPlugin] = list(plugins)

    def install(self, metaplex: Metaplex) -> None:
        for plugin in self.plugins:
            metaplex.use(plugin)


def core_plugins() -> PluginBundle:
    """Plugins installed by ``Metaplex.make``."""
    return PluginBundle([NftPlugin(), AuctionHousePlugin(), CandyMachinePlugin()])


__all__ = [
    "AuctionHousePlugin",
    "CandyMachinePlugin",
    "NftPlugin",
    "PluginBundle",
    "core_plugins",
]
