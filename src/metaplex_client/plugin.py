"""
Plugin interface.

A plugin extends a ``Metaplex`` client by registering operation handlers
and attaching client facades.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .metaplex import Metaplex


class MetaplexPlugin(ABC):
    """Installable extension."""

    @abstractmethod
    def install(self, metaplex: Metaplex) -> None:
        """Register handlers and facades on ``metaplex``."""
        pass
