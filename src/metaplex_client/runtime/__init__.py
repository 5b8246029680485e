"""
Runtime support: error model, public keys, commitment levels and configuration.
"""

from .errors import *
from .commitment import Commitment
from .config import ClientConfig
from .pubkey import PublicKey, to_public_key

__all__ = [
    "ClientConfig",
    "Commitment",
    "PublicKey",
    "to_public_key",
] + errors.__all__
