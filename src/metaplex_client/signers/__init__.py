"""
Signer capabilities.

Provides the Signer interface, signer deduplication and a local Ed25519 keypair.
"""

from .signer import Signer, is_signer, dedupe_signers
from .keypair import Keypair, KeypairError, verify_signature

__all__ = [
    "Signer",
    "is_signer",
    "dedupe_signers",
    "Keypair",
    "KeypairError",
    "verify_signature",
]
