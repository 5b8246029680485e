r"""
Ed25519 keypair signer.

Local in-memory signer backed by the ``cryptography`` Ed25519 primitives.
"""

from __future__ import annotations
import hashlib
from typing import Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..runtime.pubkey import PublicKey
from .signer import Signer

SEED_LENGTH = 32
SECRET_KEY_LENGTH = 64


class KeypairError(ValueError):
    """Invalid keypair material."""
    pass


class Keypair(Signer):
    """Ed25519 keypair implementing the Signer capability."""

    def __init__(self, seed: bytes):
        """
        Initialize from a 32-byte Ed25519 seed.

        Args:
            seed: 32-byte private key seed

        Raises:
            KeypairError: If seed is not 32 bytes
        """
        if len(seed) != SEED_LENGTH:
            raise KeypairError(f"Ed25519 seed must be {SEED_LENGTH} bytes, got {len(seed)}")

        self._seed = bytes(seed)
        self._private_key = Ed25519PrivateKey.from_private_bytes(self._seed)
        self._public_key = PublicKey(
            self._private_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    @classmethod
    def generate(cls) -> Keypair:
        """Generate a new random keypair."""
        private_key = Ed25519PrivateKey.generate()
        return cls(private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        ))

    @classmethod
    def from_secret_key(cls, secret_key: Union[bytes, list]) -> Keypair:
        """
        Load a 64-byte secret key (seed followed by public key).

        This is the format written by the Solana CLI keygen.
        """
        secret_key = bytes(secret_key)
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise KeypairError(f"Secret key must be {SECRET_KEY_LENGTH} bytes, got {len(secret_key)}")
        keypair = cls(secret_key[:SEED_LENGTH])
        if keypair.public_key.to_bytes() != secret_key[SEED_LENGTH:]:
            raise KeypairError("Secret key does not match its embedded public key")
        return keypair

    @classmethod
    def from_seed(cls, seed: Union[str, bytes]) -> Keypair:
        """
        Derive a keypair from an arbitrary seed using SHA-256.

        For deterministic test keys.
        """
        if isinstance(seed, str):
            seed = seed.encode("utf-8")
        return cls(hashlib.sha256(seed).digest())

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    @property
    def secret_key(self) -> bytes:
        """64-byte secret key: seed followed by public key."""
        return self._seed + self._public_key.to_bytes()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Message to sign

        Returns:
            64-byte Ed25519 signature
        """
        return self._private_key.sign(message)


def verify_signature(public_key: PublicKey, signature: bytes, message: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if signature is valid
    """
    try:
        Ed25519PublicKey.from_public_bytes(public_key.to_bytes()).verify(signature, message)
        return True
    except InvalidSignature:
        return False
