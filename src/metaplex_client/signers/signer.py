"""
Base signer interface.

A signer is an opaque capability: it exposes a public key and approves
arbitrary message bytes. The client never inspects key material.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from ..runtime.pubkey import PublicKey


class Signer(ABC):
    """
    Base signer interface.

    Implementations may hold keys locally, delegate to a hardware wallet or
    call a remote service.
    """

    @property
    @abstractmethod
    def public_key(self) -> PublicKey:
        """
        Get the signer's public key.

        Returns:
            32-byte public key identifying the signer
        """
        pass

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """
        Sign a serialized transaction message.

        Args:
            message: Message bytes to approve

        Returns:
            64-byte signature

        Raises:
            Exception: Any failure to approve
        """
        pass

    def metadata(self) -> Dict[str, Any]:
        """
        Get signer metadata.

        Returns:
            Dictionary with signer information
        """
        return {"type": type(self).__name__, "public_key": str(self.public_key)}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.public_key})"


def is_signer(value: Any) -> bool:
    """Check whether a value behaves like a Signer."""
    return isinstance(value, Signer) or (
        hasattr(value, "public_key") and callable(getattr(value, "sign", None))
    )


def dedupe_signers(signers: Iterable[Signer]) -> List[Signer]:
    """
    Deduplicate signers by public key, keeping first occurrence order.

    Args:
        signers: Signers in order of requirement

    Returns:
        One signer per distinct public key
    """
    seen = set()
    result: List[Signer] = []
    for signer in signers:
        key = signer.public_key
        if key in seen:
            continue
        seen.add(key)
        result.append(signer)
    return result
