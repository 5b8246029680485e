"""
Instruction types.

An instruction names a program, the accounts it touches and an opaque data
payload produced by that program's encoder.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from ..runtime.pubkey import PublicKey


@dataclass(frozen=True)
class AccountMeta:
    """Account referenced by an instruction."""
    pubkey: PublicKey
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class TransactionInstruction:
    """
    Atomic instruction executed by a single program.

    Immutable so that two instructions built from equal inputs compare equal.
    """
    program_id: PublicKey
    keys: Tuple[AccountMeta, ...] = field(default_factory=tuple)
    data: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "keys", tuple(self.keys))
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def signer_keys(self) -> Tuple[PublicKey, ...]:
        """Public keys this instruction requires signatures from."""
        return tuple(meta.pubkey for meta in self.keys if meta.is_signer)
