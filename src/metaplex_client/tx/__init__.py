"""
Transaction building for the Metaplex client.

Provides instructions, the immutable keyed TransactionBuilder and
message compilation, signing and serialization.
"""

from .instruction import AccountMeta, TransactionInstruction
from .transaction import (
    CompiledInstruction,
    Message,
    MessageHeader,
    Transaction,
    TransactionContext,
)
from .builder import InstructionWithSigners, TransactionBuilder

__all__ = [
    "AccountMeta",
    "TransactionInstruction",
    "CompiledInstruction",
    "Message",
    "MessageHeader",
    "Transaction",
    "TransactionContext",
    "InstructionWithSigners",
    "TransactionBuilder",
]
