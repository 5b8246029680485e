"""
Metaplex Binary Codec Module

Little-endian (borsh) encoding and decoding of on-chain account layouts,
instruction payloads and transaction messages.

Key components:
- writer.py: Binary writer with primitive, option, vector and varint encoding
- reader.py: Binary reader raising CodecError on malformed input
- hashes.py: SHA-256 hashing and Anchor discriminators
"""

from .hashes import account_discriminator, instruction_discriminator, sha256_bytes
from .reader import BinaryReader
from .writer import BinaryWriter

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "account_discriminator",
    "instruction_discriminator",
    "sha256_bytes",
]
