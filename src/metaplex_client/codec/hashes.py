"""
Hash Functions

SHA-256 helpers and the 8-byte discriminators that Anchor programs prefix
to their account data and instruction payloads.
"""

import hashlib

DISCRIMINATOR_LENGTH = 8


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def account_discriminator(account_name: str) -> bytes:
    """
    Discriminator of an Anchor account type.

    Args:
        account_name: Account struct name, e.g. "CandyMachine"

    Returns:
        First 8 bytes of sha256("account:<name>")
    """
    return sha256_bytes(f"account:{account_name}".encode("utf-8"))[:DISCRIMINATOR_LENGTH]


def instruction_discriminator(instruction_name: str) -> bytes:
    """
    Discriminator of an Anchor instruction.

    Args:
        instruction_name: Snake-case instruction name, e.g. "update_authority"

    Returns:
        First 8 bytes of sha256("global:<name>")
    """
    return sha256_bytes(f"global:{instruction_name}".encode("utf-8"))[:DISCRIMINATOR_LENGTH]
