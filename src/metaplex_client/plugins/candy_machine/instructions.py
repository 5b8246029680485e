"""
Candy Machine instruction encoders.
"""

from __future__ import annotations

from ...codec import BinaryWriter, instruction_discriminator
from ...runtime.pubkey import PublicKey, to_public_key
from ...tx.instruction import AccountMeta, TransactionInstruction
from .accounts import CANDY_MACHINE_PROGRAM_ID, CandyMachineData

UPDATE_CANDY_MACHINE_DISCRIMINATOR = instruction_discriminator("update_candy_machine")
UPDATE_AUTHORITY_DISCRIMINATOR = instruction_discriminator("update_authority")


def _accounts(candy_machine, authority, wallet):
    return (
        AccountMeta(to_public_key(candy_machine), is_signer=False, is_writable=True),
        AccountMeta(to_public_key(authority), is_signer=True, is_writable=False),
        AccountMeta(to_public_key(wallet), is_signer=False, is_writable=False),
    )


def create_update_candy_machine_instruction(
    candy_machine: PublicKey,
    authority: PublicKey,
    wallet: PublicKey,
    data: CandyMachineData,
    program_id: PublicKey = CANDY_MACHINE_PROGRAM_ID,
) -> TransactionInstruction:
    """
    Replace the settings of a candy machine.

    Args:
        candy_machine: Candy machine account (writable)
        authority: Current authority (signer)
        wallet: Treasury wallet
        data: New settings
    """
    writer = BinaryWriter()
    writer.bytes(UPDATE_CANDY_MACHINE_DISCRIMINATOR)
    data.write(writer)
    return TransactionInstruction(program_id, _accounts(candy_machine, authority, wallet), writer.to_bytes())


def create_update_authority_instruction(
    candy_machine: PublicKey,
    authority: PublicKey,
    wallet: PublicKey,
    new_authority: PublicKey,
    program_id: PublicKey = CANDY_MACHINE_PROGRAM_ID,
) -> TransactionInstruction:
    """Hand the candy machine over to ``new_authority``."""
    writer = BinaryWriter()
    writer.bytes(UPDATE_AUTHORITY_DISCRIMINATOR)
    writer.option(to_public_key(new_authority), writer.public_key)
    return TransactionInstruction(program_id, _accounts(candy_machine, authority, wallet), writer.to_bytes())
