"""
Program derived addresses of the Token Metadata program.
"""

from ...runtime.pubkey import PublicKey
from .accounts import TOKEN_METADATA_PROGRAM_ID

METADATA_SEED = b"metadata"
EDITION_SEED = b"edition"


def find_metadata_pda(mint: PublicKey, program_id: PublicKey = TOKEN_METADATA_PROGRAM_ID) -> PublicKey:
    address, _ = PublicKey.find_program_address(
        [METADATA_SEED, program_id.to_bytes(), mint.to_bytes()],
        program_id,
    )
    return address


def find_master_edition_pda(mint: PublicKey, program_id: PublicKey = TOKEN_METADATA_PROGRAM_ID) -> PublicKey:
    address, _ = PublicKey.find_program_address(
        [METADATA_SEED, program_id.to_bytes(), mint.to_bytes(), EDITION_SEED],
        program_id,
    )
    return address
