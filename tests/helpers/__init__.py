from .factories import (
    FailingSigner,
    mk_auction_house_account,
    mk_candy_machine,
    mk_candy_machine_account,
    mk_instruction,
    mk_metadata_account,
    mk_public_key,
    mk_step,
)

__all__ = [
    "FailingSigner",
    "mk_auction_house_account",
    "mk_candy_machine",
    "mk_candy_machine_account",
    "mk_instruction",
    "mk_metadata_account",
    "mk_public_key",
    "mk_step",
]
