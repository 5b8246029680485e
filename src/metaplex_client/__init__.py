"""
Metaplex Python Client

Typed operations, an immutable transaction builder and a send-and-confirm
pipeline for Metaplex programs, with plugins for NFTs, auction houses and
candy machines.
"""

# Runtime: errors, configuration, public keys
from .runtime import *

# Binary codec
from .codec import BinaryReader, BinaryWriter, account_discriminator, instruction_discriminator

# Signing and transaction infrastructure
from .signers import *
from .tx import *

# RPC, accessors and submission
from .rpc import *

# Operations and plugins
from .operations import *
from .plugin import MetaplexPlugin
from .plugins import AuctionHousePlugin, CandyMachinePlugin, NftPlugin, PluginBundle, core_plugins
from .metaplex import Metaplex

__version__ = "0.1.0"
__all__ = [
    # Client
    "Metaplex",
    "MetaplexPlugin",
    "PluginBundle",
    "core_plugins",
    "NftPlugin",
    "AuctionHousePlugin",
    "CandyMachinePlugin",

    # Codec
    "BinaryReader",
    "BinaryWriter",
    "account_discriminator",
    "instruction_discriminator",

    # Runtime
    "ClientConfig",
    "Commitment",
    "PublicKey",
    "to_public_key",
    "MetaplexError",
    "ErrorCode",

    # Signers
    "Signer",
    "Keypair",
    "dedupe_signers",

    # Transactions
    "AccountMeta",
    "TransactionInstruction",
    "Transaction",
    "TransactionContext",
    "InstructionWithSigners",
    "TransactionBuilder",

    # RPC
    "Connection",
    "JsonRpcConnection",
    "InMemoryConnection",
    "UnparsedAccount",
    "ConfirmOptions",
    "SendAndConfirmTransactionResponse",
    "send_and_confirm",

    # Operations
    "Operation",
    "OperationConstructor",
    "OperationHandler",
    "OperationRegistry",
    "use_operation",
]
