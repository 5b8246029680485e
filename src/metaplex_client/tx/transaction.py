"""
Transaction message compilation and serialization.

Compiles an ordered list of instructions into a single message (one
atomic unit on the ledger), collects one signature per required signer
and serializes the result for transmission.

Wire layout:
    signatures: shortvec of 64-byte signatures
    message:
        header: num_required_signatures, num_readonly_signed, num_readonly_unsigned (u8 each)
        account_keys: shortvec of 32-byte keys
        recent_blockhash: 32 bytes
        instructions: shortvec of (program index u8, shortvec account index u8, shortvec data)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import base58

from ..codec import BinaryReader, BinaryWriter
from ..runtime.errors import (
    CodecError,
    MissingContextError,
    MissingFeePayerError,
    MissingSignerError,
    SignerApprovalError,
)
from ..runtime.pubkey import PublicKey
from ..signers.signer import Signer, dedupe_signers
from .instruction import AccountMeta, TransactionInstruction

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64
BLOCKHASH_LENGTH = 32


@dataclass(frozen=True)
class TransactionContext:
    """Recent ledger state a transaction is anchored to."""
    blockhash: str
    last_valid_block_height: Optional[int] = None


@dataclass(frozen=True)
class MessageHeader:
    num_required_signatures: int
    num_readonly_signed_accounts: int
    num_readonly_unsigned_accounts: int


@dataclass(frozen=True)
class CompiledInstruction:
    program_id_index: int
    accounts: Tuple[int, ...]
    data: bytes


@dataclass(frozen=True)
class Message:
    """Compiled transaction message. The bytes signers approve."""
    header: MessageHeader
    account_keys: Tuple[PublicKey, ...]
    recent_blockhash: str
    instructions: Tuple[CompiledInstruction, ...]

    @classmethod
    def compile(
        cls,
        instructions: Sequence[TransactionInstruction],
        fee_payer: PublicKey,
        recent_blockhash: str,
    ) -> Message:
        """
        Compile instructions into a message.

        Account ordering: fee payer, then writable signers, readonly signers,
        writable non-signers and readonly non-signers, each group in order of
        first appearance.
        """
        metas: Dict[PublicKey, List[bool]] = {fee_payer: [True, True]}
        for ix in instructions:
            for meta in ix.keys:
                flags = metas.setdefault(meta.pubkey, [False, False])
                flags[0] = flags[0] or meta.is_signer
                flags[1] = flags[1] or meta.is_writable
            metas.setdefault(ix.program_id, [False, False])

        def group(signer: bool, writable: bool) -> List[PublicKey]:
            return [k for k, (s, w) in metas.items() if s == signer and w == writable and k != fee_payer]

        writable_signers = [fee_payer] + group(True, True)
        readonly_signers = group(True, False)
        writable_unsigned = group(False, True)
        readonly_unsigned = group(False, False)
        account_keys = tuple(writable_signers + readonly_signers + writable_unsigned + readonly_unsigned)
        index = {key: i for i, key in enumerate(account_keys)}

        compiled = tuple(
            CompiledInstruction(
                program_id_index=index[ix.program_id],
                accounts=tuple(index[meta.pubkey] for meta in ix.keys),
                data=ix.data,
            )
            for ix in instructions
        )
        header = MessageHeader(
            num_required_signatures=len(writable_signers) + len(readonly_signers),
            num_readonly_signed_accounts=len(readonly_signers),
            num_readonly_unsigned_accounts=len(readonly_unsigned),
        )
        return cls(header, account_keys, recent_blockhash, compiled)

    @property
    def signer_keys(self) -> Tuple[PublicKey, ...]:
        return self.account_keys[:self.header.num_required_signatures]

    @property
    def fee_payer(self) -> PublicKey:
        return self.account_keys[0]

    def is_writable(self, index: int) -> bool:
        h = self.header
        if index < h.num_required_signatures:
            return index < h.num_required_signatures - h.num_readonly_signed_accounts
        return index < len(self.account_keys) - h.num_readonly_unsigned_accounts

    def decompile(self) -> List[TransactionInstruction]:
        """Rebuild the instructions this message was compiled from."""
        return [
            TransactionInstruction(
                program_id=self.account_keys[ix.program_id_index],
                keys=tuple(
                    AccountMeta(
                        pubkey=self.account_keys[i],
                        is_signer=i < self.header.num_required_signatures,
                        is_writable=self.is_writable(i),
                    )
                    for i in ix.accounts
                ),
                data=ix.data,
            )
            for ix in self.instructions
        ]

    def serialize(self) -> bytes:
        writer = BinaryWriter()
        self.write(writer)
        return writer.to_bytes()

    def write(self, writer: BinaryWriter) -> None:
        writer.u8(self.header.num_required_signatures)
        writer.u8(self.header.num_readonly_signed_accounts)
        writer.u8(self.header.num_readonly_unsigned_accounts)
        writer.shortvec(self.account_keys, writer.public_key)
        writer.bytes(base58.b58decode(self.recent_blockhash))

        def write_instruction(ix: CompiledInstruction) -> None:
            writer.u8(ix.program_id_index)
            writer.shortvec(ix.accounts, writer.u8)
            writer.shortvec(ix.data, writer.u8)

        writer.shortvec(self.instructions, write_instruction)

    @classmethod
    def read(cls, reader: BinaryReader) -> Message:
        header = MessageHeader(reader.u8(), reader.u8(), reader.u8())
        account_keys = tuple(reader.shortvec(reader.public_key))
        recent_blockhash = base58.b58encode(reader.bytes(BLOCKHASH_LENGTH)).decode("ascii")

        def read_instruction() -> CompiledInstruction:
            program_id_index = reader.u8()
            accounts = tuple(reader.shortvec(reader.u8))
            data = bytes(reader.shortvec(reader.u8))
            if program_id_index >= len(account_keys) or any(i >= len(account_keys) for i in accounts):
                raise CodecError("Instruction references an unknown account index")
            return CompiledInstruction(program_id_index, accounts, data)

        instructions = tuple(reader.shortvec(read_instruction))
        if header.num_required_signatures > len(account_keys):
            raise CodecError("Header requires more signatures than there are accounts")
        return cls(header, account_keys, recent_blockhash, instructions)


@dataclass
class Transaction:
    """A compiled message plus one signature slot per required signer."""
    message: Message
    signatures: List[Optional[bytes]] = field(default_factory=list)

    def __post_init__(self):
        if not self.signatures:
            self.signatures = [None] * self.message.header.num_required_signatures

    @classmethod
    def build(
        cls,
        instructions: Sequence[TransactionInstruction],
        fee_payer: Optional[PublicKey],
        context: Optional[TransactionContext],
    ) -> Transaction:
        if fee_payer is None:
            raise MissingFeePayerError()
        if context is None:
            raise MissingContextError()
        return cls(Message.compile(instructions, fee_payer, context.blockhash))

    @property
    def signature(self) -> Optional[str]:
        """Base58 of the fee payer's signature; the transaction identifier."""
        first = self.signatures[0] if self.signatures else None
        return base58.b58encode(first).decode("ascii") if first else None

    def sign(self, signers: Sequence[Signer]) -> Transaction:
        """
        Collect one approval per distinct required signer.

        Raises:
            MissingSignerError: A required signer was not supplied
            SignerApprovalError: A signer failed to approve
        """
        by_key = {signer.public_key: signer for signer in dedupe_signers(signers)}
        message_bytes = self.message.serialize()

        for position, key in enumerate(self.message.signer_keys):
            signer = by_key.get(key)
            if signer is None:
                raise MissingSignerError(key)
            try:
                signature = signer.sign(message_bytes)
            except Exception as e:
                raise SignerApprovalError(key, e) from e
            if not isinstance(signature, (bytes, bytearray)) or len(signature) != SIGNATURE_LENGTH:
                raise SignerApprovalError(key, ValueError("signer returned a malformed signature"))
            self.signatures[position] = bytes(signature)
            logger.debug(f"Signed message with {key}")
        return self

    def is_signed(self) -> bool:
        return all(sig is not None for sig in self.signatures)

    def serialize(self) -> bytes:
        writer = BinaryWriter()
        writer.shortvec(
            self.signatures,
            lambda sig: writer.bytes(sig if sig is not None else bytes(SIGNATURE_LENGTH)),
        )
        self.message.write(writer)
        return writer.to_bytes()

    @classmethod
    def deserialize(cls, data: bytes) -> Transaction:
        reader = BinaryReader(data)
        signatures = reader.shortvec(lambda: reader.bytes(SIGNATURE_LENGTH))
        message = Message.read(reader)
        if not reader.eof:
            raise CodecError("Trailing bytes after transaction message", {"remaining": reader.remaining})
        return cls(message, [None if sig == bytes(SIGNATURE_LENGTH) else sig for sig in signatures])
