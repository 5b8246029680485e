"""
Transaction builder.

A ``TransactionBuilder`` is an immutable, ordered collection of keyed
instructions, each carrying the signers it requires. Every mutator returns a
new builder, so conditional composition with ``when``/``unless`` is
referentially transparent:

    builder = (
        TransactionBuilder.make()
        .when(data_changed, lambda b: b.add(update_step))
        .when(authority_changed, lambda b: b.add(authority_step))
    )
    if builder.is_empty():
        raise NoInstructionsToSendError("UpdateCandyMachineOperation")

Adding a step whose key already exists replaces that step in place, keeping
its original position.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union,
)

from ..signers.signer import Signer, dedupe_signers
from .instruction import TransactionInstruction
from .transaction import Transaction, TransactionContext

if TYPE_CHECKING:
    from ..metaplex import Metaplex
    from ..rpc.submission import ConfirmOptions, SendAndConfirmTransactionResponse


@dataclass(frozen=True)
class InstructionWithSigners:
    """One step of a builder: an instruction, its signers and an optional lookup key."""
    instruction: TransactionInstruction
    signers: Tuple[Signer, ...] = field(default_factory=tuple)
    key: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "signers", tuple(self.signers))


StepLike = Union[InstructionWithSigners, "TransactionBuilder"]


class TransactionBuilder:
    """Immutable builder of one not-yet-submitted atomic transaction."""

    __slots__ = ("_records", "_fee_payer", "_context")

    def __init__(
        self,
        records: Sequence[InstructionWithSigners] = (),
        fee_payer: Optional[Signer] = None,
        context: Optional[TransactionContext] = None,
    ):
        self._records: Tuple[InstructionWithSigners, ...] = tuple(records)
        self._fee_payer = fee_payer
        self._context = context

    @classmethod
    def make(cls) -> TransactionBuilder:
        """Return an empty builder."""
        return cls()

    def _with_records(self, records: Sequence[InstructionWithSigners]) -> TransactionBuilder:
        return TransactionBuilder(records, self._fee_payer, self._context)

    @staticmethod
    def _flatten(steps: Sequence[StepLike]) -> List[InstructionWithSigners]:
        flat: List[InstructionWithSigners] = []
        for step in steps:
            if isinstance(step, TransactionBuilder):
                flat.extend(step.get_instructions_with_signers())
            elif isinstance(step, InstructionWithSigners):
                flat.append(step)
            else:
                raise TypeError(f"Cannot add {type(step).__name__} to a TransactionBuilder")
        return flat

    @staticmethod
    def _merge(
        records: List[InstructionWithSigners],
        step: InstructionWithSigners,
        insert_at: Optional[int] = None,
    ) -> Optional[int]:
        """Replace a same-key step in place or insert; return the insert index used."""
        if step.key is not None:
            for i, existing in enumerate(records):
                if existing.key == step.key:
                    records[i] = step
                    return insert_at
        if insert_at is None:
            records.append(step)
            return None
        records.insert(insert_at, step)
        return insert_at + 1

    # =========================================================================
    # Composition
    # =========================================================================

    def add(self, *steps: StepLike) -> TransactionBuilder:
        """
        Append steps (or every step of other builders) in call order.

        A step whose key is already present replaces the existing step at its
        original position instead of being appended.

        Returns:
            New builder
        """
        records = list(self._records)
        for step in self._flatten(steps):
            self._merge(records, step)
        return self._with_records(records)

    append = add

    def prepend(self, *steps: StepLike) -> TransactionBuilder:
        """
        Insert steps at the front, preserving their relative order.

        Keyed steps that already exist are replaced in place.
        """
        records = list(self._records)
        position: Optional[int] = 0
        for step in self._flatten(steps):
            position = self._merge(records, step, position)
        return self._with_records(records)

    def when(self, condition: bool, fn: Callable[[TransactionBuilder], TransactionBuilder]) -> TransactionBuilder:
        """
        Apply ``fn`` only when ``condition`` is true.

        Args:
            condition: Whether to apply the transformation
            fn: Builder transformation, typically adding one step

        Returns:
            ``fn(self)`` or ``self`` unchanged; ``fn`` is never called when false
        """
        return fn(self) if condition else self

    def unless(self, condition: bool, fn: Callable[[TransactionBuilder], TransactionBuilder]) -> TransactionBuilder:
        """Apply ``fn`` only when ``condition`` is false."""
        return self.when(not condition, fn)

    # =========================================================================
    # Inspection
    # =========================================================================

    def is_empty(self) -> bool:
        return len(self._records) == 0

    def get_instruction_count(self) -> int:
        return len(self._records)

    def get_instructions_with_signers(self) -> List[InstructionWithSigners]:
        return list(self._records)

    def get_instruction_with_signers(self, key: str) -> Optional[InstructionWithSigners]:
        """Look up a step by key; None when absent."""
        return next((record for record in self._records if record.key == key), None)

    def get_instructions(self) -> List[TransactionInstruction]:
        """Final ordered instruction sequence."""
        return [record.instruction for record in self._records]

    def get_signers(self) -> List[Signer]:
        """
        Deduplicated signers in order of first requirement.

        The explicit fee payer, when set, comes first.
        """
        signers: List[Signer] = [self._fee_payer] if self._fee_payer is not None else []
        for record in self._records:
            signers.extend(record.signers)
        return dedupe_signers(signers)

    # =========================================================================
    # Splitting
    # =========================================================================

    def split_using_key(self, key: str, include: bool = True) -> Tuple[TransactionBuilder, TransactionBuilder]:
        """
        Split into two builders around the step with ``key``.

        Args:
            key: Step key to split on
            include: Whether the keyed step belongs to the first half

        Returns:
            Tuple of builders; ``(self, empty)`` when the key is absent.
            Both halves keep the fee payer and context.
        """
        index = next((i for i, record in enumerate(self._records) if record.key == key), None)
        if index is None:
            return self, self._with_records(())
        bound = index + 1 if include else index
        return self._with_records(self._records[:bound]), self._with_records(self._records[bound:])

    def split_before_key(self, key: str) -> Tuple[TransactionBuilder, TransactionBuilder]:
        return self.split_using_key(key, include=False)

    def split_after_key(self, key: str) -> Tuple[TransactionBuilder, TransactionBuilder]:
        return self.split_using_key(key, include=True)

    # =========================================================================
    # Metadata
    # =========================================================================

    def set_fee_payer(self, fee_payer: Signer) -> TransactionBuilder:
        return TransactionBuilder(self._records, fee_payer, self._context)

    def get_fee_payer(self) -> Optional[Signer]:
        return self._fee_payer

    def set_context(self, context: TransactionContext) -> TransactionBuilder:
        return TransactionBuilder(self._records, self._fee_payer, context)

    def get_context(self) -> Optional[TransactionContext]:
        return self._context

    # =========================================================================
    # Compilation and submission
    # =========================================================================

    def to_transaction(self, fee_payer: Optional[Signer] = None) -> Transaction:
        """
        Compile into an unsigned transaction.

        Args:
            fee_payer: Used when the builder has no fee payer of its own

        Raises:
            MissingFeePayerError: No fee payer available
            MissingContextError: No recent blockhash set
        """
        payer = self._fee_payer or fee_payer
        return Transaction.build(
            self.get_instructions(),
            payer.public_key if payer is not None else None,
            self._context,
        )

    async def send_and_confirm(
        self,
        metaplex: Metaplex,
        confirm_options: Optional[ConfirmOptions] = None,
    ) -> SendAndConfirmTransactionResponse:
        """Submit through ``metaplex`` and wait for confirmation."""
        from ..rpc.submission import send_and_confirm
        return await send_and_confirm(self, metaplex, confirm_options)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[InstructionWithSigners]:
        return iter(self._records)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TransactionBuilder):
            return NotImplemented
        return (self._records, self._fee_payer, self._context) == \
            (other._records, other._fee_payer, other._context)

    def __hash__(self) -> int:
        return hash((self._records, id(self._fee_payer), self._context))

    def __repr__(self) -> str:
        keys = [record.key for record in self._records]
        return f"TransactionBuilder(steps={keys})"
