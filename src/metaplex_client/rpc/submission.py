"""
Transaction submission pipeline.

Compiles a finished ``TransactionBuilder`` into one transaction, collects one
approval per distinct signer, transmits it and waits for the requested
confirmation level.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..runtime.commitment import Commitment
from ..runtime.errors import (
    FailedToSendTransactionError,
    NoInstructionsToSendError,
    RpcError,
    TransactionUnconfirmedError,
)
from ..signers.signer import dedupe_signers
from ..tx.builder import TransactionBuilder
from ..tx.transaction import Transaction

if TYPE_CHECKING:
    from ..metaplex import Metaplex

logger = logging.getLogger(__name__)


class _Default(Enum):
    CONNECTION = "connection"


CONNECTION_DEFAULT = _Default.CONNECTION


@dataclass
class ConfirmOptions:
    """
    Options for sending and confirming a transaction.

    Attributes:
        commitment: Confirmation level to wait for; the connection default when None
        timeout: Seconds to wait for confirmation; None waits until cancelled.
            Defaults to the connection's ``confirm_timeout``
        skip_preflight: Skip the node's simulation before broadcasting
        poll_interval: Seconds between status polls
        cancel: Event that abandons the wait when set
    """
    commitment: Optional[Commitment] = None
    timeout: Union[float, None, _Default] = CONNECTION_DEFAULT
    skip_preflight: bool = False
    poll_interval: float = 0.5
    cancel: Optional[asyncio.Event] = None

    def resolve_timeout(self, metaplex: Metaplex) -> Optional[float]:
        if self.timeout is CONNECTION_DEFAULT:
            return metaplex.connection.confirm_timeout
        return self.timeout


@dataclass(frozen=True)
class SendAndConfirmTransactionResponse:
    """Submission acknowledged at the requested durability level."""
    signature: str
    confirmation_level: Commitment
    slot: Optional[int] = None


async def prepare_transaction(builder: TransactionBuilder, metaplex: Metaplex) -> Transaction:
    """
    Compile and sign a builder.

    The fee payer is the builder's own or, failing that, the client identity.

    Raises:
        NoInstructionsToSendError: The builder has no steps
        MissingSignerError: An instruction requires an unsupplied signer
        SignerApprovalError: A signer failed to approve
    """
    if builder.is_empty():
        raise NoInstructionsToSendError()

    if builder.get_context() is None:
        builder = builder.set_context(await metaplex.connection.get_latest_blockhash())

    fee_payer = builder.get_fee_payer() or metaplex.identity()
    transaction = builder.to_transaction(fee_payer)
    signers = dedupe_signers([fee_payer, *builder.get_signers()])
    logger.debug(
        f"Compiled {builder.get_instruction_count()} instructions with {len(signers)} signers"
    )
    return transaction.sign(signers)


async def send_transaction(
    builder: TransactionBuilder,
    metaplex: Metaplex,
    options: Optional[ConfirmOptions] = None,
) -> str:
    """
    Sign and transmit without waiting for confirmation.

    Returns:
        Transaction signature

    Raises:
        FailedToSendTransactionError: Transmission failed (retryable)
    """
    options = options or ConfirmOptions()
    transaction = await prepare_transaction(builder, metaplex)
    try:
        signature = await metaplex.connection.send_transaction(
            transaction.serialize(),
            skip_preflight=options.skip_preflight,
            preflight_commitment=options.commitment,
        )
    except RpcError as e:
        raise FailedToSendTransactionError(e) from e
    logger.debug(f"Sent transaction {signature}")
    return signature


async def _wait_for_confirmation(
    metaplex: Metaplex,
    signature: str,
    commitment: Commitment,
    options: ConfirmOptions,
    timeout: Optional[float],
):
    confirm = asyncio.ensure_future(
        metaplex.connection.confirm_transaction(signature, commitment, options.poll_interval)
    )
    waiters = {confirm}
    cancelled = None
    if options.cancel is not None:
        cancelled = asyncio.ensure_future(options.cancel.wait())
        waiters.add(cancelled)

    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in waiters:
            if not task.done():
                task.cancel()

    if confirm in done:
        return confirm.result()
    reason = "cancelled" if cancelled is not None and cancelled in done else "timed out"
    logger.debug(f"Confirmation of {signature} {reason}")
    raise TransactionUnconfirmedError(signature, commitment.value, timeout)


async def send_and_confirm(
    builder: TransactionBuilder,
    metaplex: Metaplex,
    confirm_options: Optional[ConfirmOptions] = None,
) -> SendAndConfirmTransactionResponse:
    """
    Submit a builder as one atomic transaction and wait for confirmation.

    Args:
        builder: Non-empty transaction builder
        metaplex: Client providing the connection and identity
        confirm_options: Confirmation level, deadline and cancellation

    Returns:
        Signature and the observed confirmation level

    Raises:
        NoInstructionsToSendError: Empty builder, before any network call
        SignerApprovalError: A signer failed to approve (fatal)
        FailedToSendTransactionError: Transmission failed (retryable)
        FailedToConfirmTransactionError: The ledger rejected the transaction
        TransactionUnconfirmedError: Deadline or cancellation before confirmation
    """
    options = confirm_options or ConfirmOptions()
    commitment = Commitment(options.commitment or metaplex.connection.commitment)
    timeout = options.resolve_timeout(metaplex)
    signature = await send_transaction(builder, metaplex, options)

    try:
        status = await _wait_for_confirmation(metaplex, signature, commitment, options, timeout)
    except RpcError as e:
        raise TransactionUnconfirmedError(signature, commitment.value, timeout, e) from e

    return SendAndConfirmTransactionResponse(
        signature=signature,
        confirmation_level=status.confirmation_status or commitment,
        slot=status.slot,
    )
