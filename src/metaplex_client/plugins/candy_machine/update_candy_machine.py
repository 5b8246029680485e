"""
UpdateCandyMachine operation.

Builds at most two instructions: ``update`` when the requested settings
differ from the current ones, and ``updateAuthority`` when a new authority
other than the signing authority is given. Sending nothing is an error.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, model_validator

from ...operations.registry import Operation, OperationConstructor, use_operation
from ...rpc.submission import ConfirmOptions, SendAndConfirmTransactionResponse
from ...runtime.errors import NoInstructionsToSendError
from ...runtime.pubkey import PublicKey
from ...signers.signer import Signer
from ...tx.builder import InstructionWithSigners, TransactionBuilder
from ..nft.accounts import Creator
from .accounts import I64, U64, EndSettings, GatekeeperConfig, HiddenSettings, WhitelistMintSettings
from .instructions import create_update_authority_instruction, create_update_candy_machine_instruction
from .models import CANDY_MACHINE_UPDATABLE_FIELDS, CandyMachine, to_candy_machine_instruction_data

if TYPE_CHECKING:
    from ...metaplex import Metaplex

logger = logging.getLogger(__name__)

KEY = "UpdateCandyMachineOperation"

UPDATE_INSTRUCTION_KEY = "update"
UPDATE_AUTHORITY_INSTRUCTION_KEY = "updateAuthority"

# Updatable settings with no "unset" state on chain.
REQUIRED_UPDATABLE_FIELDS = (
    "price",
    "symbol",
    "seller_fee_basis_points",
    "max_edition_supply",
    "is_mutable",
    "retain_authority",
    "items_available",
    "creators",
)


class UpdateCandyMachineInput(BaseModel):
    """
    Requested changes to a candy machine.

    Only updatable fields passed explicitly are applied, so ``go_live_date=None``
    clears the date while omitting it keeps the current one. Settings that
    cannot be cleared reject an explicit None.

    Attributes:
        candy_machine: Current state, usually from ``find_by_address``
        authority: Signing authority; the client identity when None
        new_authority: Authority to hand the candy machine over to
        confirm_options: Submission options
    """
    model_config = ConfigDict(frozen=True)

    candy_machine: CandyMachine
    authority: Optional[InstanceOf[Signer]] = None
    new_authority: Optional[PublicKey] = None
    confirm_options: Optional[InstanceOf[ConfirmOptions]] = None

    price: Optional[U64] = None
    symbol: Optional[str] = None
    seller_fee_basis_points: Optional[Annotated[int, Field(ge=0, le=10_000)]] = None
    max_edition_supply: Optional[U64] = None
    is_mutable: Optional[bool] = None
    retain_authority: Optional[bool] = None
    go_live_date: Optional[I64] = None
    items_available: Optional[U64] = None
    end_settings: Optional[EndSettings] = None
    hidden_settings: Optional[HiddenSettings] = None
    whitelist_mint_settings: Optional[WhitelistMintSettings] = None
    gatekeeper: Optional[GatekeeperConfig] = None
    creators: Optional[List[Creator]] = None

    @model_validator(mode="after")
    def _reject_cleared_required_fields(self) -> UpdateCandyMachineInput:
        cleared = [
            name for name in REQUIRED_UPDATABLE_FIELDS
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"{', '.join(cleared)} cannot be None")
        return self

    def updatable_fields(self) -> Dict[str, Any]:
        """Updatable fields that were passed explicitly."""
        return {name: getattr(self, name) for name in CANDY_MACHINE_UPDATABLE_FIELDS if name in self.model_fields_set}


@dataclass(frozen=True)
class UpdateCandyMachineOutput:
    response: SendAndConfirmTransactionResponse


update_candy_machine_operation: OperationConstructor[UpdateCandyMachineInput, UpdateCandyMachineOutput] = \
    use_operation(KEY)


def update_candy_machine_builder(
    metaplex: Metaplex,
    params: UpdateCandyMachineInput,
    update_instruction_key: Optional[str] = None,
    update_authority_instruction_key: Optional[str] = None,
) -> TransactionBuilder:
    """
    Build the instructions that bring a candy machine to the requested state.

    Args:
        metaplex: Client supplying the default authority
        params: Current state and requested changes
        update_instruction_key: Step key of the settings update
        update_authority_instruction_key: Step key of the authority change

    Returns:
        Builder with zero, one or two steps
    """
    candy_machine = params.candy_machine
    authority = params.authority or metaplex.identity()
    new_authority = params.new_authority

    data_without_updates = to_candy_machine_instruction_data(candy_machine)
    data = to_candy_machine_instruction_data(candy_machine.model_copy(update=params.updatable_fields()))
    should_send_update = data != data_without_updates
    should_send_update_authority = new_authority is not None and new_authority != authority.public_key

    return (
        TransactionBuilder.make()
        .when(should_send_update, lambda builder: builder.add(InstructionWithSigners(
            instruction=create_update_candy_machine_instruction(
                candy_machine.address,
                authority.public_key,
                candy_machine.wallet_address,
                data,
            ),
            signers=(authority,),
            key=update_instruction_key or UPDATE_INSTRUCTION_KEY,
        )))
        .when(should_send_update_authority, lambda builder: builder.add(InstructionWithSigners(
            instruction=create_update_authority_instruction(
                candy_machine.address,
                authority.public_key,
                candy_machine.wallet_address,
                new_authority,
            ),
            signers=(authority,),
            key=update_authority_instruction_key or UPDATE_AUTHORITY_INSTRUCTION_KEY,
        )))
    )


class UpdateCandyMachineOperationHandler:
    async def handle(
        self,
        operation: Operation[UpdateCandyMachineInput, UpdateCandyMachineOutput],
        metaplex: Metaplex,
    ) -> UpdateCandyMachineOutput:
        """
        Raises:
            NoInstructionsToSendError: Nothing differs from the current state
        """
        builder = update_candy_machine_builder(metaplex, operation.input)
        if builder.is_empty():
            raise NoInstructionsToSendError(KEY)

        logger.debug(f"Updating candy machine {operation.input.candy_machine.address} with {len(builder)} instructions")
        response = await builder.send_and_confirm(metaplex, operation.input.confirm_options)
        return UpdateCandyMachineOutput(response)
