"""
Candy Machine plugin: lookups and settings updates.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from ...plugin import MetaplexPlugin
from ...rpc.submission import ConfirmOptions
from ...runtime.commitment import Commitment
from ...signers.signer import Signer
from .accounts import (
    CANDY_MACHINE_DISCRIMINATOR,
    CANDY_MACHINE_PROGRAM_ID,
    CandyMachineAccountData,
    CandyMachineData,
    EndSettings,
    EndSettingType,
    GatekeeperConfig,
    HiddenSettings,
    WhitelistMintMode,
    WhitelistMintSettings,
    parse_candy_machine_account,
)
from .find_candy_machine_by_address import (
    FindCandyMachineByAddressInput,
    FindCandyMachineByAddressOperationHandler,
    find_candy_machine_by_address_operation,
)
from .instructions import create_update_authority_instruction, create_update_candy_machine_instruction
from .models import (
    CANDY_MACHINE_UPDATABLE_FIELDS,
    CandyMachine,
    make_candy_machine_model,
    to_candy_machine_instruction_data,
)
from .update_candy_machine import (
    UpdateCandyMachineInput,
    UpdateCandyMachineOperationHandler,
    UpdateCandyMachineOutput,
    update_candy_machine_builder,
    update_candy_machine_operation,
)

if TYPE_CHECKING:
    from ...metaplex import Metaplex


class CandyMachineClient:
    """Facade exposed as ``metaplex.candy_machines()``."""

    def __init__(self, metaplex: Metaplex):
        self.metaplex = metaplex

    async def find_by_address(self, address, commitment: Optional[Commitment] = None) -> CandyMachine:
        return await self.metaplex.execute(
            find_candy_machine_by_address_operation(FindCandyMachineByAddressInput(address, commitment))
        )

    async def update(
        self,
        candy_machine: CandyMachine,
        authority: Optional[Signer] = None,
        new_authority=None,
        confirm_options: Optional[ConfirmOptions] = None,
        **updatable_fields,
    ) -> UpdateCandyMachineOutput:
        """
        Update settings and/or authority.

        Keyword arguments name the fields to change, e.g. ``price=2_000_000``.

        Raises:
            NoInstructionsToSendError: Nothing to change
        """
        params = UpdateCandyMachineInput(
            candy_machine=candy_machine,
            authority=authority,
            new_authority=new_authority,
            confirm_options=confirm_options,
            **updatable_fields,
        )
        return await self.metaplex.execute(update_candy_machine_operation(params))


class CandyMachinePlugin(MetaplexPlugin):
    def install(self, metaplex: Metaplex) -> None:
        registry = metaplex.operations()
        registry.register(find_candy_machine_by_address_operation, FindCandyMachineByAddressOperationHandler())
        registry.register(update_candy_machine_operation, UpdateCandyMachineOperationHandler())
        metaplex.candy_machines = lambda: CandyMachineClient(metaplex)


__all__ = [
    "CANDY_MACHINE_DISCRIMINATOR",
    "CANDY_MACHINE_PROGRAM_ID",
    "CANDY_MACHINE_UPDATABLE_FIELDS",
    "CandyMachine",
    "CandyMachineAccountData",
    "CandyMachineClient",
    "CandyMachineData",
    "CandyMachinePlugin",
    "EndSettings",
    "EndSettingType",
    "FindCandyMachineByAddressInput",
    "FindCandyMachineByAddressOperationHandler",
    "GatekeeperConfig",
    "HiddenSettings",
    "UpdateCandyMachineInput",
    "UpdateCandyMachineOperationHandler",
    "UpdateCandyMachineOutput",
    "WhitelistMintMode",
    "WhitelistMintSettings",
    "create_update_authority_instruction",
    "create_update_candy_machine_instruction",
    "find_candy_machine_by_address_operation",
    "make_candy_machine_model",
    "parse_candy_machine_account",
    "to_candy_machine_instruction_data",
    "update_candy_machine_builder",
    "update_candy_machine_operation",
]
