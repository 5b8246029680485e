"""
FindCandyMachineByAddress operation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ...operations.registry import Operation, OperationConstructor, use_operation
from ...rpc.accounts import find_account
from ...runtime.commitment import Commitment
from ...runtime.pubkey import PublicKey, to_public_key
from .accounts import parse_candy_machine_account
from .models import CandyMachine, make_candy_machine_model

if TYPE_CHECKING:
    from ...metaplex import Metaplex

KEY = "FindCandyMachineByAddressOperation"


@dataclass(frozen=True)
class FindCandyMachineByAddressInput:
    address: PublicKey
    commitment: Optional[Commitment] = None


find_candy_machine_by_address_operation: OperationConstructor[FindCandyMachineByAddressInput, CandyMachine] = \
    use_operation(KEY)


class FindCandyMachineByAddressOperationHandler:
    async def handle(
        self,
        operation: Operation[FindCandyMachineByAddressInput, CandyMachine],
        metaplex: Metaplex,
    ) -> CandyMachine:
        address = to_public_key(operation.input.address)
        account = await find_account(
            metaplex.connection,
            address,
            parse_candy_machine_account,
            "CandyMachine",
            operation.input.commitment,
        )
        return make_candy_machine_model(address, account)
