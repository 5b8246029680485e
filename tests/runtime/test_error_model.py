"""
Tests for the structured error model.
"""

from metaplex_client.runtime.errors import (
    AccountNotFoundError,
    ErrorCode,
    FailedToSendTransactionError,
    MetaplexError,
    NoInstructionsToSendError,
    OperationHandlerMissingError,
    RpcError,
    SignerApprovalError,
)

from helpers import mk_public_key


class TestErrorModel:
    """Test codes, messages and serialization."""

    def test_all_errors_share_base(self):
        for error in (
            AccountNotFoundError(mk_public_key("a"), "Metadata"),
            NoInstructionsToSendError(),
            OperationHandlerMissingError("Echo"),
            SignerApprovalError(mk_public_key("a")),
        ):
            assert isinstance(error, MetaplexError)

    def test_str_includes_code_details_and_cause(self):
        cause = RpcError("sendTransaction", "node unavailable")
        error = FailedToSendTransactionError(cause)

        text = str(error)

        assert text.startswith("[FAILED_TO_SEND_TRANSACTION]")
        assert "Caused by: [RPC_ERROR]" in text

    def test_to_dict(self):
        address = mk_public_key("a")
        error = AccountNotFoundError(address, "Metadata")

        result = error.to_dict()

        assert result["code"] == ErrorCode.ACCOUNT_NOT_FOUND.value
        assert result["name"] == "ACCOUNT_NOT_FOUND"
        assert result["details"] == {"address": str(address), "account_type": "Metadata"}
        assert "cause" not in result

    def test_operation_named_in_message(self):
        error = NoInstructionsToSendError("UpdateCandyMachineOperation")

        assert "UpdateCandyMachineOperation" in error.message
        assert error.code == ErrorCode.NO_INSTRUCTIONS_TO_SEND

    def test_network_errors_are_retryable(self):
        assert RpcError("getAccountInfo", "timeout").retryable
        assert FailedToSendTransactionError().retryable
