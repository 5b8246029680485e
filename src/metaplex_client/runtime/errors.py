"""
Metaplex Error Model

This module provides the error handling framework for the Metaplex Python client.
Every error carries a stable code, a message, optional structured details and the
underlying cause so callers can diagnose failures without re-running them.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Metaplex client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    INVALID_PUBLIC_KEY = 3

    # Account errors (100-199)
    ACCOUNT_NOT_FOUND = 100
    UNEXPECTED_ACCOUNT = 101
    DECODE_ERROR = 102

    # Operation errors (200-299)
    OPERATION_HANDLER_MISSING = 200
    OPERATION_HANDLER_ALREADY_REGISTERED = 201
    OPERATION_REGISTRY_FROZEN = 202

    # Transaction composition errors (300-399)
    NO_INSTRUCTIONS_TO_SEND = 300
    MISSING_FEE_PAYER = 302
    MISSING_CONTEXT = 303

    # Network errors (400-499)
    NETWORK_ERROR = 400
    RPC_ERROR = 401
    FAILED_TO_SEND_TRANSACTION = 402
    FAILED_TO_CONFIRM_TRANSACTION = 403
    TRANSACTION_UNCONFIRMED = 404

    # Authorization errors (500-599)
    SIGNER_APPROVAL_FAILED = 500
    MISSING_SIGNER = 501


class MetaplexError(Exception):
    """
    Base class for all Metaplex client errors.

    Provides structured error information: code, message, details and cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a Metaplex error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details:
            result["details"] = {k: str(v) for k, v in self.details.items()}
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidPublicKeyError(MetaplexError):
    """A value could not be interpreted as a 32-byte public key."""

    def __init__(self, value: Any, cause: Optional[BaseException] = None):
        super().__init__(
            f"Invalid public key: {value!r}",
            ErrorCode.INVALID_PUBLIC_KEY,
            {"value": value},
            cause,
        )


# =============================================================================
# Read side
# =============================================================================

class AccountNotFoundError(MetaplexError):
    """An expected account does not exist on chain."""

    def __init__(self, address: Any, account_type: Optional[str] = None):
        message = f"The account of type [{account_type}] was not found at the provided address [{address}]" \
            if account_type else f"No account was found at the provided address [{address}]"
        super().__init__(
            message,
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"address": address, "account_type": account_type},
        )
        self.address = address
        self.account_type = account_type


class UnexpectedAccountError(MetaplexError):
    """Account bytes exist but could not be decoded as the expected type."""

    def __init__(self, address: Any, expected_type: str, cause: Optional[BaseException] = None):
        super().__init__(
            f"The account at the provided address [{address}] is not of the expected type [{expected_type}]",
            ErrorCode.UNEXPECTED_ACCOUNT,
            {"address": address, "expected_type": expected_type},
            cause,
        )
        self.address = address
        self.expected_type = expected_type


class CodecError(MetaplexError):
    """Binary codec failure: truncated buffer, unknown enum tag, bad discriminator or out-of-range value."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details, cause)


# =============================================================================
# Dispatch
# =============================================================================

class OperationHandlerMissingError(MetaplexError):
    """No handler is registered for an operation kind."""

    def __init__(self, kind: str):
        super().__init__(
            f"No operation handler was registered for the [{kind}] operation",
            ErrorCode.OPERATION_HANDLER_MISSING,
            {"kind": kind},
        )
        self.kind = kind


class OperationHandlerAlreadyRegisteredError(MetaplexError):
    """A second handler was registered for an operation kind."""

    def __init__(self, kind: str):
        super().__init__(
            f"An operation handler is already registered for the [{kind}] operation",
            ErrorCode.OPERATION_HANDLER_ALREADY_REGISTERED,
            {"kind": kind},
        )
        self.kind = kind


class OperationRegistryFrozenError(MetaplexError):
    """Registration was attempted after the registry was frozen."""

    def __init__(self, kind: str):
        super().__init__(
            f"Cannot register [{kind}]: the operation registry is frozen",
            ErrorCode.OPERATION_REGISTRY_FROZEN,
            {"kind": kind},
        )
        self.kind = kind


# =============================================================================
# Composition
# =============================================================================

class NoInstructionsToSendError(MetaplexError):
    """A transaction builder with zero steps was submitted."""

    def __init__(self, operation: Optional[str] = None):
        message = f"The operation [{operation}] did not produce any instructions to send" \
            if operation else "The transaction builder does not contain any instructions to send"
        super().__init__(message, ErrorCode.NO_INSTRUCTIONS_TO_SEND, {"operation": operation})
        self.operation = operation


class MissingFeePayerError(MetaplexError):
    """A transaction was compiled without any fee payer."""

    def __init__(self):
        super().__init__("A fee payer is required to compile a transaction", ErrorCode.MISSING_FEE_PAYER)


class MissingContextError(MetaplexError):
    """A transaction was compiled without a recent blockhash."""

    def __init__(self):
        super().__init__(
            "A recent blockhash is required to compile a transaction",
            ErrorCode.MISSING_CONTEXT,
        )


# =============================================================================
# Network
# =============================================================================

class NetworkError(MetaplexError):
    """Network-related errors. Potentially transient."""

    retryable = True

    def __init__(self, message: str, code: ErrorCode = ErrorCode.NETWORK_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        super().__init__(message, code, details, cause)


class RpcError(NetworkError):
    """The RPC node answered with a JSON-RPC error or could not be reached."""

    def __init__(self, method: str, message: str, rpc_code: Optional[int] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(
            f"RPC call [{method}] failed: {message}",
            ErrorCode.RPC_ERROR,
            {"method": method, "rpc_code": rpc_code},
            cause,
        )
        self.method = method
        self.rpc_code = rpc_code


class FailedToSendTransactionError(NetworkError):
    """Transmission of a signed transaction failed."""

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            "The transaction could not be sent",
            ErrorCode.FAILED_TO_SEND_TRANSACTION,
            cause=cause,
        )


class FailedToConfirmTransactionError(NetworkError):
    """The ledger reported that a submitted transaction failed."""

    retryable = False

    def __init__(self, signature: str, error: Any = None, cause: Optional[BaseException] = None):
        super().__init__(
            f"Transaction [{signature}] failed on chain: {error}",
            ErrorCode.FAILED_TO_CONFIRM_TRANSACTION,
            {"signature": signature, "error": error},
            cause,
        )
        self.signature = signature
        self.error = error


class TransactionUnconfirmedError(NetworkError):
    """
    The requested confirmation level was not observed before the deadline.

    The transaction may or may not have landed; re-query state to find out.
    """

    def __init__(self, signature: str, commitment: Any, timeout: Optional[float] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(
            f"Transaction [{signature}] was not confirmed at [{commitment}] within {timeout}s",
            ErrorCode.TRANSACTION_UNCONFIRMED,
            {"signature": signature, "commitment": commitment, "timeout": timeout},
            cause,
        )
        self.signature = signature
        self.commitment = commitment
        self.timeout = timeout


# =============================================================================
# Authorization
# =============================================================================

class SignerApprovalError(MetaplexError):
    """A required signer failed to approve the transaction message. Fatal."""

    def __init__(self, public_key: Any, cause: Optional[BaseException] = None):
        super().__init__(
            f"Signer [{public_key}] failed to approve the transaction",
            ErrorCode.SIGNER_APPROVAL_FAILED,
            {"public_key": public_key},
            cause,
        )
        self.public_key = public_key


class MissingSignerError(MetaplexError):
    """An instruction requires a signature from a key no signer was provided for."""

    def __init__(self, public_key: Any):
        super().__init__(
            f"No signer was provided for required signer [{public_key}]",
            ErrorCode.MISSING_SIGNER,
            {"public_key": public_key},
        )
        self.public_key = public_key


__all__ = [
    "ErrorCode",
    "MetaplexError",
    "InvalidPublicKeyError",
    "AccountNotFoundError",
    "UnexpectedAccountError",
    "CodecError",
    "OperationHandlerMissingError",
    "OperationHandlerAlreadyRegisteredError",
    "OperationRegistryFrozenError",
    "NoInstructionsToSendError",
    "MissingFeePayerError",
    "MissingContextError",
    "NetworkError",
    "RpcError",
    "FailedToSendTransactionError",
    "FailedToConfirmTransactionError",
    "TransactionUnconfirmedError",
    "SignerApprovalError",
    "MissingSignerError",
]
