"""
Operation dispatch.

Operations are typed requests; the registry maps each operation kind to the
handler that fulfils it.
"""

from .registry import (
    FunctionOperationHandler,
    Operation,
    OperationConstructor,
    OperationHandler,
    OperationRegistry,
    use_operation,
)

__all__ = [
    "FunctionOperationHandler",
    "Operation",
    "OperationConstructor",
    "OperationHandler",
    "OperationRegistry",
    "use_operation",
]
