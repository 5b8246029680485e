"""
Operation registry and dispatcher.

Operations are immutable requests tagged by a unique ``kind`` string. Plugins
bind one handler per kind at startup; ``OperationRegistry.execute`` resolves
the handler for an operation and awaits it, propagating its result or
exception unchanged.

Typed call sites come from ``use_operation``:

    find_nft_by_mint_operation: OperationConstructor[FindNftByMintInput, Nft] = \\
        use_operation("FindNftByMintOperation")

    nft = await metaplex.execute(find_nft_by_mint_operation(FindNftByMintInput(mint=mint)))

The registry is written during plugin installation and read during dispatch.
Writes take a lock and swap in a new mapping, so concurrent reads never
observe a partially updated registry. Registering a kind twice is rejected.
"""

from __future__ import annotations
import inspect
import logging
import threading
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, Dict, Generic, List, Mapping, Protocol, TypeVar, Union,
)

from ..runtime.errors import (
    OperationHandlerAlreadyRegisteredError,
    OperationHandlerMissingError,
    OperationRegistryFrozenError,
)

if TYPE_CHECKING:
    from ..metaplex import Metaplex

logger = logging.getLogger(__name__)

I = TypeVar("I")
O = TypeVar("O")


@dataclass(frozen=True)
class Operation(Generic[I, O]):
    """
    A typed request dispatched to exactly one handler.

    ``O`` is the output type the handler for ``kind`` returns; it only exists
    for static checking.
    """
    kind: str
    input: I


class OperationConstructor(Generic[I, O]):
    """Creates operations of one kind."""

    def __init__(self, kind: str):
        if not kind:
            raise ValueError("Operation kind must be a non-empty string")
        self.kind = kind

    def __call__(self, input: I) -> Operation[I, O]:
        return Operation(self.kind, input)

    def __repr__(self) -> str:
        return f"OperationConstructor({self.kind!r})"


def use_operation(kind: str) -> OperationConstructor[Any, Any]:
    """
    Declare an operation kind.

    Args:
        kind: Unique operation tag, e.g. "FindNftByMintOperation"

    Returns:
        Constructor producing ``Operation`` values of that kind
    """
    return OperationConstructor(kind)


class OperationHandler(Protocol[I, O]):
    """Fulfils one operation kind."""

    async def handle(self, operation: Operation[I, O], metaplex: Metaplex) -> O:
        ...


class FunctionOperationHandler(Generic[I, O]):
    """Adapts a plain ``async def fn(operation, metaplex)`` to OperationHandler."""

    def __init__(self, fn: Callable[[Operation[I, O], Metaplex], Awaitable[O]]):
        self.fn = fn

    async def handle(self, operation: Operation[I, O], metaplex: Metaplex) -> O:
        return await self.fn(operation, metaplex)

    def __repr__(self) -> str:
        return f"FunctionOperationHandler({getattr(self.fn, '__name__', self.fn)!r})"


HandlerLike = Union[OperationHandler, Callable[..., Awaitable[Any]]]


def _as_handler(handler: HandlerLike) -> OperationHandler:
    if inspect.isclass(handler):
        raise TypeError(f"{handler.__name__} is a class; register an instance of it")
    handle = getattr(handler, "handle", None)
    if callable(handle):
        if not inspect.iscoroutinefunction(handle):
            raise TypeError(f"{handler!r}.handle must be an async method")
        return handler
    if inspect.iscoroutinefunction(handler):
        return FunctionOperationHandler(handler)
    raise TypeError(f"{handler!r} is neither an OperationHandler nor an async function")


def _kind_of(operation: Union[str, OperationConstructor, Operation]) -> str:
    if isinstance(operation, str):
        return operation
    return operation.kind


class OperationRegistry:
    """Mapping from operation kind to its handler."""

    def __init__(self):
        self._handlers: Mapping[str, OperationHandler] = {}
        self._lock = threading.Lock()
        self._frozen = False

    def register(
        self,
        operation: Union[str, OperationConstructor],
        handler: HandlerLike,
    ) -> OperationRegistry:
        """
        Bind a handler to an operation kind.

        Args:
            operation: Kind string or constructor from ``use_operation``
            handler: Object with ``async handle(operation, metaplex)`` or an async callable

        Returns:
            Self for chaining

        Raises:
            OperationHandlerAlreadyRegisteredError: The kind already has a handler
            OperationRegistryFrozenError: The registry no longer accepts registrations
            TypeError: The handler is a class, a sync callable or has a sync ``handle``
        """
        kind = _kind_of(operation)
        resolved = _as_handler(handler)
        with self._lock:
            if self._frozen:
                raise OperationRegistryFrozenError(kind)
            if kind in self._handlers:
                raise OperationHandlerAlreadyRegisteredError(kind)
            handlers: Dict[str, OperationHandler] = dict(self._handlers)
            handlers[kind] = resolved
            self._handlers = handlers
        logger.debug(f"Registered handler for {kind}")
        return self

    def handles(self, operation: Union[str, OperationConstructor]):
        """Decorator form of ``register``."""
        def decorator(fn):
            self.register(operation, fn)
            return fn
        return decorator

    def freeze(self) -> None:
        """Reject any further registration."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def has_handler(self, operation: Union[str, OperationConstructor, Operation]) -> bool:
        return _kind_of(operation) in self._handlers

    def kinds(self) -> List[str]:
        return sorted(self._handlers)

    def get_handler(self, operation: Union[str, OperationConstructor, Operation]) -> OperationHandler:
        """
        Raises:
            OperationHandlerMissingError: No handler is registered for the kind
        """
        kind = _kind_of(operation)
        handler = self._handlers.get(kind)
        if handler is None:
            raise OperationHandlerMissingError(kind)
        return handler

    async def execute(self, operation: Operation[I, O], metaplex: Metaplex) -> O:
        """
        Dispatch an operation to its handler.

        Raises:
            OperationHandlerMissingError: No handler is registered for the kind
            Exception: Whatever the handler raises, unchanged
        """
        handler = self.get_handler(operation)
        logger.debug(f"Executing {operation.kind}")
        return await handler.handle(operation, metaplex)

    def __contains__(self, operation) -> bool:
        return self.has_handler(operation)

    def __len__(self) -> int:
        return len(self._handlers)
