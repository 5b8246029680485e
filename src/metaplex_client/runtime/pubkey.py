"""
PublicKey Pydantic custom type for ledger addresses.

Addresses are 32-byte Ed25519 public keys rendered as base58 strings.
Program derived addresses are deliberately off the curve.
"""

from __future__ import annotations
import hashlib
from typing import Any, Iterable, Tuple, Union

import base58
from nacl.bindings import crypto_core_ed25519_is_valid_point
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .errors import InvalidPublicKeyError

PUBLIC_KEY_LENGTH = 32
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16
PDA_MARKER = b"ProgramDerivedAddress"


class PublicKey:
    """Custom Pydantic type for 32-byte account addresses."""

    __slots__ = ("_key",)

    def __init__(self, value: Union[str, bytes, bytearray, "PublicKey"]):
        if isinstance(value, PublicKey):
            key = value.to_bytes()
        elif isinstance(value, (bytes, bytearray)):
            key = bytes(value)
        elif isinstance(value, str):
            try:
                key = base58.b58decode(value)
            except ValueError as e:
                raise InvalidPublicKeyError(value, e)
        else:
            raise InvalidPublicKeyError(value)

        if len(key) != PUBLIC_KEY_LENGTH:
            raise InvalidPublicKeyError(value)
        self._key = key

    @classmethod
    def default(cls) -> PublicKey:
        """The all-zero key (system program id)."""
        return cls(bytes(PUBLIC_KEY_LENGTH))

    def to_bytes(self) -> bytes:
        return self._key

    def to_base58(self) -> str:
        return base58.b58encode(self._key).decode("ascii")

    def is_on_curve(self) -> bool:
        """Check whether the key is a valid Ed25519 curve point."""
        return bool(crypto_core_ed25519_is_valid_point(self._key))

    def __bytes__(self) -> bytes:
        return self._key

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PublicKey('{self.to_base58()}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PublicKey):
            return self._key == other._key
        elif isinstance(other, str):
            return self.to_base58() == other
        return False

    def __hash__(self) -> int:
        return hash(self._key)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates the PublicKey."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> PublicKey:
        """Validate and convert the input to a PublicKey."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except InvalidPublicKeyError as e:
            raise ValueError(str(e)) from e

    # =========================================================================
    # Program derived addresses
    # =========================================================================

    @classmethod
    def create_program_address(cls, seeds: Iterable[bytes], program_id: PublicKey) -> PublicKey:
        """
        Derive an address from seeds and a program id.

        Raises:
            ValueError: If a seed is too long or the result lies on the curve
        """
        seeds = list(seeds)
        if len(seeds) > MAX_SEEDS:
            raise ValueError(f"At most {MAX_SEEDS} seeds are allowed, got {len(seeds)}")

        hasher = hashlib.sha256()
        for seed in seeds:
            if len(seed) > MAX_SEED_LENGTH:
                raise ValueError(f"Seed exceeds {MAX_SEED_LENGTH} bytes: {seed!r}")
            hasher.update(seed)
        hasher.update(program_id.to_bytes())
        hasher.update(PDA_MARKER)

        address = cls(hasher.digest())
        if address.is_on_curve():
            raise ValueError("Derived address lies on the ed25519 curve")
        return address

    @classmethod
    def find_program_address(cls, seeds: Iterable[bytes], program_id: PublicKey) -> Tuple[PublicKey, int]:
        """
        Find the first valid program address, searching bumps from 255 down.

        Returns:
            Tuple of (address, bump)
        """
        seeds = list(seeds)
        if any(len(seed) > MAX_SEED_LENGTH for seed in seeds):
            raise ValueError(f"Seeds must be at most {MAX_SEED_LENGTH} bytes")
        for bump in range(255, -1, -1):
            try:
                return cls.create_program_address([*seeds, bytes([bump])], program_id), bump
            except ValueError:
                continue
        raise ValueError("Unable to find a viable program address bump seed")


def to_public_key(value: Union[str, bytes, PublicKey]) -> PublicKey:
    """Coerce a base58 string, raw bytes or key into a PublicKey."""
    return value if isinstance(value, PublicKey) else PublicKey(value)
