"""
Confirmation levels.

Ordered from weakest to strongest durability.
"""

from enum import Enum


class Commitment(str, Enum):
    """Caller-selectable durability threshold for reads and confirmations."""
    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def satisfies(self, required: "Commitment") -> bool:
        """Check whether this observed level meets the required level."""
        return self.rank >= Commitment(required).rank


_RANKS = {
    Commitment.PROCESSED: 0,
    Commitment.CONFIRMED: 1,
    Commitment.FINALIZED: 2,
}
