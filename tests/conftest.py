"""
Test bootstrap:
- Make tests/helpers importable as ``helpers``
- Provide deterministic keypairs, an in-memory ledger and a client
"""
import pathlib
import sys

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from metaplex_client import InMemoryConnection, Keypair, Metaplex


@pytest.fixture
def identity():
    """Deterministic identity keypair, also the default fee payer."""
    return Keypair.from_seed("identity")


@pytest.fixture
def other_keypair():
    return Keypair.from_seed("other")


@pytest.fixture
def connection():
    """Fresh in-memory ledger confirming transactions as finalized."""
    return InMemoryConnection()


@pytest.fixture
def metaplex(connection, identity):
    """Client with the core plugins installed on the in-memory ledger."""
    return Metaplex.make(connection, identity)
