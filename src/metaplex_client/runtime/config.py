"""
Client configuration.

Resolves well-known cluster names to RPC endpoints and reads overrides
from the environment.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from .commitment import Commitment

CLUSTER_ENDPOINTS: Dict[str, str] = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "localnet": "http://127.0.0.1:8899",
}

ENV_ENDPOINT = "METAPLEX_RPC_ENDPOINT"
ENV_COMMITMENT = "METAPLEX_COMMITMENT"
ENV_TIMEOUT = "METAPLEX_TIMEOUT"
ENV_CONFIRM_TIMEOUT = "METAPLEX_CONFIRM_TIMEOUT"
ENV_DEBUG = "METAPLEX_DEBUG"


@dataclass
class ClientConfig:
    """
    Configuration for the Metaplex client.

    ``timeout`` bounds each HTTP request; ``confirm_timeout`` is the default
    deadline for waiting on a transaction's confirmation.
    """

    endpoint: str = "devnet"
    timeout: float = 30.0
    commitment: Commitment = Commitment.CONFIRMED
    confirm_timeout: float = 60.0
    debug: bool = False
    user_agent: str = "metaplex-client-python/0.1.0"

    def __post_init__(self):
        self.commitment = Commitment(self.commitment)

    @property
    def rpc_url(self) -> str:
        """Resolve cluster aliases to a concrete RPC URL."""
        return CLUSTER_ENDPOINTS.get(self.endpoint.lower(), self.endpoint)

    def configure_logging(self) -> None:
        """Raise the package logger to DEBUG when debug is enabled."""
        if self.debug:
            logging.getLogger("metaplex_client").setLevel(logging.DEBUG)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Build a config from METAPLEX_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls()
        if env.get(ENV_ENDPOINT):
            config.endpoint = env[ENV_ENDPOINT]
        if env.get(ENV_COMMITMENT):
            config.commitment = Commitment(env[ENV_COMMITMENT].lower())
        if env.get(ENV_TIMEOUT):
            config.timeout = float(env[ENV_TIMEOUT])
        if env.get(ENV_CONFIRM_TIMEOUT):
            config.confirm_timeout = float(env[ENV_CONFIRM_TIMEOUT])
        if env.get(ENV_DEBUG):
            config.debug = env[ENV_DEBUG].lower() in ("1", "true", "yes", "on")
        return config
