"""Data types and dataclasses for holograph-deployments library."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .encoding import generate_init_code


@dataclass(frozen=True)
class NetworkInfo:
    """An entry of the network registry (networks.json)."""

    name: str  # e.g. "local", "goerli"
    rpc: str  # JSON-RPC endpoint URL
    chain_id: int
    companion: Optional[str] = None  # Paired network for companion deploys


@dataclass(frozen=True)
class SignerConfig:
    """Connection details of a remote cold storage signer."""

    address: str  # Account the remote service signs for
    domain: str  # Host name, https:// is prepended
    authorization: str  # Bearer token
    ca: Optional[str] = None  # Path to CA bundle used to verify TLS

    @property
    def endpoint(self) -> str:
        if self.domain.startswith("https://"):
            return self.domain.rstrip("/")
        return "https://" + self.domain.rstrip("/")


@dataclass(frozen=True)
class DeployConfig:
    """Per-run switches for the deploy tasks."""

    companion_network: bool = False
    cold_storage_signer: Optional[SignerConfig] = None


@dataclass(frozen=True)
class ContractDescriptor:
    """
    A contract to deploy through the genesis factory.

    The same descriptor is used to derive the future address and to build the
    deployment payload, so the two can never disagree.
    """

    name: str  # Artifact name, e.g. "HolographERC721"
    init_types: List[str] = field(default_factory=list)
    init_values: List[Any] = field(default_factory=list)

    def init_code(self) -> bytes:
        return generate_init_code(self.init_types, self.init_values)


@dataclass
class DeploymentResult:
    """Outcome of deploying a single contract."""

    name: str
    address: str  # Checksummed future address
    deployed: bool  # True if a transaction was sent during this run
    transaction_hash: Optional[str] = None
