"""
holograph-deployments: deterministic deployment of Holograph ERC-721 contracts
"""

from importlib.metadata import PackageNotFoundError, version

from .address import derive_genesis_salt, genesis_derive_future_address
from .artifacts import ArtifactStore, merge_abis
from .config import Settings, load_settings
from .deploy import DeployContext, build_deploy_context, deploy_contract
from .encoding import HolographERC721Event, configure_events, generate_init_code
from .exceptions import (
    AddressFileNotFoundError,
    ArtifactNotFoundError,
    ConfigurationError,
    ContractNotFoundError,
    DeploymentError,
    DeploymentVerificationError,
    EncodingError,
    NetworkNotFoundError,
    SignerError,
    TransactionFailedError,
)
from .genesis import GasSettings, GenesisDeployer
from .mint import run_sample_mint
from .networks import NetworkRegistry
from .prober import get_deployed_code, is_empty_code
from .signers import ColdStorageSigner, LocalSigner, resolve_signer
from .tasks import TASKS, DeployTask, run_tags
from .types import ContractDescriptor, DeployConfig, DeploymentResult, NetworkInfo, SignerConfig

try:
    __version__ = version("holograph-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "ArtifactStore",
    "ColdStorageSigner",
    "ContractDescriptor",
    "DeployConfig",
    "DeployContext",
    "DeployTask",
    "DeploymentResult",
    "GasSettings",
    "GenesisDeployer",
    "HolographERC721Event",
    "LocalSigner",
    "NetworkInfo",
    "NetworkRegistry",
    "Settings",
    "SignerConfig",
    "TASKS",
    "build_deploy_context",
    "configure_events",
    "deploy_contract",
    "derive_genesis_salt",
    "generate_init_code",
    "genesis_derive_future_address",
    "get_deployed_code",
    "is_empty_code",
    "load_settings",
    "merge_abis",
    "resolve_signer",
    "run_sample_mint",
    "run_tags",
    "DeploymentError",
    "AddressFileNotFoundError",
    "ArtifactNotFoundError",
    "ConfigurationError",
    "ContractNotFoundError",
    "DeploymentVerificationError",
    "EncodingError",
    "NetworkNotFoundError",
    "SignerError",
    "TransactionFailedError",
]
