"""Idempotent deployment of contracts at deterministic addresses."""

import logging
from dataclasses import dataclass
from typing import Optional

from eth_utils import to_hex
from web3 import Web3

from .address import genesis_derive_future_address
from .artifacts import ArtifactStore
from .config import Settings
from .constants import HOLOGRAPH_GENESIS
from .genesis import GasSettings, GenesisDeployer
from .networks import NetworkRegistry
from .parsers import parse_hardhat_deployment
from .paths import (
    get_artifacts_dir,
    get_combined_json_path,
    get_deployment_record_path,
    get_networks_path,
)
from .prober import is_deployed
from .signers import Signer, resolve_signer
from .types import ContractDescriptor, DeployConfig, DeploymentResult, NetworkInfo

logger = logging.getLogger(__name__)


@dataclass
class DeployContext:
    """Everything a deploy task needs for one run against one network."""

    w3: Web3
    network: NetworkInfo
    signer: Signer
    salt: str
    genesis_address: str
    artifacts: ArtifactStore
    deployer: GenesisDeployer

    @property
    def deployer_address(self) -> str:
        return self.signer.address


def resolve_genesis_address(settings: Settings, network: str) -> str:
    """
    Find the genesis factory address.

    GENESIS_ADDRESS wins; otherwise the hardhat-deploy record written by the
    genesis stage (deployments/{network}/HolographGenesis.json) is used.

    Raises:
        ContractNotFoundError: If neither source provides an address
    """
    if settings.genesis_address:
        return settings.genesis_address
    record = parse_hardhat_deployment(
        get_deployment_record_path(network, HOLOGRAPH_GENESIS, settings.project_root)
    )
    return record["address"]


def build_deploy_context(
    settings: Settings,
    deploy_config: Optional[DeployConfig] = None,
    network: Optional[str] = None,
    w3: Optional[Web3] = None,
) -> DeployContext:
    """
    Connect to the target network and resolve the signer for a deploy run.

    Args:
        settings: Loaded settings
        deploy_config: Per-run switches (defaults to settings.deploy_config())
        network: Network name (defaults to settings.network)
        w3: Pre-built Web3 instance (defaults to an HTTP provider for the network)

    Returns:
        DeployContext

    Raises:
        NetworkNotFoundError: If the network (or its companion) is unknown
        ConfigurationError: If salt or wallet settings are missing
    """
    if deploy_config is None:
        deploy_config = settings.deploy_config()

    registry = NetworkRegistry(get_networks_path(settings.project_root))
    network_name = network or settings.network
    if deploy_config.companion_network:
        network_info = registry.companion_of(network_name)
        logger.info("Deploying to companion network %s of %s", network_info.name, network_name)
    else:
        network_info = registry.network_info(network_name)

    salt = settings.require_salt()
    signer = resolve_signer(settings, deploy_config)
    genesis_address = resolve_genesis_address(settings, network_info.name)

    artifacts_path = get_combined_json_path(settings.project_root)
    if not artifacts_path.exists():
        artifacts_path = get_artifacts_dir(settings.project_root)
    artifacts = ArtifactStore(artifacts_path)

    if w3 is None:
        w3 = Web3(Web3.HTTPProvider(network_info.rpc))

    gas = GasSettings(
        gas_price_gwei=settings.gas_price_gwei,
        gas_limit=settings.gas_limit,
        gas_limit_multiplier=settings.gas_limit_multiplier,
    )

    return DeployContext(
        w3=w3,
        network=network_info,
        signer=signer,
        salt=salt,
        genesis_address=genesis_address,
        artifacts=artifacts,
        deployer=GenesisDeployer(w3, signer, genesis_address, network_info.chain_id, gas),
    )


def deploy_contract(context: DeployContext, descriptor: ContractDescriptor) -> DeploymentResult:
    """
    Deploy a contract unless bytecode already exists at its derived address.

    Args:
        context: Deploy context
        descriptor: Contract name and init parameters

    Returns:
        DeploymentResult; deployed is False when nothing was sent
    """
    name = descriptor.name
    bytecode = context.artifacts.bytecode(name)
    init_code = descriptor.init_code()

    future_address = genesis_derive_future_address(
        context.genesis_address,
        context.deployer_address,
        context.salt,
        bytecode,
        init_code,
    )
    logger.info('the future "%s" address is %s', name, future_address)

    if is_deployed(context.w3, future_address):
        logger.info('"%s" is already deployed.', name)
        return DeploymentResult(name=name, address=future_address, deployed=False)

    logger.info('"%s" bytecode not found, need to deploy', name)
    receipt = context.deployer.deploy(context.salt, name, bytecode, init_code, future_address)
    return DeploymentResult(
        name=name,
        address=future_address,
        deployed=True,
        transaction_hash=to_hex(receipt["transactionHash"]),
    )
