"""Path management utilities for holograph-deployments library."""

import os
from pathlib import Path
from typing import Optional, Union


def get_project_root() -> Path:
    """
    Get the project root directory.

    Returns:
        Path from $HOLOGRAPH_PROJECT_ROOT, or the current working directory
    """
    root = os.environ.get("HOLOGRAPH_PROJECT_ROOT")
    if root:
        return Path(root).absolute()
    return Path.cwd()


def _root(project_root: Optional[Union[Path, str]]) -> Path:
    if project_root is None:
        return get_project_root()
    return Path(project_root).absolute()


def get_combined_json_path(project_root: Optional[Union[Path, str]] = None) -> Path:
    """Path to the solc combined-json build output (build/combined.json)."""
    return _root(project_root) / "build" / "combined.json"


def get_artifacts_dir(project_root: Optional[Union[Path, str]] = None) -> Path:
    """Path to the Hardhat artifacts directory."""
    return _root(project_root) / "artifacts"


def get_networks_path(project_root: Optional[Union[Path, str]] = None) -> Path:
    """Path to the network registry (networks.json)."""
    return _root(project_root) / "networks.json"


def get_address_file_path(
    network: str, contract_name: str, project_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get the file holding a previously deployed contract address.

    Args:
        network: Network name
        contract_name: Contract name
        project_root: Custom project root (defaults to get_project_root())

    Returns:
        Path to data/{network}.{contract_name}.address
    """
    return _root(project_root) / "data" / f"{network}.{contract_name}.address"


def get_deployment_record_path(
    network: str, contract_name: str, project_root: Optional[Union[Path, str]] = None
) -> Path:
    """Path to a hardhat-deploy record, deployments/{network}/{contract_name}.json."""
    return _root(project_root) / "deployments" / network / f"{contract_name}.json"
