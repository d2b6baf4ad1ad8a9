"""Network registry for holograph-deployments library."""

import json
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import ConfigurationError, NetworkNotFoundError
from .paths import get_networks_path
from .types import NetworkInfo


class NetworkRegistry:
    """Maps network names to RPC endpoints and chain ids (networks.json)."""

    def __init__(self, networks_json_path: Optional[Union[Path, str]] = None):
        """
        Load the network registry.

        Args:
            networks_json_path: Path to networks.json.
                                If None, uses networks.json in the project root.

        Raises:
            ConfigurationError: If the registry file is missing
        """
        if networks_json_path is None:
            networks_json_path = get_networks_path()

        path = Path(networks_json_path)
        if not path.exists():
            raise ConfigurationError(f"Network registry not found at {path}")

        with open(path, encoding="utf-8") as f:
            self._networks = json.load(f)

    def has_network(self, network: str) -> bool:
        return network in self._networks

    def names(self) -> List[str]:
        return sorted(self._networks.keys())

    def network_info(self, network: str) -> NetworkInfo:
        """
        Get a network's RPC endpoint and chain id.

        Args:
            network: Network name

        Returns:
            NetworkInfo

        Raises:
            NetworkNotFoundError: If network not in registry
        """
        if not self.has_network(network):
            raise NetworkNotFoundError(
                f"Network '{network}' not found in registry "
                f"(available: {', '.join(self.names()) or 'none'})"
            )

        data = self._networks[network]
        try:
            return NetworkInfo(
                name=network,
                rpc=data["rpc"],
                chain_id=int(data["chain"]),
                companion=data.get("companion"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Malformed registry entry for '{network}': {e}") from e

    def companion_of(self, network: str) -> NetworkInfo:
        """
        Get the companion network paired with a network.

        Raises:
            NetworkNotFoundError: If either network is unknown or no companion is set
        """
        info = self.network_info(network)
        if not info.companion:
            raise NetworkNotFoundError(f"Network '{network}' has no companion network")
        return self.network_info(info.companion)
