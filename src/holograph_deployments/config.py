"""Environment configuration for holograph-deployments library."""

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import (
    DEFAULT_GAS_LIMIT_MULTIPLIER,
    LOCAL_NETWORK,
    LOCAL_SAMPLE_TOKEN_ID,
    REMOTE_SAMPLE_TOKEN_ID,
)
from .exceptions import ConfigurationError
from .paths import get_project_root
from .types import DeployConfig, SignerConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Values read from the environment (and .env) for one script run."""

    network: str = LOCAL_NETWORK
    gas_price_gwei: Optional[Decimal] = None
    wallets: List[str] = field(default_factory=list)
    deployment_salt: Optional[str] = None
    genesis_address: Optional[str] = None
    gas_limit: Optional[int] = None
    gas_limit_multiplier: float = DEFAULT_GAS_LIMIT_MULTIPLIER
    sample_token_id: Optional[int] = None
    companion_network: bool = False
    cold_storage_signer: Optional[SignerConfig] = None
    project_root: Path = field(default_factory=get_project_root)

    def deploy_config(self) -> DeployConfig:
        return DeployConfig(
            companion_network=self.companion_network,
            cold_storage_signer=self.cold_storage_signer,
        )

    def require_wallet(self) -> str:
        """
        Get the first wallet private key.

        Raises:
            ConfigurationError: If no wallet is configured
        """
        if not self.wallets:
            raise ConfigurationError("WALLET1 is not set")
        return self.wallets[0]

    def require_salt(self) -> str:
        if not self.deployment_salt:
            raise ConfigurationError("DEPLOYMENT_SALT is not set")
        return self.deployment_salt

    def require_gas_price(self) -> Decimal:
        if self.gas_price_gwei is None:
            raise ConfigurationError("GAS is not set")
        return self.gas_price_gwei

    def sample_token_id_for(self, network: str) -> int:
        """
        Token id queried by the sample mint script.

        SAMPLE_TOKEN_ID wins when set; otherwise 1 on the local network and the
        fixed remote sentinel everywhere else.
        """
        if self.sample_token_id is not None:
            return self.sample_token_id
        if network == LOCAL_NETWORK:
            return LOCAL_SAMPLE_TOKEN_ID
        return REMOTE_SAMPLE_TOKEN_ID


def _parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


def _parse_int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        # Accept decimal or 0x-prefixed hex
        return int(value.strip(), 0)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _parse_cold_storage(env: Mapping[str, str]) -> Optional[SignerConfig]:
    address = env.get("SUPER_COLD_STORAGE_ADDRESS")
    if not address:
        return None

    domain = env.get("SUPER_COLD_STORAGE_DOMAIN")
    authorization = env.get("SUPER_COLD_STORAGE_AUTHORIZATION")
    if not domain or not authorization:
        raise ConfigurationError(
            "SUPER_COLD_STORAGE_ADDRESS requires SUPER_COLD_STORAGE_DOMAIN "
            "and SUPER_COLD_STORAGE_AUTHORIZATION"
        )

    return SignerConfig(
        address=address,
        domain=domain,
        authorization=authorization,
        ca=env.get("SUPER_COLD_STORAGE_CA") or None,
    )


def settings_from_mapping(env: Mapping[str, str]) -> Settings:
    """
    Build Settings from an environment mapping.

    Args:
        env: Mapping of environment variable names to values

    Returns:
        Settings

    Raises:
        ConfigurationError: If a value is malformed
    """
    gas_price_gwei = None
    if env.get("GAS"):
        try:
            gas_price_gwei = Decimal(env["GAS"])
        except InvalidOperation as e:
            raise ConfigurationError(f"GAS must be a number of gwei, got {env['GAS']!r}") from e

    multiplier = DEFAULT_GAS_LIMIT_MULTIPLIER
    if env.get("GAS_LIMIT_MULTIPLIER"):
        try:
            multiplier = float(env["GAS_LIMIT_MULTIPLIER"])
        except ValueError as e:
            raise ConfigurationError(
                f"GAS_LIMIT_MULTIPLIER must be a number, got {env['GAS_LIMIT_MULTIPLIER']!r}"
            ) from e

    wallets = [env[name] for name in ("WALLET1", "WALLET2") if env.get(name)]

    project_root = env.get("HOLOGRAPH_PROJECT_ROOT")

    return Settings(
        network=env.get("NETWORK") or LOCAL_NETWORK,
        gas_price_gwei=gas_price_gwei,
        wallets=wallets,
        deployment_salt=env.get("DEPLOYMENT_SALT") or None,
        genesis_address=env.get("GENESIS_ADDRESS") or None,
        gas_limit=_parse_int("GAS_LIMIT", env.get("GAS_LIMIT")),
        gas_limit_multiplier=multiplier,
        sample_token_id=_parse_int("SAMPLE_TOKEN_ID", env.get("SAMPLE_TOKEN_ID")),
        companion_network=_parse_bool(env.get("COMPANION_NETWORK")),
        cold_storage_signer=_parse_cold_storage(env),
        project_root=Path(project_root).absolute() if project_root else get_project_root(),
    )


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Load settings from the process environment.

    Values in a .env file are loaded first without overriding variables that
    are already set.

    Args:
        dotenv_path: Explicit .env file (defaults to searching from the cwd)

    Returns:
        Settings
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)
    return settings_from_mapping(os.environ)
