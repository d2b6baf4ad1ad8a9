"""Transaction signers: local private keys and the remote cold storage service."""

import logging
from typing import Any, Dict, Optional, Union

import requests
from eth_account import Account
from eth_utils import is_address, to_bytes, to_checksum_address, to_hex

from .config import Settings
from .exceptions import ConfigurationError, SignerError
from .types import DeployConfig, SignerConfig

logger = logging.getLogger(__name__)


class LocalSigner:
    """Signs transactions in-process with a private key."""

    def __init__(self, private_key: str):
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid wallet private key: {e}") from e

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        signed = self._account.sign_transaction(transaction)
        return bytes(signed.raw_transaction)


def _serialize_transaction(transaction: Dict[str, Any]) -> Dict[str, Any]:
    serialized: Dict[str, Any] = {}
    for key, value in transaction.items():
        if isinstance(value, (bytes, bytearray)):
            serialized[key] = to_hex(value)
        else:
            serialized[key] = value
    return serialized


class ColdStorageSigner:
    """
    Signs transactions through a remote cold storage signing service.

    The private key never leaves the service: the unsigned transaction is
    posted over HTTPS with a bearer token and the signed raw transaction is
    returned.
    """

    def __init__(
        self,
        address: str,
        endpoint: str,
        authorization: str,
        ca: Optional[str] = None,
        timeout: int = 30,
    ):
        if not is_address(address):
            raise ConfigurationError(f"Invalid cold storage signer address: {address!r}")
        self._address = to_checksum_address(address)
        self.endpoint = endpoint.rstrip("/")
        self._authorization = authorization
        self._verify: Union[str, bool] = ca if ca else True
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: SignerConfig) -> "ColdStorageSigner":
        return cls(config.address, config.endpoint, config.authorization, config.ca)

    @property
    def address(self) -> str:
        return self._address

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        """
        Ask the remote service to sign a transaction.

        Args:
            transaction: Unsigned transaction dictionary

        Returns:
            Raw signed transaction bytes

        Raises:
            SignerError: On HTTP errors, service errors or network failures
        """
        try:
            response = requests.post(
                f"{self.endpoint}/sign",
                json={
                    "address": self._address,
                    "transaction": _serialize_transaction(transaction),
                },
                headers={"Authorization": f"Bearer {self._authorization}"},
                verify=self._verify,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SignerError(f"Network error while contacting cold storage signer: {e}") from e

        if response.status_code != 200:
            raise SignerError(
                f"Cold storage signer request failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise SignerError(f"Cold storage signer returned a non-JSON response: {e}") from e

        if "error" in result:
            raise SignerError(f"Cold storage signer error: {result['error']}")

        try:
            return to_bytes(hexstr=result["signedTransaction"])
        except (KeyError, TypeError, ValueError) as e:
            raise SignerError(f"Malformed cold storage signer response: {result!r}") from e


Signer = Union[LocalSigner, ColdStorageSigner]


def resolve_signer(settings: Settings, deploy_config: Optional[DeployConfig] = None) -> Signer:
    """
    Pick the signer used for every transaction of one run.

    Args:
        settings: Loaded settings
        deploy_config: Per-run switches (defaults to settings.deploy_config())

    Returns:
        ColdStorageSigner when configured, otherwise a LocalSigner for WALLET1

    Raises:
        ConfigurationError: If neither signer can be built
    """
    if deploy_config is None:
        deploy_config = settings.deploy_config()

    if deploy_config.cold_storage_signer is not None:
        config = deploy_config.cold_storage_signer
        logger.info("Using cold storage signer %s at %s", config.address, config.endpoint)
        return ColdStorageSigner.from_config(config)

    return LocalSigner(settings.require_wallet())
