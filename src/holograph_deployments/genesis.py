"""Deployments through the genesis factory contract."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_bytes, to_checksum_address, to_hex, to_wei
from web3 import Web3
from web3.types import TxReceipt

from .address import genesis_salt_hash
from .constants import DEFAULT_GAS_LIMIT_MULTIPLIER, GENESIS_DEPLOY_SIGNATURE, GENESIS_DEPLOY_TYPES
from .exceptions import DeploymentVerificationError, TransactionFailedError
from .prober import is_deployed
from .signers import Signer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GasSettings:
    """Gas pricing for deploy transactions."""

    gas_price_gwei: Optional[Decimal] = None  # None: ask the node
    gas_limit: Optional[int] = None  # None: estimate
    gas_limit_multiplier: float = DEFAULT_GAS_LIMIT_MULTIPLIER


def get_gas_price(w3: Web3, gas: GasSettings) -> int:
    """Gas price in wei: the configured gwei value, or the node's current price."""
    if gas.gas_price_gwei is not None:
        return int(to_wei(gas.gas_price_gwei, "gwei"))
    return int(w3.eth.gas_price)


def get_gas_limit(w3: Web3, transaction: Dict[str, Any], gas: GasSettings) -> int:
    """Gas limit: the configured value, or the node's estimate times the multiplier."""
    if gas.gas_limit is not None:
        return gas.gas_limit
    estimate = w3.eth.estimate_gas(transaction)
    return int(estimate * gas.gas_limit_multiplier)


def encode_genesis_deploy(
    chain_id: int,
    salt: Union[bytes, str],
    bytecode: Union[bytes, str],
    init_code: bytes,
) -> bytes:
    """
    Build calldata for deploy(uint256 chainId, bytes12 saltHash, bytes sourceCode, bytes initCode).
    """
    if isinstance(bytecode, str):
        bytecode = to_bytes(hexstr=bytecode)
    selector = function_signature_to_4byte_selector(GENESIS_DEPLOY_SIGNATURE)
    arguments = encode(
        GENESIS_DEPLOY_TYPES,
        [chain_id, genesis_salt_hash(salt), bytecode, init_code],
    )
    return selector + arguments


class GenesisDeployer:
    """Submits deploy transactions to the genesis factory and waits for them."""

    def __init__(
        self,
        w3: Web3,
        signer: Signer,
        genesis_address: str,
        chain_id: int,
        gas: Optional[GasSettings] = None,
    ):
        self.w3 = w3
        self.signer = signer
        self.genesis_address = to_checksum_address(genesis_address)
        self.chain_id = chain_id
        self.gas = gas or GasSettings()

    def build_transaction(self, data: bytes) -> Dict[str, Any]:
        transaction: Dict[str, Any] = {
            "from": self.signer.address,
            "to": self.genesis_address,
            "data": to_hex(data),
            "value": 0,
            "nonce": self.w3.eth.get_transaction_count(self.signer.address),
            "gasPrice": get_gas_price(self.w3, self.gas),
            "chainId": self.chain_id,
        }
        transaction["gas"] = get_gas_limit(self.w3, transaction, self.gas)
        return transaction

    def deploy(
        self,
        salt: Union[bytes, str],
        contract_name: str,
        bytecode: Union[bytes, str],
        init_code: bytes,
        future_address: str,
    ) -> TxReceipt:
        """
        Deploy a contract at its derived address.

        Errors from the node or the signer are not caught.

        Args:
            salt: Deployment salt
            contract_name: Name used in log output
            bytecode: Contract creation bytecode
            init_code: Payload passed to the contract's init(bytes)
            future_address: Address derived for this contract

        Returns:
            Transaction receipt

        Raises:
            TransactionFailedError: If the transaction reverted
            DeploymentVerificationError: If no code exists at future_address afterwards
        """
        data = encode_genesis_deploy(self.chain_id, salt, bytecode, init_code)
        transaction = self.build_transaction(data)

        raw = self.signer.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(raw)
        logger.info('Deploying "%s" in transaction %s', contract_name, to_hex(tx_hash))

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt["status"] != 1:
            raise TransactionFailedError(
                f'Deployment of "{contract_name}" failed in transaction {to_hex(tx_hash)}',
                receipt=receipt,
            )

        if not is_deployed(self.w3, future_address):
            raise DeploymentVerificationError(
                f'"{contract_name}" bytecode not found at {future_address} '
                f"after transaction {to_hex(tx_hash)}"
            )

        logger.info('Deployed "%s" at %s', contract_name, future_address)
        return receipt
