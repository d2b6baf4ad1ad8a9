"""Unit tests for the genesis factory deployer."""

from decimal import Decimal

import pytest
from eth_abi import decode
from eth_account import Account
from eth_utils import function_signature_to_4byte_selector, to_bytes, to_checksum_address

from conftest import WALLET1
from holograph_deployments.address import genesis_derive_future_address
from holograph_deployments.exceptions import DeploymentVerificationError, TransactionFailedError
from holograph_deployments.genesis import (
    GasSettings,
    GenesisDeployer,
    encode_genesis_deploy,
    get_gas_limit,
    get_gas_price,
)
from holograph_deployments.signers import LocalSigner

GENESIS = "0x4c3ba951a7ea09b5bb57230f63a89d36a07b2992"
BYTECODE = "0x608060405234801561001057600080fd5b50"
SALT = "0x" + "ab" * 20 + "cd" * 12


@pytest.fixture
def signer() -> LocalSigner:
    return LocalSigner(WALLET1)


@pytest.fixture
def deployer(fake_w3, signer) -> GenesisDeployer:
    return GenesisDeployer(fake_w3, signer, GENESIS, chain_id=1338)


def _probe(fake_w3, address: str) -> None:
    # deploy_contract probes before deploying; mirror that for the fake chain
    fake_w3.eth.get_code(address)


class TestEncodeGenesisDeploy:
    """Test the encode_genesis_deploy function."""

    def test_calldata_layout(self):
        """Test selector and arguments of deploy(uint256,bytes12,bytes,bytes)."""
        data = encode_genesis_deploy(1338, SALT, BYTECODE, b"\x01\x02")

        assert data[:4] == function_signature_to_4byte_selector("deploy(uint256,bytes12,bytes,bytes)")
        chain_id, salt_hash, source_code, init_code = decode(
            ["uint256", "bytes12", "bytes", "bytes"], data[4:]
        )
        assert chain_id == 1338
        assert salt_hash == b"\xcd" * 12
        assert source_code == to_bytes(hexstr=BYTECODE)
        assert init_code == b"\x01\x02"


class TestGasHelpers:
    """Test gas price and gas limit selection."""

    def test_configured_gas_price(self, fake_w3):
        assert get_gas_price(fake_w3, GasSettings(gas_price_gwei=Decimal("1.5"))) == 1_500_000_000

    def test_node_gas_price(self, fake_w3):
        assert get_gas_price(fake_w3, GasSettings()) == fake_w3.eth.gas_price

    def test_configured_gas_limit_skips_estimate(self, fake_w3):
        assert get_gas_limit(fake_w3, {}, GasSettings(gas_limit=5_000_000)) == 5_000_000
        assert fake_w3.eth.estimate_calls == []

    def test_estimated_gas_limit_uses_multiplier(self, fake_w3):
        assert get_gas_limit(fake_w3, {}, GasSettings(gas_limit_multiplier=1.5)) == 150_000


class TestGenesisDeployer:
    """Test GenesisDeployer.deploy."""

    def test_builds_transaction_to_genesis(self, deployer: GenesisDeployer, signer: LocalSigner):
        transaction = deployer.build_transaction(b"\x00")

        assert transaction["to"] == to_checksum_address(GENESIS)
        assert transaction["from"] == signer.address
        assert transaction["chainId"] == 1338
        assert transaction["gas"] == 130_000
        assert transaction["data"] == "0x00"

    def test_deploys_and_returns_receipt(self, fake_w3, deployer: GenesisDeployer, signer):
        future = genesis_derive_future_address(GENESIS, signer.address, SALT, BYTECODE)
        _probe(fake_w3, future)

        receipt = deployer.deploy(SALT, "HolographERC721", BYTECODE, b"", future)

        assert receipt["status"] == 1
        assert len(fake_w3.eth.sent) == 1
        assert Account.recover_transaction(fake_w3.eth.sent[0]) == signer.address

    def test_reverted_transaction_raises(self, fake_w3, deployer: GenesisDeployer, signer):
        """Test that a failed receipt raises TransactionFailedError with the receipt."""
        fake_w3.eth.receipt_status = 0
        future = genesis_derive_future_address(GENESIS, signer.address, SALT, BYTECODE)
        _probe(fake_w3, future)

        with pytest.raises(TransactionFailedError) as exc_info:
            deployer.deploy(SALT, "HolographERC721", BYTECODE, b"", future)

        assert exc_info.value.receipt["status"] == 0

    def test_missing_code_after_deploy_raises(self, fake_w3, deployer: GenesisDeployer, signer):
        """Test that a mined transaction without code at the address is detected."""
        fake_w3.eth.deploy_on_send = False
        future = genesis_derive_future_address(GENESIS, signer.address, SALT, BYTECODE)

        with pytest.raises(DeploymentVerificationError):
            deployer.deploy(SALT, "HolographERC721", BYTECODE, b"", future)

    def test_send_errors_propagate(self, fake_w3, deployer: GenesisDeployer, signer):
        """Test that node errors are not caught."""
        fake_w3.eth.send_error = ConnectionError("node unavailable")
        future = genesis_derive_future_address(GENESIS, signer.address, SALT, BYTECODE)

        with pytest.raises(ConnectionError):
            deployer.deploy(SALT, "HolographERC721", BYTECODE, b"", future)
