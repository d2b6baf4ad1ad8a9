"""Shared pytest fixtures for holograph-deployments tests."""

import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from eth_utils import keccak, to_checksum_address

from holograph_deployments.config import Settings

# Well-known throwaway keys, never funded on a public network
WALLET1 = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
WALLET2 = "0x6c3699283bda56ad74f6b855546325b68d482e983852a7a82979cc4807b641f4"

DEPLOYMENT_SALT = "0x000000000000000000000000000000000000000000000000000000000000001f"


class FakeEth:
    """In-memory stand-in for w3.eth covering the calls the deploy flow makes."""

    def __init__(self):
        self.code: Dict[str, bytes] = {}
        self.sent: List[bytes] = []
        self.get_code_calls: List[str] = []
        self.estimate_calls: List[Dict[str, Any]] = []
        self.receipt_status = 1
        self.gas_price = 2_000_000_000
        self.nonce = 0
        # When True, a sent transaction places code at the last probed address
        self.deploy_on_send = True
        self.send_error: Optional[Exception] = None

    def get_code(self, address: str, block_identifier: str = "latest") -> bytes:
        self.get_code_calls.append(address)
        return self.code.get(to_checksum_address(address), b"")

    def get_transaction_count(self, address: str) -> int:
        return self.nonce

    def estimate_gas(self, transaction: Dict[str, Any]) -> int:
        self.estimate_calls.append(transaction)
        return 100_000

    def send_raw_transaction(self, raw: bytes) -> bytes:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(raw)
        self.nonce += 1
        if self.deploy_on_send and self.receipt_status == 1 and self.get_code_calls:
            self.code[to_checksum_address(self.get_code_calls[-1])] = b"\x60\x80"
        return keccak(raw)

    def wait_for_transaction_receipt(self, tx_hash: bytes) -> Dict[str, Any]:
        return {"status": self.receipt_status, "transactionHash": tx_hash}


class FakeWeb3:
    def __init__(self):
        self.eth = FakeEth()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def combined_json_sample(fixtures_dir: Path) -> Path:
    """Return path to sample solc combined-json output."""
    return fixtures_dir / "combined.json"


@pytest.fixture
def hardhat_artifacts_sample(fixtures_dir: Path) -> Path:
    """Return path to sample Hardhat artifacts directory."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def genesis_record_sample(fixtures_dir: Path) -> Path:
    """Return path to sample hardhat-deploy record of the genesis factory."""
    return fixtures_dir / "deployments" / "local" / "HolographGenesis.json"


@pytest.fixture
def project_root(tmp_path: Path, fixtures_dir: Path) -> Path:
    """Create a project layout with build artifacts, registry and deployment records."""
    root = tmp_path / "project"
    (root / "build").mkdir(parents=True)
    shutil.copy(fixtures_dir / "combined.json", root / "build" / "combined.json")
    shutil.copy(fixtures_dir / "networks.json", root / "networks.json")
    shutil.copytree(fixtures_dir / "deployments", root / "deployments")

    data_dir = root / "data"
    data_dir.mkdir()
    (data_dir / "local.SampleERC721.address").write_text(
        "0x5fbdb2315678afecb367f032d93f642f64180aa3\n"
    )
    return root


@pytest.fixture
def settings(project_root: Path) -> Settings:
    """Settings for the local network rooted at the temporary project."""
    return Settings(
        network="local",
        gas_price_gwei=None,
        wallets=[WALLET1, WALLET2],
        deployment_salt=DEPLOYMENT_SALT,
        project_root=project_root,
    )


@pytest.fixture
def fake_w3() -> FakeWeb3:
    """Fresh in-memory chain."""
    return FakeWeb3()
