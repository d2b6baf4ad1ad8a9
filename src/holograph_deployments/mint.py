"""Mint a sample token on a deployed SampleERC721 and print what the chain reports."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, NoReturn, Optional, TextIO

import requests
from eth_utils import is_address, to_checksum_address, to_wei
from web3 import Web3
from web3.exceptions import Web3Exception

from .artifacts import ArtifactStore, merge_abis
from .config import Settings
from .constants import HOLOGRAPH_ERC721, HOLOGRAPHER, SAMPLE_ERC721, SAMPLE_MINT_GAS, SAMPLE_TOKEN_URI
from .exceptions import AddressFileNotFoundError
from .networks import NetworkRegistry
from .paths import get_address_file_path, get_combined_json_path, get_networks_path
from .signers import LocalSigner

logger = logging.getLogger(__name__)

# Errors raised by web3 calls, transports and local signing
CALL_ERRORS = (Web3Exception, requests.RequestException, ValueError)


def read_address_file(path: Path) -> str:
    """
    Read a contract address recorded on disk.

    Raises:
        AddressFileNotFoundError: If the file is missing, empty or not an address
    """
    try:
        address = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError as e:
        raise AddressFileNotFoundError(f"Contract address file not found at {path}") from e
    if not address:
        raise AddressFileNotFoundError(f"Contract address file is empty: {path}")
    if not is_address(address):
        raise AddressFileNotFoundError(f"Contract address file {path} holds no address: {address!r}")
    return to_checksum_address(address)


def _abort(message: str, err: TextIO) -> NoReturn:
    err.write(message + "\n")
    err.flush()
    raise SystemExit(1)


def _minted_token_id(contract: Any, receipt: Any) -> Optional[int]:
    for event in contract.events.Transfer().process_receipt(receipt):
        args = event["args"]
        if "_tokenId" in args:
            return args["_tokenId"]
        if "tokenId" in args:
            return args["tokenId"]
    return None


def run_sample_mint(
    settings: Settings,
    w3_factory: Optional[Callable[[str], Web3]] = None,
    out: TextIO = sys.stdout,
    err: TextIO = sys.stderr,
) -> int:
    """
    Mint a token to the first wallet, then query tokenURI, exists and ownerOf.

    Every failed transaction or call is written to err and ends the process
    with status 1; nothing after the failure runs.

    Args:
        settings: Loaded settings (network, wallets, gas price)
        w3_factory: Builds a Web3 instance for an RPC URL
        out: Stream for results
        err: Stream for errors

    Returns:
        0 on success

    Raises:
        NetworkNotFoundError: If the network is not in the registry
        ArtifactNotFoundError, ContractNotFoundError: If ABIs cannot be loaded
        AddressFileNotFoundError: If the SampleERC721 address was not recorded
        ConfigurationError: If WALLET1 or GAS is missing or malformed
        SystemExit: With status 1 when a transaction or call fails
    """
    root = settings.project_root
    network = NetworkRegistry(get_networks_path(root)).network_info(settings.network)

    artifacts = ArtifactStore(get_combined_json_path(root))
    abi = merge_abis(
        artifacts.abi(SAMPLE_ERC721),
        artifacts.abi(HOLOGRAPHER),
        artifacts.abi(HOLOGRAPH_ERC721),
    )
    contract_address = read_address_file(get_address_file_path(network.name, SAMPLE_ERC721, root))

    signer = LocalSigner(settings.require_wallet())
    gas_price = to_wei(settings.require_gas_price(), "gwei")

    if w3_factory is None:
        w3_factory = lambda rpc: Web3(Web3.HTTPProvider(rpc))  # noqa: E731
    w3 = w3_factory(network.rpc)

    contract = w3.eth.contract(address=contract_address, abi=abi)
    logger.debug("Using %s %s on %s", SAMPLE_ERC721, contract_address, network.name)
    token_id = settings.sample_token_id_for(network.name)
    tx_params: Dict[str, Any] = {
        "chainId": network.chain_id,
        "from": signer.address,
        "gas": SAMPLE_MINT_GAS,
        "gasPrice": gas_price,
    }

    print("\n", file=out)

    try:
        transaction = contract.functions.mint(signer.address, SAMPLE_TOKEN_URI).build_transaction(
            {**tx_params, "nonce": w3.eth.get_transaction_count(signer.address)}
        )
        tx_hash = w3.eth.send_raw_transaction(signer.sign_transaction(transaction))
        receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    except CALL_ERRORS as e:
        _abort(str(e), err)

    if not receipt["status"]:
        _abort(Web3.to_json(receipt), err)

    minted = _minted_token_id(contract, receipt)
    if minted is None:
        _abort(f"No Transfer event in mint receipt: {Web3.to_json(receipt)}", err)
    print("Token id", minted, "minted.", file=out)

    for method in ("tokenURI", "exists", "ownerOf"):
        try:
            result = getattr(contract.functions, method)(token_id).call(tx_params)
        except CALL_ERRORS as e:
            _abort(str(e), err)
        print(method, result, file=out)

    print("\n", file=out)
    return 0
