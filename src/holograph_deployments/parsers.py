"""Build artifact and deployment record parsers for holograph-deployments library."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ArtifactNotFoundError, ContractNotFoundError


class ArtifactFormat(Enum):
    """
    Compiled artifact formats.

    - COMBINED_JSON: single solc --combined-json abi,bin output file
    - HARDHAT: one JSON file per contract under an artifacts directory
    """

    COMBINED_JSON = "combined-json"
    HARDHAT = "hardhat"


def detect_artifact_format(path: Path) -> Optional[ArtifactFormat]:
    """
    Detect which artifact format lives at a path.

    Args:
        path: A combined.json file or a Hardhat artifacts directory

    Returns:
        ArtifactFormat.COMBINED_JSON if path is a file
        ArtifactFormat.HARDHAT if path is a directory containing JSON files
        None if nothing usable is found
    """
    if path.is_file():
        return ArtifactFormat.COMBINED_JSON
    if path.is_dir() and any(path.rglob("*.json")):
        return ArtifactFormat.HARDHAT
    return None


def _prefix_0x(code: str) -> str:
    if code and not code.startswith("0x"):
        return "0x" + code
    return code


def parse_combined_json(file_path: Path) -> Dict[str, Dict[str, Any]]:
    """
    Parse a solc combined-json output file.

    Older solc releases emit the ABI as a JSON-encoded string, newer ones as a list;
    both are accepted.

    Args:
        file_path: Path to combined.json

    Returns:
        Dictionary mapping contract name to {"abi": list, "bytecode": "0x..."}

    Raises:
        ArtifactNotFoundError: If the file does not exist
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactNotFoundError(f"Build artifacts not found at {file_path}") from e

    result: Dict[str, Dict[str, Any]] = {}

    for key, contract_data in data.get("contracts", {}).items():
        # "path/to/Name.sol:Name" -> "Name"
        contract_name = key.rsplit(":", 1)[-1]

        abi = contract_data.get("abi", [])
        if isinstance(abi, str):
            abi = json.loads(abi)

        result[contract_name] = {
            "abi": abi,
            "bytecode": _prefix_0x(contract_data.get("bin", "")),
            "source_key": key,
        }

    return result


def parse_hardhat_artifact(file_path: Path) -> Dict[str, Any]:
    """
    Parse a Hardhat artifact JSON file.

    Args:
        file_path: Path to artifacts/.../{Name}.sol/{Name}.json

    Returns:
        Dictionary with contract_name, abi and bytecode
    """
    with open(file_path) as f:
        data = json.load(f)

    return {
        "contract_name": data.get("contractName", file_path.stem),
        "abi": data["abi"],
        "bytecode": _prefix_0x(data.get("bytecode", "")),
    }


def parse_hardhat_deployment(file_path: Path) -> Dict[str, Any]:
    """
    Parse a hardhat-deploy record written for an already deployed contract.

    Args:
        file_path: Path to deployments/{network}/{Name}.json

    Returns:
        Dictionary with address and abi, plus transaction_hash and block if present

    Raises:
        ContractNotFoundError: If the record does not exist or has no address
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ContractNotFoundError(f"Deployment record not found at {file_path}") from e

    if not data.get("address"):
        raise ContractNotFoundError(f"Missing address in deployment record: {file_path}")

    result: Dict[str, Any] = {
        "address": data["address"],
        "abi": data.get("abi", []),
    }

    if "transactionHash" in data:
        result["transaction_hash"] = data["transactionHash"]
    if "receipt" in data and "blockNumber" in data["receipt"]:
        result["block"] = data["receipt"]["blockNumber"]

    return result
