"""Access to compiled contract artifacts."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ArtifactNotFoundError, ContractNotFoundError
from .parsers import ArtifactFormat, detect_artifact_format, parse_combined_json, parse_hardhat_artifact
from .paths import get_artifacts_dir, get_combined_json_path


class ArtifactStore:
    """Looks up ABIs and creation bytecode of compiled contracts by name."""

    def __init__(self, artifacts_path: Optional[Union[Path, str]] = None):
        """
        Load compiled artifacts.

        Args:
            artifacts_path: build/combined.json or a Hardhat artifacts directory.
                            If None, uses build/combined.json when present,
                            otherwise the artifacts directory.

        Raises:
            ArtifactNotFoundError: If no artifacts are found
        """
        if artifacts_path is None:
            artifacts_path = get_combined_json_path()
            if not artifacts_path.exists():
                artifacts_path = get_artifacts_dir()

        path = Path(artifacts_path)
        self.path = path
        self.format = detect_artifact_format(path)

        match self.format:
            case ArtifactFormat.COMBINED_JSON:
                self._contracts = parse_combined_json(path)
            case ArtifactFormat.HARDHAT:
                self._contracts = self._index_hardhat(path)
            case _:
                raise ArtifactNotFoundError(f"No compiled artifacts found at {path}")

    @staticmethod
    def _index_hardhat(artifacts_dir: Path) -> Dict[str, Dict[str, Any]]:
        contracts: Dict[str, Dict[str, Any]] = {}
        for artifact_file in sorted(artifacts_dir.rglob("*.json")):
            # Skip debug files and solc build info
            if artifact_file.name.endswith(".dbg.json") or "build-info" in artifact_file.parts:
                continue
            try:
                artifact = parse_hardhat_artifact(artifact_file)
            except (KeyError, json.JSONDecodeError):
                continue
            contracts[artifact["contract_name"]] = artifact
        return contracts

    def has_contract(self, contract_name: str) -> bool:
        return contract_name in self._contracts

    def contract_names(self) -> List[str]:
        return sorted(self._contracts.keys())

    def _get(self, contract_name: str) -> Dict[str, Any]:
        if contract_name not in self._contracts:
            raise ContractNotFoundError(
                f"Contract '{contract_name}' not found in artifacts at {self.path}"
            )
        return self._contracts[contract_name]

    def abi(self, contract_name: str) -> List[Dict[str, Any]]:
        """
        Get the ABI of a contract.

        Raises:
            ContractNotFoundError: If contract is not in the artifacts
        """
        return self._get(contract_name)["abi"]

    def bytecode(self, contract_name: str) -> str:
        """
        Get the creation bytecode of a contract as a 0x-prefixed hex string.

        Raises:
            ContractNotFoundError: If contract is missing or has no bytecode
        """
        bytecode = self._get(contract_name)["bytecode"]
        if not bytecode or bytecode == "0x":
            raise ContractNotFoundError(
                f"Contract '{contract_name}' has no bytecode (abstract or interface?)"
            )
        return bytecode


def _abi_entry_key(entry: Dict[str, Any]) -> tuple:
    inputs = tuple(i.get("type", "") for i in entry.get("inputs", []))
    return (entry.get("type", "function"), entry.get("name", ""), inputs)


def merge_abis(*abis: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Concatenate ABIs, keeping the first occurrence of each entry.

    Entries are identified by type, name and input types, so identical
    functions and events declared by several contracts appear once.
    """
    merged: List[Dict[str, Any]] = []
    seen = set()
    for abi in abis:
        for entry in abi:
            key = _abi_entry_key(entry)
            if key in seen:
                continue
            seen.add(key)
            merged.append(entry)
    return merged
