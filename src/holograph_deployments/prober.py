"""On-chain bytecode probing for holograph-deployments library."""

from typing import Union

from eth_utils import to_checksum_address
from web3 import Web3


def get_deployed_code(w3: Web3, address: str) -> bytes:
    """
    Read the runtime bytecode stored at an address on the latest block.

    Transport errors are not caught.

    Args:
        w3: Connected Web3 instance
        address: Contract address

    Returns:
        Raw bytecode, empty if no contract is deployed
    """
    return bytes(w3.eth.get_code(to_checksum_address(address), "latest"))


def is_empty_code(code: Union[bytes, str, None]) -> bool:
    """
    Check whether eth_getCode returned "no contract".

    Args:
        code: Bytecode as bytes or hex string

    Returns:
        True for None, b"", "" and "0x"
    """
    if code is None:
        return True
    if isinstance(code, str):
        return code in ("", "0x")
    return len(code) == 0


def is_deployed(w3: Web3, address: str) -> bool:
    """Check whether bytecode exists at an address."""
    return not is_empty_code(get_deployed_code(w3, address))
