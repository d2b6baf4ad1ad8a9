"""Deterministic address derivation for genesis factory deployments."""

from typing import Union

from eth_utils import is_address, keccak, to_canonical_address, to_checksum_address

from .constants import GENESIS_SALT_BYTES
from .encoding import hexify
from .exceptions import EncodingError

BytesLike = Union[bytes, str]


def _to_bytes(value: BytesLike, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    cleaned = hexify(value)
    if len(cleaned) != len(value.lower().strip().removeprefix("0x")):
        raise EncodingError(f"{what} is not a hex string: {value!r}")
    if len(cleaned) % 2:
        cleaned = "0" + cleaned
    return bytes.fromhex(cleaned)


def normalize_salt(salt: BytesLike) -> bytes:
    """
    Convert a deployment salt to 32 bytes.

    Args:
        salt: Hex string or bytes, at most 32 bytes long

    Returns:
        Salt left-padded with zeros to 32 bytes

    Raises:
        EncodingError: If salt is not hex or longer than 32 bytes
    """
    raw = _to_bytes(salt, "Deployment salt")
    if len(raw) > 32:
        raise EncodingError(f"Deployment salt is {len(raw)} bytes, expected at most 32")
    return raw.rjust(32, b"\x00")


def genesis_salt_hash(salt: BytesLike) -> bytes:
    """The bytes12 salt argument passed to the genesis factory."""
    return normalize_salt(salt)[-GENESIS_SALT_BYTES:]


def derive_genesis_salt(deployer: str, salt: BytesLike) -> bytes:
    """
    Build the CREATE2 salt the genesis factory uses.

    The factory prefixes the salt hash with the calling deployer, so the same
    deployment salt yields different addresses for different deployers.

    Args:
        deployer: Address of the account calling the genesis factory
        salt: Deployment salt

    Returns:
        32 bytes: deployer address (20) followed by the salt hash (12)
    """
    if not is_address(deployer):
        raise EncodingError(f"Invalid deployer address: {deployer!r}")
    return to_canonical_address(deployer) + genesis_salt_hash(salt)


def genesis_derive_future_address(
    genesis_address: str,
    deployer: str,
    salt: BytesLike,
    bytecode: BytesLike,
    init_code: BytesLike = b"",
) -> str:
    """
    Compute the address a contract will get when deployed by the genesis factory.

    Formula: keccak256(0xff ++ genesis ++ deployer ++ salt12 ++ keccak256(bytecode))[12:]

    The init code runs through init(bytes) after creation and is not part of
    the CREATE2 preimage. It is only checked for being valid hex.

    Args:
        genesis_address: Address of the genesis factory contract
        deployer: Account that will call the factory
        salt: Deployment salt
        bytecode: Contract creation bytecode
        init_code: Encoded initialization payload

    Returns:
        Checksummed future contract address

    Raises:
        EncodingError: If any input is malformed
    """
    if not is_address(genesis_address):
        raise EncodingError(f"Invalid genesis address: {genesis_address!r}")
    creation_code = _to_bytes(bytecode, "Contract bytecode")
    if not creation_code:
        raise EncodingError("Contract bytecode is empty")
    _to_bytes(init_code, "Init code")

    preimage = (
        b"\xff"
        + to_canonical_address(genesis_address)
        + derive_genesis_salt(deployer, salt)
        + keccak(creation_code)
    )
    return to_checksum_address(keccak(preimage)[12:])
