"""Init code and hex string helpers for holograph-deployments library."""

import re
from enum import IntEnum
from typing import Any, Iterable, Sequence

from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError

from .exceptions import EncodingError

_NON_HEX = re.compile(r"[^0-9a-f]")


class HolographERC721Event(IntEnum):
    """
    Events a Holograph ERC-721 collection can forward to its source contract.

    The value of each member is its bit position in the event configuration.
    """

    UNDEFINED = 0
    bridgeIn = 1
    bridgeOut = 2
    afterApprove = 3
    beforeApprove = 4
    afterApprovalAll = 5
    beforeApprovalAll = 6
    afterBurn = 7
    beforeBurn = 8
    afterMint = 9
    beforeMint = 10
    afterSafeTransfer = 11
    beforeSafeTransfer = 12
    afterTransfer = 13
    beforeTransfer = 14
    beforeOnERC721Received = 15
    afterOnERC721Received = 16
    onIsApprovedForAll = 17
    customContractURI = 18


def configure_events(events: Iterable[HolographERC721Event]) -> int:
    """
    Build the uint256 event configuration bitmask.

    Args:
        events: Events to enable

    Returns:
        Integer with bit N set for every enabled event of value N
    """
    config = 0
    for event in events:
        config |= 1 << int(event)
    return config


def generate_init_code(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """
    ABI-encode initialization parameters.

    Args:
        types: Solidity types, e.g. ["string", "uint16"]
        values: Matching Python values

    Returns:
        Encoded bytes (abi.encode semantics)

    Raises:
        EncodingError: If the values do not match the types
    """
    if len(types) != len(values):
        raise EncodingError(
            f"Got {len(values)} values for {len(types)} init code types"
        )
    try:
        return encode(list(types), list(values))
    except (AbiEncodingError, TypeError, ValueError) as e:
        raise EncodingError(f"Unable to encode init code {list(types)}: {e}") from e


def remove_x(value: str) -> str:
    """Strip a leading 0x prefix."""
    if value.startswith("0x"):
        return value[2:]
    return value


def hexify(value: str, prepend: bool = False) -> str:
    """
    Normalize a hex string: lower case, no 0x, non-hex characters removed.

    Args:
        value: Input string
        prepend: Add a 0x prefix to the result

    Returns:
        Normalized hex string
    """
    value = remove_x(value.lower().strip())
    value = _NON_HEX.sub("", value)
    if prepend:
        value = "0x" + value
    return value
