"""
chains/address.py - Bech32 address prefix translation.

The tracked chains derive account addresses from the same key material and
differ only in the bech32 human-readable prefix, so an address on one chain
is re-encoded for another by swapping the prefix and recomputing the
checksum. Chains that use a different key derivation (Terra, coin type 330)
cannot be derived this way and need an explicit address override.
"""

from typing import Dict, Mapping, Optional

import bech32

from chains.registry import ChainRegistry
from core.constants import ErrorCode
from core.exceptions import ConfigurationError, DecodingError
from core.logging import get_logger

logger = get_logger(__name__)


def _decode(address: str) -> tuple[str, list[int]]:
    hrp, data = bech32.bech32_decode(address)
    if hrp is None or data is None:
        raise DecodingError(
            f"Invalid bech32 address: {address!r}",
            details={"address": address},
        )
    return hrp, data


def get_prefix(address: str) -> str:
    """Human-readable prefix of a valid bech32 address."""
    hrp, _ = _decode(address)
    return hrp


def convert_address_prefix(address: str, new_prefix: str) -> str:
    """
    Re-encode a bech32 address under another prefix.

    Args:
        address: Valid bech32 address
        new_prefix: Target human-readable prefix (e.g. 'osmo')

    Returns:
        Address with the same payload and the new prefix

    Raises:
        DecodingError: If address is not valid bech32
    """
    _, data = _decode(address)
    converted = bech32.bech32_encode(new_prefix, data)
    # bech32_encode never fails; an unusable prefix only shows on decode
    if bech32.bech32_decode(converted)[0] != new_prefix:
        raise DecodingError(
            f"Cannot encode address under prefix {new_prefix!r}",
            details={"address": address, "prefix": new_prefix},
        )
    return converted


def validate_account(address: str, expected_prefix: str) -> str:
    """
    Check that an address decodes and carries the expected prefix.

    Returns the address unchanged.
    """
    prefix = get_prefix(address)
    if prefix != expected_prefix:
        raise DecodingError(
            f"Address {address} has prefix {prefix!r}, expected {expected_prefix!r}",
            code=ErrorCode.ADDRESS_WRONG_PREFIX,
            details={"address": address, "prefix": prefix, "expected": expected_prefix},
        )
    return address


def derive_account_addresses(
    account: str,
    registry: ChainRegistry,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Translate one account into the address it has on every registered chain.

    Args:
        account: Valid bech32 account address
        registry: ChainRegistry
        overrides: chain name -> pinned address, used instead of re-encoding

    Returns:
        chain name -> address, in registry order
    """
    overrides = overrides or {}
    addresses: Dict[str, str] = {}

    for chain in registry:
        pinned = overrides.get(chain.name)
        if pinned is None:
            addresses[chain.name] = convert_address_prefix(account, chain.address_prefix)
            continue

        prefix = get_prefix(pinned)
        if prefix != chain.address_prefix:
            raise ConfigurationError(
                f"Address override for {chain.name} has prefix {prefix!r}, "
                f"expected {chain.address_prefix!r}",
                details={"chain": chain.name, "address": pinned},
            )
        logger.warning(
            f"Using pinned address on {chain.name} instead of re-encoding {account}",
            extra={"context": {"chain": chain.name, "account": account, "address": pinned}},
        )
        addresses[chain.name] = pinned

    return addresses
