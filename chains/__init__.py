"""
chains/ - Chain topology and balance access layer.

Modules:
- registry: chain table and ICS-20 channel matrix
- address: bech32 prefix translation
- providers: bank balance queries over REST with failover
"""

from chains.address import (
    convert_address_prefix,
    derive_account_addresses,
    get_prefix,
    validate_account,
)
from chains.providers import (
    BalanceSource,
    EndpointStats,
    LCDProvider,
    LCDResponse,
    ProviderRegistry,
)
from chains.registry import ChainRegistry

__all__ = [
    # Registry
    "ChainRegistry",
    # Address
    "convert_address_prefix",
    "derive_account_addresses",
    "get_prefix",
    "validate_account",
    # Providers
    "BalanceSource",
    "EndpointStats",
    "LCDProvider",
    "LCDResponse",
    "ProviderRegistry",
]
