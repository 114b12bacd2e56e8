"""
tracking/denom.py - ICS-20 denom trace derivation.

Each hop prepends "transfer/<channel>/" to the trace, where <channel> is
the channel on the receiving chain, and the whole trace is hashed:

    denom = "ibc/" + HEX(SHA256(trace)).upper()
"""

import hashlib

from chains.registry import ChainRegistry
from core.constants import IBC_DENOM_PREFIX, TRANSFER_PORT
from core.models import DenomTrace


def hash_trace(trace: str) -> str:
    """IBC denom for a full trace string."""
    digest = hashlib.sha256(trace.encode("utf-8")).hexdigest()
    return IBC_DENOM_PREFIX + digest.upper()


def base_denom_trace(denom: str) -> DenomTrace:
    """Zero-hop trace of a native denom."""
    return DenomTrace(denom=denom, trace=denom)


def get_denom(registry: ChainRegistry, src_chain: str, dest_chain: str, base_trace: DenomTrace) -> DenomTrace:
    """
    Denom on dest_chain after transferring base_trace from src_chain.

    Args:
        registry: ChainRegistry holding the channel matrix
        src_chain: Chain the token leaves
        dest_chain: Chain the token arrives on
        base_trace: Trace of the token on src_chain

    Raises:
        ConfigurationError: Unknown chain or no channel dest <- src
    """
    channel_id = registry.channel_id(dest_chain, src_chain)
    trace = f"{TRANSFER_PORT}/{channel_id}/{base_trace.trace}"
    return DenomTrace(denom=hash_trace(trace), trace=trace, hops=base_trace.hops + 1)
