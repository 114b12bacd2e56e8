"""
tracking/explorer.py - Path explorer over the chain topology.

Enumerates every hop path from the origin chain, derives the denom the
tracked token would carry at the end of each path, and records a balance
wherever that denom is actually held.

PATH CONTRACT:
- path[0] is the origin chain
- a hop never stays on the same chain
- no chain repeats within path[1:]; the origin is exempt and may be
  revisited once as a hub
- records are emitted in depth-first pre-order, next hops in registry order
- the same (chain, denom) reached via different paths yields one record
  per path
"""

import asyncio
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from chains.address import derive_account_addresses, validate_account
from chains.providers import BalanceSource
from chains.registry import ChainRegistry
from core.constants import DEFAULT_ORIGIN_CHAIN, ErrorCode
from core.exceptions import ConfigurationError
from core.logging import get_logger, log_balance_match
from core.models import BalanceRecord, BalanceSnapshot, DenomTrace
from tracking.denom import base_denom_trace, get_denom

logger = get_logger(__name__)

HopPath = Tuple[str, ...]


def next_hops(registry: ChainRegistry, path: HopPath) -> List[str]:
    """Chains reachable from path[-1] without breaking the path contract."""
    current = path[-1]
    visited = set(path[1:])
    return [
        name for name in registry.names
        if name != current and name not in visited
    ]


def iter_paths(registry: ChainRegistry, origin: str) -> Iterator[HopPath]:
    """Every path the explorer visits, in depth-first pre-order."""
    registry.get(origin)
    stack: List[HopPath] = [(origin,)]
    while stack:
        path = stack.pop()
        yield path
        for name in reversed(next_hops(registry, path)):
            stack.append(path + (name,))


def count_paths(registry: ChainRegistry, origin: str) -> int:
    """Number of paths (including the bare origin) the explorer visits."""
    return sum(1 for _ in iter_paths(registry, origin))


def explore_paths(
    registry: ChainRegistry,
    origin: str,
    base_denom: str,
    snapshots: Mapping[str, BalanceSnapshot],
) -> Dict[str, List[BalanceRecord]]:
    """
    Match every derived denom against the snapshots.

    Args:
        registry: ChainRegistry
        origin: Chain the base denom is native to
        base_denom: Native denom on the origin
        snapshots: chain name -> BalanceSnapshot, one per registered chain

    Returns:
        chain name -> records, only for chains with at least one record

    Raises:
        ConfigurationError: Unknown origin, missing channel or snapshot
    """
    registry.get(origin)
    missing = [name for name in registry.names if name not in snapshots]
    if missing:
        raise ConfigurationError(
            f"Missing balance snapshots for {', '.join(missing)}",
            code=ErrorCode.CONFIG_MISSING_SNAPSHOT,
            details={"missing": missing},
        )

    balances: Dict[str, List[BalanceRecord]] = {}
    stack: List[Tuple[HopPath, DenomTrace]] = [((origin,), base_denom_trace(base_denom))]

    while stack:
        path, trace = stack.pop()
        current = path[-1]

        amount = snapshots[current].amount_of(trace.denom)
        if amount is not None:
            balances.setdefault(current, []).append(BalanceRecord(
                denom=trace.denom,
                origin_denom=base_denom,
                balance=amount,
                path=path,
            ))
            log_balance_match(logger, current, trace.denom, amount, path, hops=trace.hops)

        for name in reversed(next_hops(registry, path)):
            stack.append((path + (name,), get_denom(registry, current, name, trace)))

    return balances


async def fetch_snapshots(
    registry: ChainRegistry,
    addresses: Mapping[str, str],
    source: BalanceSource,
) -> Dict[str, BalanceSnapshot]:
    """
    Fetch every chain's balances concurrently.

    Any failure propagates; there is no partial result.
    """
    names = registry.names

    async def fetch(name: str) -> BalanceSnapshot:
        coins = await source.get_all_balances(name, addresses[name])
        return BalanceSnapshot.from_coins(name, addresses[name], coins)

    results = await asyncio.gather(*(fetch(name) for name in names))
    return dict(zip(names, results))


async def track_balances(
    base_denom: str,
    account: str,
    registry: ChainRegistry,
    source: BalanceSource,
    origin: str = DEFAULT_ORIGIN_CHAIN,
    address_overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, List[BalanceRecord]]:
    """
    Track where base_denom held by account has travelled.

    Args:
        base_denom: Native denom on the origin chain
        account: Account address on the origin chain
        registry: ChainRegistry
        source: BalanceSource used to fetch snapshots
        origin: Origin chain name
        address_overrides: chain name -> pinned address for this account

    Returns:
        chain name -> balance records

    Raises:
        DecodingError: account is not a valid origin-chain address
        NetworkError: a balance query failed
        ConfigurationError: registry defect
    """
    validate_account(account, registry.get(origin).address_prefix)

    logger.info(
        f"Tracking {base_denom} balances across {', '.join(registry.names)} for {account}",
        extra={"context": {"denom": base_denom, "account": account, "origin": origin}},
    )

    addresses = derive_account_addresses(account, registry, address_overrides)
    snapshots = await fetch_snapshots(registry, addresses, source)
    balances = explore_paths(registry, origin, base_denom, snapshots)

    logger.info(
        "Tracking finished",
        extra={"context": {
            "denom": base_denom,
            "chains_with_balance": list(balances),
            "records": sum(len(records) for records in balances.values()),
        }},
    )
    return balances
