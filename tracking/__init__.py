"""
tracking/ - Denom trace derivation and path exploration.

Modules:
- denom: ICS-20 trace -> ibc/<hash> derivation
- explorer: path enumeration and balance matching
"""

from tracking.denom import base_denom_trace, get_denom, hash_trace
from tracking.explorer import (
    count_paths,
    explore_paths,
    fetch_snapshots,
    iter_paths,
    next_hops,
    track_balances,
)

__all__ = [
    "base_denom_trace",
    "get_denom",
    "hash_trace",
    "count_paths",
    "explore_paths",
    "fetch_snapshots",
    "iter_paths",
    "next_hops",
    "track_balances",
]
