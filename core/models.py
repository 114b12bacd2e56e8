"""
Core data models for the tracker.

DENOM TRACE CONTRACT
====================
A trace is the ICS-20 path a token has crossed, newest hop first:

  transfer/<channel on receiving chain>/.../transfer/<channel>/<base denom>

Its chain-local denom is "ibc/" + uppercase hex SHA-256 of the whole trace.
The zero-hop trace of a native token is {denom: base, trace: base}.
====================

All models are immutable within a tracking run.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Tuple

from core.math import format_amount, positive_amount


@dataclass(frozen=True)
class Chain:
    """A registered chain. Loaded once at startup, keyed by name."""
    name: str
    chain_id: str
    address_prefix: str
    rpc_endpoint: str = ""
    rest_endpoints: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DenomTrace:
    """A denom together with the hop trace it was derived from."""
    denom: str
    trace: str
    hops: int = 0


@dataclass(frozen=True)
class Coin:
    """A (denom, amount) pair as returned by the bank module."""
    denom: str
    amount: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coin":
        return cls(denom=str(data["denom"]), amount=str(data["amount"]))


@dataclass(frozen=True)
class BalanceRecord:
    """A positive balance of a derived denom reached via one hop path."""
    denom: str
    origin_denom: str
    balance: Decimal
    path: Tuple[str, ...]

    @property
    def chain(self) -> str:
        return self.path[-1]

    def to_line(self) -> str:
        """Render as "denom, originDenom, balance, [hop, hop]"."""
        return (
            f"{self.denom}, {self.origin_denom}, {format_amount(self.balance)}, "
            f"[{', '.join(self.path)}]"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "denom": self.denom,
            "origin_denom": self.origin_denom,
            "balance": format_amount(self.balance),
            "path": list(self.path),
        }


@dataclass(frozen=True)
class BalanceSnapshot:
    """
    Every balance held by one address on one chain.

    Fetched once per tracking run and read-only afterwards.
    """
    chain: str
    address: str
    coins: Tuple[Coin, ...] = ()
    _by_denom: Dict[str, str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        # First occurrence wins, matching a linear scan over the bank response
        for coin in self.coins:
            self._by_denom.setdefault(coin.denom, coin.amount)

    @classmethod
    def from_coins(cls, chain: str, address: str, coins: Iterable[Coin]) -> "BalanceSnapshot":
        return cls(chain=chain, address=address, coins=tuple(coins))

    def amount_of(self, denom: str) -> Optional[Decimal]:
        """Positive amount held of denom, or None if absent or not positive."""
        return positive_amount(self._by_denom.get(denom))

    def __len__(self) -> int:
        return len(self.coins)
