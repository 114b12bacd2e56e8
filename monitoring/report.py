"""
Tracking report for the IBC denom tracker.

Merges the per-chain balance records of several tracking runs (one per
tracked denom), sums totals per tracked denom and renders the result.

TEXT CONTRACT:
    <Chain>:
    <denom>, <origin denom>, <balance>, [<chain>, <chain>, ...]
    ...

    TOTAL AMOUNTS:
    <tracked denom>, <total>

Chains appear in registry order and only if they hold a record. Totals
are listed for every tracked denom, including zero totals.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from core.constants import ReportFormat
from core.logging import get_logger
from core.math import format_amount, sum_amounts
from core.models import BalanceRecord

logger = get_logger("monitoring.report")

SCHEMA_VERSION = "1.0.0"

Balances = Mapping[str, Sequence[BalanceRecord]]


def merge_balances(chain_order: Sequence[str], *runs: Balances) -> Dict[str, List[BalanceRecord]]:
    """
    Union records per chain.

    Chains follow chain_order; records of earlier runs come first.
    """
    merged: Dict[str, List[BalanceRecord]] = {}
    for chain in chain_order:
        records = [record for run in runs for record in run.get(chain, ())]
        if records:
            merged[chain] = records
    return merged


def total_balance(balances: Balances) -> Decimal:
    """Sum of every record balance in one run."""
    return sum_amounts(
        record.balance for records in balances.values() for record in records
    )


def compute_totals(runs: Mapping[str, Balances]) -> Dict[str, Decimal]:
    """Tracked denom -> total balance across all chains and paths."""
    return {denom: total_balance(balances) for denom, balances in runs.items()}


@dataclass
class TrackingReport:
    """Merged result of one tracking session."""
    account: str
    origin: str
    balances: Dict[str, List[BalanceRecord]] = field(default_factory=dict)
    totals: Dict[str, Decimal] = field(default_factory=dict)
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def record_count(self) -> int:
        return sum(len(records) for records in self.balances.values())

    def to_text(self) -> str:
        lines: List[str] = []
        for chain, records in self.balances.items():
            lines.append(f"{chain[:1].upper()}{chain[1:]}:")
            lines.extend(record.to_line() for record in records)

        lines.append("")
        lines.append("TOTAL AMOUNTS:")
        for denom, total in self.totals.items():
            lines.append(f"{denom}, {format_amount(total)}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "timestamp": self.timestamp,
            "account": self.account,
            "origin": self.origin,
            "balances": {
                chain: [record.to_dict() for record in records]
                for chain, records in self.balances.items()
            },
            "totals": {denom: format_amount(total) for denom, total in self.totals.items()},
        }


def build_report(
    account: str,
    origin: str,
    chain_order: Sequence[str],
    runs: Mapping[str, Balances],
) -> TrackingReport:
    """
    Build a report from tracking runs.

    Args:
        account: Tracked account on the origin chain
        origin: Origin chain name
        chain_order: Registry chain order
        runs: tracked denom -> per-chain records, in tracking order
    """
    return TrackingReport(
        account=account,
        origin=origin,
        balances=merge_balances(chain_order, *runs.values()),
        totals=compute_totals(runs),
    )


def write_report(
    report: TrackingReport,
    path: Path,
    fmt: ReportFormat = ReportFormat.TEXT,
) -> Path:
    """Write report to path, replacing any previous content."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if ReportFormat(fmt) is ReportFormat.JSON:
        content = json.dumps(report.to_dict(), indent=2)
    else:
        content = report.to_text()

    path.write_text(content, encoding="utf-8")

    logger.info(
        f"Results exported to {path}",
        extra={"context": {
            "format": ReportFormat(fmt).value,
            "records": report.record_count,
            "chains": list(report.balances),
        }},
    )
    return path
