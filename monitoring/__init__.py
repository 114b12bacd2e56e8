"""
Monitoring package for the tracker.

Stable exports:
- TrackingReport
- build_report
- merge_balances
- compute_totals
- total_balance
- write_report
"""

from monitoring.report import (
    SCHEMA_VERSION,
    TrackingReport,
    build_report,
    compute_totals,
    merge_balances,
    total_balance,
    write_report,
)

__all__ = [
    "SCHEMA_VERSION",
    "TrackingReport",
    "build_report",
    "compute_totals",
    "merge_balances",
    "total_balance",
    "write_report",
]
