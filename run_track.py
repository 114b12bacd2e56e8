#!/usr/bin/env python3
"""
run_track.py - CLI entrypoint for IBC balance tracking.

Usage:
    python run_track.py
    python run_track.py --account neutron1... --denom factory/neutron1.../dAsset
    python run_track.py --output report.json --format json
"""

import asyncio
import sys
from pathlib import Path

import click

from chains.providers import BalanceSource, ProviderRegistry
from chains.registry import ChainRegistry
from config import load_tracking
from core.constants import (
    DEFAULT_ORIGIN_CHAIN,
    DEFAULT_REPORT_FILE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TRACKED_DENOMS,
    ReportFormat,
)
from core.exceptions import TrackerError
from core.logging import get_logger, log_error, set_global_context, setup_logging
from core.math import format_amount
from monitoring.report import TrackingReport, build_report, write_report
from tracking.explorer import track_balances

logger = get_logger("tracker.cli")

__version__ = "0.1.0"


async def run_session(
    registry: ChainRegistry,
    source: BalanceSource,
    account: str,
    denoms: list[str],
    origin: str = DEFAULT_ORIGIN_CHAIN,
    address_overrides: dict[str, str] | None = None,
) -> TrackingReport:
    """
    Track every denom for one account and merge the runs into a report.

    Runs share only the read-only registry and the balance source.
    """
    results = await asyncio.gather(*(
        track_balances(
            denom,
            account,
            registry,
            source,
            origin=origin,
            address_overrides=address_overrides,
        )
        for denom in denoms
    ))
    return build_report(account, origin, registry.names, dict(zip(denoms, results)))


async def _run(
    registry: ChainRegistry,
    account: str,
    denoms: list[str],
    origin: str,
    address_overrides: dict[str, str] | None,
    timeout: int,
) -> TrackingReport:
    async with ProviderRegistry.from_chains(registry, timeout_seconds=timeout) as source:
        return await run_session(registry, source, account, denoms, origin, address_overrides)


@click.command()
@click.option(
    "--account",
    "-a",
    default=None,
    help="Account address on the origin chain (default: tracking.yaml)",
)
@click.option(
    "--denom",
    "-d",
    "denoms",
    multiple=True,
    help="Native denom to track; repeatable (default: tracking.yaml)",
)
@click.option(
    "--origin",
    default=None,
    help="Origin chain the denoms are native to",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="Report file path",
)
@click.option(
    "--format",
    "fmt",
    default=ReportFormat.TEXT.value,
    type=click.Choice([f.value for f in ReportFormat]),
    help="Report format",
)
@click.option(
    "--config-dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory holding chains.yaml, channels.yaml and tracking.yaml",
)
@click.option(
    "--timeout",
    default=DEFAULT_TIMEOUT_SECONDS,
    help="Per-request timeout in seconds",
)
@click.option(
    "--log-level",
    "-l",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON log format",
)
def main(
    account: str | None,
    denoms: tuple[str, ...],
    origin: str | None,
    output: str | None,
    fmt: str,
    config_dir: Path | None,
    timeout: int,
    log_level: str,
    json_logs: bool,
) -> None:
    """
    IBC denom tracker.

    Finds every wrapped form of the tracked denoms held by an account
    across the registered chains and writes a per-chain report.
    """
    setup_logging(level=log_level, json_output=json_logs)
    set_global_context(service="ibc-tracker", version=__version__)

    try:
        tracking = load_tracking(config_dir)
        registry = ChainRegistry.load(config_dir)

        account = account or tracking.get("account")
        if not account:
            raise click.UsageError("No account given and none configured in tracking.yaml")
        origin = origin or tracking.get("origin") or DEFAULT_ORIGIN_CHAIN
        tracked = list(denoms) or list(tracking.get("denoms") or DEFAULT_TRACKED_DENOMS)
        output_path = Path(output or tracking.get("report_file") or DEFAULT_REPORT_FILE)
        overrides = (tracking.get("address_overrides") or {}).get(account)

        report = asyncio.run(_run(registry, account, tracked, origin, overrides, timeout))
        write_report(report, output_path, ReportFormat(fmt))

    except TrackerError as e:
        log_error(logger, e.code.value, e.message, details=e.details)
        sys.exit(1)

    click.echo(f"Tracked {len(report.totals)} denom(s), {report.record_count} record(s)")
    for denom, total in report.totals.items():
        click.echo(f"  {denom}: {format_amount(total)}")
    click.echo(f"Results exported to {output_path}")


if __name__ == "__main__":
    main()
