"""
core/logging.py - Structured logging for tracking runs.

Records carry a "context" dict (chain, denom, path, account, error_code)
passed only via extra={"context": {...}}. The JSON formatter merges it with
the process-wide context set by the CLI (service, version).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_global_context: dict[str, Any] = {}

PLAIN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record:

        {"timestamp": ..., "level": "DEBUG", "logger": "tracking.explorer",
         "message": "Balance: osmosis | ibc/...", "context": {"path": [...]}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = dict(_global_context)
        context.update(getattr(record, "context", None) or {})
        if record.exc_info:
            context["exception"] = self.formatException(record.exc_info)
        if context:
            entry["context"] = context

        return json.dumps(entry, default=str)


class ContextAdapter(logging.LoggerAdapter):
    """Merges the adapter's fixed context into each record's context."""

    def process(
        self, msg: str, kwargs: dict[str, Any]
    ) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {"context": {**self.extra, **extra.get("context", {})}}
        return msg, kwargs


def set_global_context(**kwargs: Any) -> None:
    """Context added to every JSON record for the rest of the process."""
    _global_context.update(kwargs)


def clear_global_context() -> None:
    _global_context.clear()


def get_logger(name: str, **context: Any) -> ContextAdapter:
    """Logger for a module, optionally pinned to some context (e.g. chain)."""
    return ContextAdapter(logging.getLogger(name), context)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure the root logger to write to stdout.

    Args:
        level: Log level (DEBUG shows every balance match)
        json_output: JSON records instead of the plain pipe-separated format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if json_output
        else logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    root_logger.addHandler(handler)

    # httpx logs every request at INFO
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def log_balance_match(
    logger: ContextAdapter,
    chain: str,
    denom: str,
    balance: Any,
    path: list[str] | tuple[str, ...],
    **extra: Any,
) -> None:
    """DEBUG record for one (chain, denom, path) hit."""
    logger.debug(
        f"Balance: {chain} | {denom[:16]} | {balance}",
        extra={"context": {
            "chain": chain,
            "denom": denom,
            "balance": str(balance),
            "path": list(path),
            **extra,
        }},
    )


def log_error(
    logger: ContextAdapter,
    error_code: str,
    message: str,
    **extra: Any,
) -> None:
    """ERROR record tagged with a TrackerError code."""
    logger.error(
        f"[{error_code}] {message}",
        extra={"context": {"error_code": error_code, **extra}},
    )
