"""
core - Core utilities and models for the IBC denom tracker.

This package contains:
- models.py: Data models (Chain, DenomTrace, Coin, BalanceRecord, BalanceSnapshot)
- constants.py: Enums and constants
- exceptions.py: Typed exceptions with error codes
- math.py: Decimal amount helpers (no float)
- logging.py: Structured JSON logging
"""

from core.constants import (
    ErrorCode,
    ReportFormat,
    IBC_DENOM_PREFIX,
    TRANSFER_PORT,
)
from core.exceptions import (
    ConfigurationError,
    DecodingError,
    NetworkError,
    TrackerError,
)
from core.logging import get_logger, setup_logging
from core.models import (
    BalanceRecord,
    BalanceSnapshot,
    Chain,
    Coin,
    DenomTrace,
)

__all__ = [
    # Constants
    "ErrorCode",
    "ReportFormat",
    "IBC_DENOM_PREFIX",
    "TRANSFER_PORT",
    # Exceptions
    "ConfigurationError",
    "DecodingError",
    "NetworkError",
    "TrackerError",
    # Models
    "BalanceRecord",
    "BalanceSnapshot",
    "Chain",
    "Coin",
    "DenomTrace",
    # Logging
    "get_logger",
    "setup_logging",
]
