"""
Constants for the IBC denom tracker.

Contains enums, defaults, and protocol constants.
"""

from enum import Enum
from typing import Final, List

# =============================================================================
# IBC DENOM SCHEME
# =============================================================================

# ICS-20 port used for every hop
TRANSFER_PORT: Final[str] = "transfer"

# Wrapped denoms are "ibc/" + uppercase hex SHA-256 of the full trace
IBC_DENOM_PREFIX: Final[str] = "ibc/"

# =============================================================================
# TRACKING DEFAULTS
# =============================================================================

DEFAULT_ORIGIN_CHAIN = "neutron"

DEFAULT_TRACKED_DENOMS: List[str] = [
    "factory/neutron1lzecpea0qxw5xae92xkm3vaddeszr278k7w20c/dAsset",
    "factory/neutron1lzecpea0qxw5xae92xkm3vaddeszr278k7w20c/lAsset",
]

DEFAULT_REPORT_FILE = "output.txt"

# =============================================================================
# BALANCE SOURCE DEFAULTS
# =============================================================================

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_MAX_CONNECTIONS = 10

# Page size for /cosmos/bank/v1beta1/balances
DEFAULT_PAGE_LIMIT = 200

# Hard stop for runaway pagination (next_key never empties)
MAX_BALANCE_PAGES = 100

BANK_BALANCES_PATH = "/cosmos/bank/v1beta1/balances/{address}"

# Env var prefix for per-chain REST endpoint overrides
REST_ENV_PREFIX = "TRACKER_REST_"


class ErrorCode(str, Enum):
    """
    Error codes carried by TrackerError and its subclasses.

    CONFIG_* are registry defects, INFRA_* are balance query failures,
    ADDRESS_* are rejected inputs.
    """
    # Registry / configuration
    CONFIG_UNKNOWN_CHAIN = "CONFIG_UNKNOWN_CHAIN"
    CONFIG_MISSING_CHANNEL = "CONFIG_MISSING_CHANNEL"
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING_SNAPSHOT = "CONFIG_MISSING_SNAPSHOT"

    # Balance source
    INFRA_RPC_ERROR = "INFRA_RPC_ERROR"
    INFRA_TIMEOUT = "INFRA_TIMEOUT"
    INFRA_BAD_RESPONSE = "INFRA_BAD_RESPONSE"

    # Address handling
    ADDRESS_INVALID = "ADDRESS_INVALID"
    ADDRESS_WRONG_PREFIX = "ADDRESS_WRONG_PREFIX"

    UNKNOWN = "UNKNOWN"


class ReportFormat(str, Enum):
    """Output formats for the tracking report."""
    TEXT = "text"
    JSON = "json"
