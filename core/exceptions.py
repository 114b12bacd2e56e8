"""
Typed exceptions for the IBC denom tracker.

Three failure families, all fatal for a tracking run:
- ConfigurationError: registry defects (missing chain, missing channel edge)
- NetworkError: balance queries that could not be completed
- DecodingError: malformed or mismatched account addresses
"""

from typing import Optional

from core.constants import ErrorCode


class TrackerError(Exception):
    """Base exception for the tracker."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TrackerError):
    """Chain/channel registry is missing an entry or is inconsistent."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class NetworkError(TrackerError):
    """Balance query failed (transport error, HTTP error, bad payload)."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INFRA_RPC_ERROR,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)


class DecodingError(TrackerError):
    """Address could not be decoded."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ADDRESS_INVALID,
        details: Optional[dict] = None,
    ):
        super().__init__(message, code, details)
