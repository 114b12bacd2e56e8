"""
Unit tests for core models, amount helpers and exceptions.
"""

import unittest
from decimal import Decimal

from core.constants import ErrorCode
from core.exceptions import ConfigurationError, DecodingError, NetworkError, TrackerError
from core.math import format_amount, positive_amount, safe_decimal, sum_amounts
from core.models import BalanceRecord, BalanceSnapshot, Coin, DenomTrace


class TestAmounts(unittest.TestCase):
    """Tests for core.math."""

    def test_safe_decimal(self):
        self.assertEqual(safe_decimal("12"), Decimal("12"))
        self.assertEqual(safe_decimal(" 3.5 "), Decimal("3.5"))
        self.assertEqual(safe_decimal(None), Decimal("0"))
        self.assertEqual(safe_decimal("x", default=Decimal("-1")), Decimal("-1"))

    def test_positive_amount(self):
        self.assertEqual(positive_amount("1000000"), Decimal("1000000"))
        self.assertIsNone(positive_amount("0"))
        self.assertIsNone(positive_amount("-1"))
        self.assertIsNone(positive_amount("NaN"))
        self.assertIsNone(positive_amount("Infinity"))
        self.assertIsNone(positive_amount(None))

    def test_sum_amounts(self):
        self.assertEqual(sum_amounts([]), Decimal("0"))
        self.assertEqual(sum_amounts([Decimal("1.5"), Decimal("2")]), Decimal("3.5"))

    def test_format_amount(self):
        self.assertEqual(format_amount(Decimal("1500")), "1500")
        self.assertEqual(format_amount(Decimal("1E+3")), "1000")
        self.assertEqual(format_amount(Decimal("2.50")), "2.5")
        self.assertEqual(format_amount(Decimal("0.000001")), "0.000001")
        self.assertEqual(format_amount(Decimal("10.0")), "10")


class TestModels(unittest.TestCase):
    """Tests for core.models."""

    def test_denom_trace_hops(self):
        self.assertEqual(DenomTrace(denom="uatom", trace="uatom").hops, 0)
        trace = DenomTrace(denom="ibc/X", trace="transfer/channel-1/transfer/channel-0/uatom", hops=2)
        self.assertEqual(trace.hops, 2)

    def test_coin_from_dict(self):
        self.assertEqual(Coin.from_dict({"denom": "uatom", "amount": 5}), Coin("uatom", "5"))

    def test_snapshot_lookup(self):
        snapshot = BalanceSnapshot.from_coins(
            "osmosis", "osmo1x", [Coin("uosmo", "10"), Coin("ibc/Z", "0"), Coin("uosmo", "99")]
        )
        self.assertEqual(snapshot.amount_of("uosmo"), Decimal("10"))
        self.assertIsNone(snapshot.amount_of("ibc/Z"))
        self.assertIsNone(snapshot.amount_of("missing"))
        self.assertEqual(len(snapshot), 3)

    def test_record_line(self):
        record = BalanceRecord(
            denom="ibc/AB", origin_denom="uatom", balance=Decimal("12.0"),
            path=("neutron", "osmosis"),
        )
        self.assertEqual(record.chain, "osmosis")
        self.assertEqual(record.to_line(), "ibc/AB, uatom, 12, [neutron, osmosis]")


class TestExceptions(unittest.TestCase):
    """Tests for the exception hierarchy."""

    def test_str_includes_code(self):
        err = ConfigurationError("no edge", code=ErrorCode.CONFIG_MISSING_CHANNEL)
        self.assertEqual(str(err), "[CONFIG_MISSING_CHANNEL] no edge")

    def test_default_codes(self):
        self.assertEqual(ConfigurationError("x").code, ErrorCode.CONFIG_INVALID)
        self.assertEqual(NetworkError("x").code, ErrorCode.INFRA_RPC_ERROR)
        self.assertEqual(DecodingError("x").code, ErrorCode.ADDRESS_INVALID)

    def test_hierarchy(self):
        for cls in (ConfigurationError, NetworkError, DecodingError):
            self.assertTrue(issubclass(cls, TrackerError))

    def test_to_dict(self):
        err = NetworkError("down", details={"chain": "terra"})
        self.assertEqual(
            err.to_dict(),
            {"code": "INFRA_RPC_ERROR", "message": "down", "details": {"chain": "terra"}},
        )


if __name__ == "__main__":
    unittest.main()
