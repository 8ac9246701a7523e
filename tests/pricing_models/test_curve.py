"""Tests for the curve exponent and the invariant"""
from __future__ import annotations

import decimal
import unittest
from decimal import Decimal

from yieldpy import SECONDS_IN_TEN_YEARS
from yieldpy.errors import DomainError
from yieldpy.math import high_precision
from yieldpy.pricing_models import TradeDirection, calc_invariant, calc_trade_delta, compute_exponent

TS = Decimal(1) / Decimal(SECONDS_IN_TEN_YEARS)


class TestComputeExponent(unittest.TestCase):
    """Unit tests for the curve exponent"""

    def test_exponent_at_maturity(self):
        """a is exactly 1 when no time is left"""
        a, inv_a = compute_exponent(0, TS, Decimal("0.95"))
        self.assertEqual(a, 1)
        self.assertEqual(inv_a, 1)

    def test_exponent_shrinks_with_time_and_fee(self):
        """a decreases as time to maturity or g grows"""
        a_short, _ = compute_exponent(86_400, TS, Decimal("0.95"))
        a_long, _ = compute_exponent(86_400 * 90, TS, Decimal("0.95"))
        a_no_fee, _ = compute_exponent(86_400 * 90, TS, Decimal(1))
        self.assertLess(a_long, a_short)
        self.assertLess(a_no_fee, a_long)
        self.assertGreater(a_no_fee, 0)

    def test_inverse_exponent(self):
        """inv_a * a is one"""
        a, inv_a = compute_exponent(7_776_000, TS, Decimal("0.95"))
        with decimal.localcontext(high_precision()):
            self.assertAlmostEqual(a * inv_a, Decimal(1), delta=Decimal("1e-60"))

    def test_negative_time_to_maturity(self):
        """expired pools cannot be priced"""
        with self.assertRaises(DomainError):
            compute_exponent(-1, TS, Decimal("0.95"))

    def test_exponent_out_of_range(self):
        """t * g >= 1 leaves no curve"""
        with self.assertRaises(DomainError):
            compute_exponent(SECONDS_IN_TEN_YEARS + 1, TS, Decimal(1))
        with self.assertRaises(DomainError):
            compute_exponent(SECONDS_IN_TEN_YEARS, TS, Decimal(2))


class TestTradeDirection(unittest.TestCase):
    """Test which fee and which reserve each direction uses"""

    def test_direction_properties(self):
        """g1 prices base in or fyToken out"""
        self.assertTrue(TradeDirection.SELL_BASE.uses_g1)
        self.assertTrue(TradeDirection.BUY_FY_TOKEN.uses_g1)
        self.assertFalse(TradeDirection.BUY_BASE.uses_g1)
        self.assertFalse(TradeDirection.SELL_FY_TOKEN.uses_g1)
        self.assertTrue(TradeDirection.BUY_BASE.base_is_known)
        self.assertFalse(TradeDirection.SELL_FY_TOKEN.base_is_known)
        self.assertTrue(TradeDirection.SELL_FY_TOKEN.pool_pays)
        self.assertFalse(TradeDirection.BUY_FY_TOKEN.pool_pays)


class TestCalcTradeDelta(unittest.TestCase):
    """Test solving the invariant"""

    def test_linear_curve(self):
        """with a = 1 the curve is z + y = k, so trades are one to one less the precision fee"""
        z = Decimal(1_000_000)
        y = Decimal(1_500_000)
        for direction in TradeDirection:
            delta = calc_trade_delta(direction, z, y, Decimal(1_000), Decimal(1), Decimal(1), Decimal(1))
            expected = 999 if direction.pool_pays else 1_001
            self.assertEqual(delta, expected, f"{direction=}")

    def test_outside_domain_is_nan(self):
        """taking out more than the pool holds has no solution"""
        a, inv_a = compute_exponent(7_776_000, TS, Decimal("0.95"))
        delta = calc_trade_delta(
            TradeDirection.BUY_BASE, Decimal(1_000), Decimal(2_000), Decimal(1_001), a, inv_a, Decimal(0)
        )
        self.assertTrue(delta.is_nan())
        delta = calc_trade_delta(
            TradeDirection.BUY_FY_TOKEN, Decimal(1_000), Decimal(2_000), Decimal(2_001), a, inv_a, Decimal(0)
        )
        self.assertTrue(delta.is_nan())

    def test_invariant_with_share_prices(self):
        """c / mu scales the base term and mu is applied inside the power"""
        a = Decimal("0.5")
        with decimal.localcontext(high_precision()):
            k = calc_invariant(Decimal(4), Decimal(9), a)
            self.assertEqual(k, Decimal(5))
            k = calc_invariant(Decimal(2), Decimal(9), a, share_price_ratio=Decimal(3), init_share_price=Decimal(2))
            self.assertEqual(k, Decimal(9))
