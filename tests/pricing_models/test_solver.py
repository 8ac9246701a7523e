"""Tests for the single-sided mint search"""
from __future__ import annotations

import unittest

from yieldpy import WAD
from yieldpy.config import CurveConfig, SolverConfig
from yieldpy.errors import ConvergenceError, DomainError
from yieldpy.pricing_models import mint_with_base, solve_fy_token_for_exact_base_mint

BASE_RESERVES = 1_100_000 * WAD
FY_TOKEN_RESERVES_REAL = 1_000_000 * WAD
FY_TOKEN_RESERVES_VIRTUAL = FY_TOKEN_RESERVES_REAL + 1_100_000 * WAD
TIME_TO_MATURITY = 7_776_000  # 90 days
BASE_IN = 1_000 * WAD


class TestSolver(unittest.TestCase):
    """Unit tests for solve_fy_token_for_exact_base_mint"""

    def setUp(self):
        self.curve = CurveConfig()

    def test_solution_spends_almost_all_base(self):
        """minting with the solved fyToken uses all of it and leaves only a small base surplus"""
        fy_token = solve_fy_token_for_exact_base_mint(
            BASE_RESERVES,
            FY_TOKEN_RESERVES_REAL,
            FY_TOKEN_RESERVES_VIRTUAL,
            BASE_IN,
            TIME_TO_MATURITY,
            curve=self.curve,
        )
        self.assertGreater(fy_token, 0)
        self.assertLess(fy_token, BASE_IN)
        minted, base_used = mint_with_base(
            BASE_RESERVES,
            FY_TOKEN_RESERVES_VIRTUAL,
            FY_TOKEN_RESERVES_REAL,
            self.curve.mu,
            self.curve.c,
            fy_token,
            TIME_TO_MATURITY,
            self.curve.ts_64x64,
            self.curve.g1_64x64,
        )
        self.assertGreater(minted, 0)
        self.assertLessEqual(base_used, BASE_IN)
        self.assertGreaterEqual(base_used, BASE_IN - BASE_IN // 10_000)

    def test_wider_band_converges(self):
        """a looser band still lands on a usable amount"""
        fy_token = solve_fy_token_for_exact_base_mint(
            BASE_RESERVES,
            FY_TOKEN_RESERVES_REAL,
            FY_TOKEN_RESERVES_VIRTUAL,
            BASE_IN,
            TIME_TO_MATURITY,
            solver=SolverConfig(min_target="1.0001", max_target="1.001"),
        )
        _, base_used = mint_with_base(
            BASE_RESERVES,
            FY_TOKEN_RESERVES_VIRTUAL,
            FY_TOKEN_RESERVES_REAL,
            WAD,
            WAD,
            fy_token,
            TIME_TO_MATURITY,
            self.curve.ts_64x64,
            self.curve.g1_64x64,
        )
        self.assertLessEqual(base_used, BASE_IN)

    def test_iteration_cap(self):
        """the search gives up after max_iterations"""
        with self.assertRaises(ConvergenceError):
            solve_fy_token_for_exact_base_mint(
                BASE_RESERVES,
                FY_TOKEN_RESERVES_REAL,
                FY_TOKEN_RESERVES_VIRTUAL,
                BASE_IN,
                TIME_TO_MATURITY,
                solver=SolverConfig(max_iterations=1),
            )

    def test_base_in_must_be_positive(self):
        """there is nothing to solve for without a deposit"""
        with self.assertRaises(DomainError):
            solve_fy_token_for_exact_base_mint(
                BASE_RESERVES, FY_TOKEN_RESERVES_REAL, FY_TOKEN_RESERVES_VIRTUAL, 0, TIME_TO_MATURITY
            )
