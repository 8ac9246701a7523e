"""Testing for the curve and solver configs"""
from __future__ import annotations

import os
import tempfile
import unittest
from decimal import Decimal
from unittest import mock

from yieldpy import PRECISION_FEE, SECONDS_IN_TEN_YEARS, WAD
from yieldpy.config import CurveConfig, SolverConfig, build_curve_config, build_solver_config
from yieldpy.math import ONE_64X64

MISSING_DOTENV = "this_file_does_not_exist.env"
CONFIG_ENV_VARS = [
    "YIELDSPACE_TS",
    "YIELDSPACE_G1",
    "YIELDSPACE_G2",
    "YIELDSPACE_PRECISION_FEE",
    "YIELDSPACE_C",
    "YIELDSPACE_MU",
    "YIELDSPACE_SOLVER_MIN_TARGET",
    "YIELDSPACE_SOLVER_MAX_TARGET",
    "YIELDSPACE_SOLVER_MAX_ITERATIONS",
]


def clean_environ() -> dict[str, str]:
    """A copy of the environment without any config variables"""
    return {key: value for key, value in os.environ.items() if key not in CONFIG_ENV_VARS}


class TestCurveConfig(unittest.TestCase):
    """Test usage of the CurveConfig class"""

    def test_defaults(self):
        """g2 is the inverse of g1 and ts spans ten years"""
        curve = CurveConfig()
        self.assertEqual(curve.g1, Decimal("0.95"))
        self.assertAlmostEqual(curve.g1 * curve.g2, Decimal(1), delta=Decimal("1e-25"))
        self.assertEqual(curve.precision_fee, PRECISION_FEE)
        self.assertEqual(curve.c, WAD)
        self.assertEqual(curve.mu, WAD)

    def test_64x64_encoding(self):
        """the parameters encode to the integers a pool contract stores"""
        curve = CurveConfig()
        self.assertEqual(curve.ts_64x64, ONE_64X64 // SECONDS_IN_TEN_YEARS)
        self.assertEqual(curve.g1_64x64, ONE_64X64 * 95 // 100)

    def test_from_64x64(self):
        """a config can be built from a pool contract's raw parameters"""
        curve = CurveConfig.from_64x64(ts=ONE_64X64 // SECONDS_IN_TEN_YEARS, g1=ONE_64X64 * 3 // 4)
        self.assertEqual(curve.g1, Decimal("0.75"))
        self.assertAlmostEqual(curve.ts_64x64, ONE_64X64 // SECONDS_IN_TEN_YEARS, delta=1)

    def test_invalid_values(self):
        """negative fees and non-positive share prices are rejected"""
        with self.assertRaises(ValueError):
            CurveConfig(precision_fee=-1)
        with self.assertRaises(ValueError):
            CurveConfig(c=0)
        with self.assertRaises(ValueError):
            CurveConfig(mu=-1)


class TestSolverConfig(unittest.TestCase):
    """Test usage of the SolverConfig class"""

    def test_defaults(self):
        """the band sits just above one"""
        solver = SolverConfig()
        self.assertEqual(solver.min_target, Decimal("1.00001"))
        self.assertEqual(solver.max_target, Decimal("1.00002"))
        self.assertEqual(solver.max_iterations, 100)

    def test_invalid_values(self):
        """the band must be ordered and the search must run"""
        with self.assertRaises(ValueError):
            SolverConfig(min_target=Decimal("1.1"), max_target=Decimal("1.01"))
        with self.assertRaises(ValueError):
            SolverConfig(min_target=Decimal("0.9"))
        with self.assertRaises(ValueError):
            SolverConfig(max_iterations=0)


class TestBuildConfig(unittest.TestCase):
    """Test building configs from environment variables and dotenv files"""

    def test_build_defaults(self):
        """with no variables set the defaults are used"""
        with mock.patch.dict(os.environ, clean_environ(), clear=True):
            self.assertEqual(build_curve_config(MISSING_DOTENV), CurveConfig())
            self.assertEqual(build_solver_config(MISSING_DOTENV), SolverConfig())

    def test_build_from_environment(self):
        """environment variables override the defaults"""
        environ = clean_environ()
        environ.update(
            {
                "YIELDSPACE_G1": "0.9",
                "YIELDSPACE_C": "1.05",
                "YIELDSPACE_PRECISION_FEE": "0",
                "YIELDSPACE_SOLVER_MAX_ITERATIONS": "20",
            }
        )
        with mock.patch.dict(os.environ, environ, clear=True):
            curve = build_curve_config(MISSING_DOTENV)
            solver = build_solver_config(MISSING_DOTENV)
        self.assertEqual(curve.g1, Decimal("0.9"))
        self.assertAlmostEqual(curve.g2, Decimal(1) / Decimal("0.9"), delta=Decimal("1e-25"))
        self.assertEqual(curve.c, 1_050_000_000_000_000_000)
        self.assertEqual(curve.mu, WAD)
        self.assertEqual(curve.precision_fee, 0)
        self.assertEqual(solver.max_iterations, 20)

    def test_build_from_dotenv(self):
        """a dotenv file is loaded when it exists"""
        with tempfile.TemporaryDirectory() as tmp_dir:
            dotenv_file = os.path.join(tmp_dir, "yieldpy.env")
            with open(dotenv_file, "w", encoding="UTF-8") as file:
                file.write("YIELDSPACE_G2=1.1\nYIELDSPACE_SOLVER_MAX_TARGET=1.0005\n")
            with mock.patch.dict(os.environ, clean_environ(), clear=True):
                curve = build_curve_config(dotenv_file)
                solver = build_solver_config(dotenv_file)
        self.assertEqual(curve.g2, Decimal("1.1"))
        self.assertEqual(solver.max_target, Decimal("1.0005"))
