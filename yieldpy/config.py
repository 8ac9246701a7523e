"""Defines the curve and solver configuration, with builders that read env vars."""
from __future__ import annotations

import decimal
import os
from dataclasses import dataclass, field
from decimal import Decimal

from dotenv import load_dotenv
from fixedpointmath import FixedPoint

from yieldpy import PRECISION_FEE, SECONDS_IN_TEN_YEARS, WAD
from yieldpy.math import from_64x64, high_precision, to_64x64


def _default_ts() -> Decimal:
    with decimal.localcontext(high_precision()):
        return Decimal(1) / Decimal(SECONDS_IN_TEN_YEARS)


@dataclass
class CurveConfig:
    """The parameters of a single pool's YieldSpace curve.

    Several pools with different parameters can be priced side by side by
    passing a different config to each call.
    """

    ts: Decimal = field(default_factory=_default_ts)
    """Per-second time scaling constant; t = ts * time_to_maturity."""
    g1: Decimal = Decimal("0.95")
    """Fee multiplier used when the trader sells base or buys fyToken."""
    g2: Decimal | None = None
    """Fee multiplier used when the trader buys base or sells fyToken. Defaults to 1 / g1."""
    precision_fee: int = PRECISION_FEE
    """Wei subtracted from payouts and added to collections."""
    c: int = WAD
    """Current price per share of the base asset, as a fixed-point integer."""
    mu: int = WAD
    """Price per share at pool initialization, as a fixed-point integer."""

    def __post_init__(self):
        self.ts = Decimal(self.ts)
        self.g1 = Decimal(self.g1)
        if self.g2 is None:
            with decimal.localcontext(high_precision()):
                self.g2 = Decimal(1) / self.g1
        else:
            self.g2 = Decimal(self.g2)
        if self.precision_fee < 0:
            raise ValueError(f"{self.precision_fee=} must be non-negative")
        if self.c <= 0 or self.mu <= 0:
            raise ValueError(f"share prices must be positive, got {self.c=} and {self.mu=}")

    @classmethod
    def from_64x64(cls, ts: int, g1: int, g2: int | None = None, **kwargs) -> CurveConfig:
        """Build a config from the raw 64.64 fixed-point integers reported by a pool contract."""
        return cls(
            ts=from_64x64(ts),
            g1=from_64x64(g1),
            g2=None if g2 is None else from_64x64(g2),
            **kwargs,
        )

    @property
    def ts_64x64(self) -> int:
        """ts encoded as a 64.64 fixed-point integer"""
        return to_64x64(self.ts)

    @property
    def g1_64x64(self) -> int:
        """g1 encoded as a 64.64 fixed-point integer"""
        return to_64x64(self.g1)

    @property
    def g2_64x64(self) -> int:
        """g2 encoded as a 64.64 fixed-point integer"""
        assert self.g2 is not None
        return to_64x64(self.g2)


@dataclass
class SolverConfig:
    """Bounds for the single-sided mint bisection search.

    The targets are empirically chosen and trade convergence speed against the
    amount of base left over with the trader.
    """

    min_target: Decimal = Decimal("1.00001")
    """Lower edge of the accepted trader-to-pool base proportion ratio."""
    max_target: Decimal = Decimal("1.00002")
    """Upper edge of the accepted trader-to-pool base proportion ratio."""
    max_iterations: int = 100
    """Number of bisection steps before the search is declared divergent."""
    upper_bound_multiple: int = 2
    """The fyToken search interval is [0, upper_bound_multiple * base_in]."""

    def __post_init__(self):
        self.min_target = Decimal(self.min_target)
        self.max_target = Decimal(self.max_target)
        if not Decimal(1) <= self.min_target < self.max_target:
            raise ValueError(f"expected 1 <= {self.min_target=} < {self.max_target=}")
        if self.max_iterations < 1:
            raise ValueError(f"{self.max_iterations=} must be at least 1")
        if self.upper_bound_multiple < 1:
            raise ValueError(f"{self.upper_bound_multiple=} must be at least 1")


def build_curve_config(dotenv_file: str = "yieldpy.env") -> CurveConfig:
    """Build a curve config that looks for environmental variables.
    If env var exists, use that, otherwise, default.

    Arguments
    ---------
    dotenv_file: str, optional
        The path location of the dotenv file to load from.
        Defaults to "yieldpy.env".

    Returns
    -------
    CurveConfig
        Curve parameters for pricing trades against a pool.
    """
    # Look for and load local config if it exists
    if os.path.exists(dotenv_file):
        load_dotenv(dotenv_file)

    ts = os.getenv("YIELDSPACE_TS")
    g1 = os.getenv("YIELDSPACE_G1")
    g2 = os.getenv("YIELDSPACE_G2")
    precision_fee = os.getenv("YIELDSPACE_PRECISION_FEE")
    c = os.getenv("YIELDSPACE_C")
    mu = os.getenv("YIELDSPACE_MU")

    arg_dict = {}
    if ts is not None:
        arg_dict["ts"] = Decimal(ts)
    if g1 is not None:
        arg_dict["g1"] = Decimal(g1)
    if g2 is not None:
        arg_dict["g2"] = Decimal(g2)
    if precision_fee is not None:
        arg_dict["precision_fee"] = int(precision_fee)
    # share prices are written as human readable ratios, e.g. YIELDSPACE_C=1.05
    if c is not None:
        arg_dict["c"] = FixedPoint(c).scaled_value
    if mu is not None:
        arg_dict["mu"] = FixedPoint(mu).scaled_value
    return CurveConfig(**arg_dict)


def build_solver_config(dotenv_file: str = "yieldpy.env") -> SolverConfig:
    """Build a solver config that looks for environmental variables.
    If env var exists, use that, otherwise, default.

    Arguments
    ---------
    dotenv_file: str, optional
        The path location of the dotenv file to load from.
        Defaults to "yieldpy.env".

    Returns
    -------
    SolverConfig
        Bisection bounds for single-sided minting.
    """
    if os.path.exists(dotenv_file):
        load_dotenv(dotenv_file)

    min_target = os.getenv("YIELDSPACE_SOLVER_MIN_TARGET")
    max_target = os.getenv("YIELDSPACE_SOLVER_MAX_TARGET")
    max_iterations = os.getenv("YIELDSPACE_SOLVER_MAX_ITERATIONS")

    arg_dict = {}
    if min_target is not None:
        arg_dict["min_target"] = Decimal(min_target)
    if max_target is not None:
        arg_dict["max_target"] = Decimal(max_target)
    if max_iterations is not None:
        arg_dict["max_iterations"] = int(max_iterations)
    return SolverConfig(**arg_dict)
