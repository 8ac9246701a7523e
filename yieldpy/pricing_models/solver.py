"""Bisection search for single-sided minting"""
from __future__ import annotations  # types will be strings by default in 3.11

import decimal
import logging
from decimal import Decimal

from yieldpy import INTERNAL_DECIMALS
from yieldpy.config import CurveConfig, SolverConfig
from yieldpy.errors import ConvergenceError, DomainError
from yieldpy.math import high_precision
from yieldpy.pricing_models.trades import quote_buy_fy_token
from yieldpy.types import InfeasibleTrade

# pylint: disable=too-many-arguments
# pylint: disable=too-many-locals


def solve_fy_token_for_exact_base_mint(
    base_reserves: int,
    fy_token_reserves_real: int,
    fy_token_reserves_virtual: int,
    base_in: int,
    time_to_maturity: int,
    curve: CurveConfig | None = None,
    solver: SolverConfig | None = None,
    decimals: int = INTERNAL_DECIMALS,
) -> int:
    r"""Find how much fyToken to buy so a base-only mint of ``base_in`` uses it all.

    Buying ``y`` fyToken costs ``z_in`` base. What the trader has left is compared
    with what the pool holds afterwards:

    .. math::
        p_z = \frac{x - z_{in}}{(x - z_{in}) + y}, \quad
        P_Z = \frac{Z + z_{in}}{(Z + z_{in}) + (Y_{real} - y)}

    and ``y`` is bisected over ``[0, upper_bound_multiple * x]`` until
    ``P_Z * min_target < p_z < P_Z * max_target``. The band sits above ``P_Z``
    so that all of the fyToken is used and a small base surplus stays with the
    trader, never a deficit.

    Arguments
    ---------
    base_reserves: int
        "Z"; base reserves in the pool.
    fy_token_reserves_real: int
        "Yreal"; fyToken actually held by the pool.
    fy_token_reserves_virtual: int
        Virtual fyToken reserves, used to price the fyToken purchase.
    base_in: int
        "x"; total base the trader wants to deposit.
    time_to_maturity: int
        Seconds until maturity.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().
    solver: SolverConfig, optional
        Target band and iteration cap. Defaults to SolverConfig().
    decimals: int, optional
        Native decimals of the base asset. Defaults to 18.

    Returns
    -------
    int
        The fyToken amount to pass to ``mint_with_base``.
    """
    if curve is None:
        curve = CurveConfig()
    if solver is None:
        solver = SolverConfig()
    if base_in <= 0:
        raise DomainError(f"{base_in=} must be positive")
    ts = curve.ts_64x64
    g1 = curve.g1_64x64
    lower = 0
    upper = base_in * solver.upper_bound_multiple
    fy_token_out = (lower + upper) // 2
    for iteration in range(1, solver.max_iterations + 1):
        base_cost = quote_buy_fy_token(
            base_reserves,
            fy_token_reserves_virtual,
            fy_token_out,
            curve.c,
            curve.mu,
            time_to_maturity,
            ts,
            g1,
            decimals=decimals,
            precision_fee=curve.precision_fee,
        )
        trader_base = 0 if isinstance(base_cost, InfeasibleTrade) else base_in - base_cost
        pool_fy_token = fy_token_reserves_real - fy_token_out
        if isinstance(base_cost, InfeasibleTrade) or trader_base <= 0 or pool_fy_token <= 0:
            # more fyToken than the pool or the deposit can cover
            upper = fy_token_out
            fy_token_out = (fy_token_out + lower) // 2
            continue
        assert isinstance(base_cost, int)
        with decimal.localcontext(high_precision()):
            pool_base = Decimal(base_reserves + base_cost)
            trader_proportion = Decimal(trader_base) / Decimal(trader_base + fy_token_out)
            pool_proportion = pool_base / (pool_base + pool_fy_token)
            in_band = pool_proportion * solver.min_target < trader_proportion < pool_proportion * solver.max_target
            too_little_fy_token = trader_proportion >= pool_proportion * solver.max_target
        logging.debug(
            "iteration=%d, fy_token_out=%d, base_cost=%d, trader_proportion=%s, pool_proportion=%s",
            iteration,
            fy_token_out,
            base_cost,
            trader_proportion,
            pool_proportion,
        )
        if in_band:
            return fy_token_out
        if too_little_fy_token:
            lower = fy_token_out
            fy_token_out = (fy_token_out + upper) // 2
        else:
            upper = fy_token_out
            fy_token_out = (fy_token_out + lower) // 2
    raise ConvergenceError(
        f"fyToken search for {base_in=} did not converge after {solver.max_iterations} iterations; "
        f"last bounds were [{lower}, {upper}]"
    )
