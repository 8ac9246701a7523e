"""Fee deltas derived from paired with-fee and without-fee trade quotes"""
from __future__ import annotations  # types will be strings by default in 3.11

from yieldpy import INTERNAL_DECIMALS
from yieldpy.config import CurveConfig
from yieldpy.errors import DomainError
from yieldpy.pricing_models.trades import quote_buy_fy_token, sell_fy_token
from yieldpy.types import InfeasibleTrade


def calc_fee_delta(
    base_reserves: int,
    fy_token_reserves: int,
    fy_token: int,
    time_to_maturity: int,
    scale_factor: int = 1,
    curve: CurveConfig | None = None,
    decimals: int = INTERNAL_DECIMALS,
) -> int:
    r"""Calculates how much the fee multiplier costs the trader, in base.

    A non-negative ``fy_token`` is a purchase of that much fyToken, so the fee is
    the extra base paid with g1 compared to g = 1. A negative ``fy_token`` is a
    sale of ``-fy_token``, so the fee is the base given up with g2 compared to g = 1.
    Either way the result is the trader's cost increment.

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; virtual fyToken reserves in the pool.
    fy_token: int
        Signed fyToken amount; positive when the trader takes fyToken out.
    time_to_maturity: int
        Seconds until maturity.
    scale_factor: int, optional
        Multiplier that lifts amounts to the curve's working precision. Defaults to 1.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().
    decimals: int, optional
        Native decimals of the base asset, used to price purchases. Defaults to 18.

    Returns
    -------
    int
        The fee, in base.
    """
    if curve is None:
        curve = CurveConfig()
    if fy_token >= 0:
        costs = []
        for with_no_fee in (False, True):
            cost = quote_buy_fy_token(
                base_reserves,
                fy_token_reserves,
                fy_token,
                curve.c,
                curve.mu,
                time_to_maturity,
                curve.ts_64x64,
                curve.g1_64x64,
                decimals=decimals,
                precision_fee=curve.precision_fee,
                with_no_fee=with_no_fee,
            )
            if isinstance(cost, InfeasibleTrade):
                raise DomainError(cost.reason)
            costs.append(cost)
        cost_with_fee, cost_without_fee = costs
        return cost_with_fee - cost_without_fee
    base_with_fee = sell_fy_token(
        base_reserves, fy_token_reserves, -fy_token, time_to_maturity, scale_factor, curve=curve
    )
    base_without_fee = sell_fy_token(
        base_reserves, fy_token_reserves, -fy_token, time_to_maturity, scale_factor, with_no_fee=True, curve=curve
    )
    return base_without_fee - base_with_fee
