"""Trade pricing against the YieldSpace curve

Every function here is pure: it takes the pool's reserves and parameters and
returns the amount the trader receives (sells) or pays (buys). Amounts are
integers in the asset's native decimals.
"""
from __future__ import annotations  # types will be strings by default in 3.11

import decimal
import logging
from decimal import Decimal

from yieldpy import INTERNAL_DECIMALS, PRECISION_FEE
from yieldpy.config import CurveConfig
from yieldpy.errors import DomainError
from yieldpy.math import (
    ONE_64X64,
    decimal_18_to_n,
    decimal_n_to_18,
    floor_to_int,
    from_64x64,
    from_fixed,
    high_precision,
)
from yieldpy.pricing_models.curve import TradeDirection, calc_trade_delta, compute_exponent
from yieldpy.types import InfeasibleTrade

# pylint: disable=too-many-arguments


def _calc_scaled_trade(
    direction: TradeDirection,
    base_reserves: int,
    fy_token_reserves: int,
    amount: int,
    time_to_maturity: int,
    scale_factor: int,
    with_no_fee: bool,
    curve: CurveConfig | None,
) -> int:
    """Price a trade on the plain z^a + y^a curve after scaling every amount by scale_factor."""
    if curve is None:
        curve = CurveConfig()
    if with_no_fee:
        g = Decimal(1)
    else:
        g = curve.g1 if direction.uses_g1 else curve.g2
    assert g is not None
    a, inv_a = compute_exponent(time_to_maturity, curve.ts, g)
    with decimal.localcontext(high_precision()):
        scale = Decimal(scale_factor)
        if scale <= 0:
            raise DomainError(f"{scale_factor=} must be positive")
        delta = calc_trade_delta(
            direction,
            base_reserves=Decimal(base_reserves) * scale,
            fy_token_reserves=Decimal(fy_token_reserves) * scale,
            amount=Decimal(amount) * scale,
            a=a,
            inv_a=inv_a,
            precision_fee=Decimal(curve.precision_fee),
        )
        if not delta.is_finite():
            raise DomainError(
                f"{direction.value} is outside the curve's domain for "
                f"{base_reserves=}, {fy_token_reserves=}, {amount=}, {time_to_maturity=}"
            )
        return floor_to_int(delta / scale)


def sell_base(
    base_reserves: int,
    fy_token_reserves: int,
    base_in: int,
    time_to_maturity: int,
    scale_factor: int = 1,
    with_no_fee: bool = False,
    curve: CurveConfig | None = None,
) -> int:
    r"""Calculates the fyToken a trader receives for selling base into the pool.

    .. math::
        \Delta y = y - (z^a + y^a - (z + \Delta x)^a)^{1/a} - \text{precision_fee}

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; virtual fyToken reserves in the pool.
    base_in: int
        "dx"; base the trader deposits.
    time_to_maturity: int
        Seconds until maturity.
    scale_factor: int, optional
        Multiplier that lifts amounts to the curve's working precision. Defaults to 1.
    with_no_fee: bool, optional
        Price with g = 1 instead of g1. Defaults to False.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().

    Returns
    -------
    int
        "dy"; fyToken paid out to the trader. Negative when base_in is too small
        to pay out more than the precision fee.
    """
    return _calc_scaled_trade(
        TradeDirection.SELL_BASE,
        base_reserves,
        fy_token_reserves,
        base_in,
        time_to_maturity,
        scale_factor,
        with_no_fee,
        curve,
    )


def buy_base(
    base_reserves: int,
    fy_token_reserves: int,
    base_out: int,
    time_to_maturity: int,
    scale_factor: int = 1,
    with_no_fee: bool = False,
    curve: CurveConfig | None = None,
) -> int:
    r"""Calculates the fyToken a trader must pay to take a given amount of base out of the pool.

    .. math::
        \Delta y = (z^a + y^a - (z - \Delta x)^a)^{1/a} - y + \text{precision_fee}

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; virtual fyToken reserves in the pool.
    base_out: int
        "dx"; base the trader receives.
    time_to_maturity: int
        Seconds until maturity.
    scale_factor: int, optional
        Multiplier that lifts amounts to the curve's working precision. Defaults to 1.
    with_no_fee: bool, optional
        Price with g = 1 instead of g2. Defaults to False.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().

    Returns
    -------
    int
        "dy"; fyToken collected from the trader.
    """
    return _calc_scaled_trade(
        TradeDirection.BUY_BASE,
        base_reserves,
        fy_token_reserves,
        base_out,
        time_to_maturity,
        scale_factor,
        with_no_fee,
        curve,
    )


def sell_fy_token(
    base_reserves: int,
    fy_token_reserves: int,
    fy_token_in: int,
    time_to_maturity: int,
    scale_factor: int = 1,
    with_no_fee: bool = False,
    curve: CurveConfig | None = None,
) -> int:
    r"""Calculates the base a trader receives for selling fyToken into the pool.

    .. math::
        \Delta x = z - (z^a + y^a - (y + \Delta y)^a)^{1/a} - \text{precision_fee}

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; virtual fyToken reserves in the pool.
    fy_token_in: int
        "dy"; fyToken the trader deposits.
    time_to_maturity: int
        Seconds until maturity.
    scale_factor: int, optional
        Multiplier that lifts amounts to the curve's working precision. Defaults to 1.
    with_no_fee: bool, optional
        Price with g = 1 instead of g2. Defaults to False.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().

    Returns
    -------
    int
        "dx"; base paid out to the trader.
    """
    return _calc_scaled_trade(
        TradeDirection.SELL_FY_TOKEN,
        base_reserves,
        fy_token_reserves,
        fy_token_in,
        time_to_maturity,
        scale_factor,
        with_no_fee,
        curve,
    )


def quote_buy_fy_token(
    base_reserves: int,
    fy_token_reserves: int,
    fy_token_out: int,
    c: int,
    mu: int,
    time_to_maturity: int,
    ts: int,
    g1: int,
    decimals: int = INTERNAL_DECIMALS,
    precision_fee: int = PRECISION_FEE,
    with_no_fee: bool = False,
) -> int | InfeasibleTrade:
    r"""Calculates the base a trader must pay to take fyToken out of a pool with a yield-bearing base.

    The invariant is evaluated in price-adjusted space:

    .. math::
        \Delta z = \frac{1}{\mu} \left( \frac{\frac{c}{\mu} (\mu z)^{a} + y^{a} - (y - \Delta y)^{a}}
        {\frac{c}{\mu}} \right)^{1/a} - z + \text{precision_fee}

    All amounts, ``c`` and ``mu`` are normalized from ``decimals`` to 18 decimals
    before pricing and the result is truncated back to ``decimals``.

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; virtual fyToken reserves in the pool.
    fy_token_out: int
        "dy"; fyToken the trader wants to receive.
    c: int
        Current price per share, as a fixed-point integer with ``decimals`` decimals.
    mu: int
        Price per share at pool initialization, as a fixed-point integer with ``decimals`` decimals.
    time_to_maturity: int
        Seconds until maturity.
    ts: int
        Time scaling constant as a 64.64 fixed-point integer.
    g1: int
        Fee multiplier as a 64.64 fixed-point integer.
    decimals: int, optional
        Native decimals of the base asset. Defaults to 18.
    precision_fee: int, optional
        Rounding compensation in 18 decimal wei. Defaults to yieldpy.PRECISION_FEE.
    with_no_fee: bool, optional
        Price with g = 1 instead of g1. Defaults to False.

    Returns
    -------
    int | InfeasibleTrade
        "dz"; base collected from the trader, or InfeasibleTrade when the curve has no valid result.
    """
    base_reserves_18 = decimal_n_to_18(base_reserves, decimals)
    fy_token_reserves_18 = decimal_n_to_18(fy_token_reserves, decimals)
    fy_token_out_18 = decimal_n_to_18(fy_token_out, decimals)
    c_18 = decimal_n_to_18(c, decimals)
    mu_18 = decimal_n_to_18(mu, decimals)
    if c_18 <= 0 or mu_18 <= 0:
        raise DomainError(f"share prices must be positive, got {c=} and {mu=}")
    a, inv_a = compute_exponent(time_to_maturity, from_64x64(ts), from_64x64(ONE_64X64 if with_no_fee else g1))
    with decimal.localcontext(high_precision()):
        share_price = from_fixed(c_18)
        init_share_price = from_fixed(mu_18)
        delta = calc_trade_delta(
            TradeDirection.BUY_FY_TOKEN,
            base_reserves=Decimal(base_reserves_18),
            fy_token_reserves=Decimal(fy_token_reserves_18),
            amount=Decimal(fy_token_out_18),
            a=a,
            inv_a=inv_a,
            precision_fee=Decimal(precision_fee),
            share_price_ratio=share_price / init_share_price,
            init_share_price=init_share_price,
        )
    if not delta.is_finite():
        logging.debug(
            "buy_fy_token infeasible: base_reserves=%d, fy_token_reserves=%d, fy_token_out=%d, time_to_maturity=%d",
            base_reserves,
            fy_token_reserves,
            fy_token_out,
            time_to_maturity,
        )
        return InfeasibleTrade(
            reason=f"buying {fy_token_out=} leaves the curve for {base_reserves=} and {fy_token_reserves=}"
        )
    return decimal_18_to_n(floor_to_int(delta), decimals)


def buy_fy_token(
    base_reserves: int,
    fy_token_reserves: int,
    fy_token_out: int,
    c: int,
    mu: int,
    time_to_maturity: int,
    ts: int,
    g1: int,
    decimals: int = INTERNAL_DECIMALS,
    precision_fee: int = PRECISION_FEE,
    with_no_fee: bool = False,
) -> int:
    r"""Calculates the base a trader must pay to take fyToken out of the pool.

    Same as :func:`quote_buy_fy_token`, except that an infeasible trade returns 0.
    Callers must not read a 0 from this function as a free trade; use
    :func:`quote_buy_fy_token` to tell the two apart.

    Returns
    -------
    int
        "dz"; base collected from the trader, or 0 when the trade is infeasible.
    """
    result = quote_buy_fy_token(
        base_reserves,
        fy_token_reserves,
        fy_token_out,
        c,
        mu,
        time_to_maturity,
        ts,
        g1,
        decimals=decimals,
        precision_fee=precision_fee,
        with_no_fee=with_no_fee,
    )
    if isinstance(result, InfeasibleTrade):
        return 0
    return result
