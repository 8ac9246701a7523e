"""The YieldSpace curve: exponent derivation and invariant evaluation"""
from __future__ import annotations  # types will be strings by default in 3.11

import decimal
import logging
from decimal import Decimal
from enum import Enum

from yieldpy.errors import DomainError
from yieldpy.math import high_precision

# pylint: disable=too-many-arguments


class TradeDirection(Enum):
    r"""The four ways a trader can move along the curve

    Each direction fixes which reserve delta is known (the trade amount), which
    one is solved for, and whether the solved amount is paid out by the pool or
    collected from the trader.
    """

    SELL_BASE = "sell_base"
    BUY_BASE = "buy_base"
    SELL_FY_TOKEN = "sell_fy_token"
    BUY_FY_TOKEN = "buy_fy_token"

    @property
    def uses_g1(self) -> bool:
        """g1 prices base going in or fyToken coming out; g2 prices the opposite directions"""
        return self in (TradeDirection.SELL_BASE, TradeDirection.BUY_FY_TOKEN)

    @property
    def base_is_known(self) -> bool:
        """Whether the trade amount is denominated in base"""
        return self in (TradeDirection.SELL_BASE, TradeDirection.BUY_BASE)

    @property
    def pool_pays(self) -> bool:
        """Whether the solved amount leaves the pool; the trader is then selling the known amount in"""
        return self in (TradeDirection.SELL_BASE, TradeDirection.SELL_FY_TOKEN)


def compute_exponent(time_to_maturity: int | Decimal, ts: Decimal, g: Decimal) -> tuple[Decimal, Decimal]:
    r"""Derive the curve exponent for one trade direction.

    .. math::
        t = ts \cdot \text{time_to_maturity}, \quad a = 1 - g t, \quad a^{-1} = 1 / a

    Arguments
    ---------
    time_to_maturity: int | Decimal
        Seconds left until the fyToken matures.
    ts: Decimal
        Per-second time scaling constant.
    g: Decimal
        Fee multiplier for the trade direction (g1, g2, or 1 when fees are ignored).

    Returns
    -------
    tuple[Decimal, Decimal]
        The exponent ``a`` and its inverse.
    """
    if time_to_maturity < 0:
        raise DomainError(f"{time_to_maturity=} is negative; the pool is past maturity")
    with decimal.localcontext(high_precision()):
        t = Decimal(ts) * Decimal(time_to_maturity)
        a = 1 - Decimal(g) * t
        if not 0 < a <= 1:
            raise DomainError(f"curve exponent {a=} is outside of (0, 1] for {time_to_maturity=}, {ts=}, {g=}")
        return a, 1 / a


def calc_invariant(
    base_reserves: Decimal,
    fy_token_reserves: Decimal,
    a: Decimal,
    share_price_ratio: Decimal = Decimal(1),
    init_share_price: Decimal = Decimal(1),
) -> Decimal:
    r"""Evaluate the power-sum invariant

    .. math::
        k = \frac{c}{\mu} (\mu z)^{a} + y^{a}

    Arguments
    ---------
    base_reserves: Decimal
        "z"; base reserves in the pool.
    fy_token_reserves: Decimal
        "y"; virtual fyToken reserves in the pool.
    a: Decimal
        The curve exponent.
    share_price_ratio: Decimal
        "c / mu"; current price per share over initial price per share.
    init_share_price: Decimal
        "mu"; price per share at pool initialization.

    Returns
    -------
    Decimal
        "k"; the invariant.
    """
    with decimal.localcontext(high_precision()):
        return share_price_ratio * (init_share_price * base_reserves) ** a + fy_token_reserves**a


def calc_trade_delta(
    direction: TradeDirection,
    base_reserves: Decimal,
    fy_token_reserves: Decimal,
    amount: Decimal,
    a: Decimal,
    inv_a: Decimal,
    precision_fee: Decimal,
    share_price_ratio: Decimal = Decimal(1),
    init_share_price: Decimal = Decimal(1),
) -> Decimal:
    r"""Solve the invariant for the reserve delta the trade amount implies.

    The known reserve moves by ``amount``; the other reserve is solved from

    .. math::
        \frac{c}{\mu} (\mu z)^{a} + y^{a} = \frac{c}{\mu} (\mu z')^{a} + y'^{a}

    When the pool pays the solved amount out it is reduced by ``precision_fee``,
    and when the pool collects it the amount is increased by ``precision_fee``,
    so rounding in the power function can never move the invariant in the
    trader's favor. The payout is not clamped at zero: a trade whose solved
    payout is smaller than ``precision_fee`` returns a negative amount, and
    callers should treat any payout below zero as an unusable quote.

    Arguments
    ---------
    direction: TradeDirection
        Which reserve is known and who pays the solved amount.
    base_reserves: Decimal
        "z"; base reserves before the trade.
    fy_token_reserves: Decimal
        "y"; virtual fyToken reserves before the trade.
    amount: Decimal
        The known trade amount, in base for base trades and in fyToken otherwise.
    a: Decimal
        The curve exponent.
    inv_a: Decimal
        The inverse of the curve exponent.
    precision_fee: Decimal
        Rounding compensation, in the same units as the reserves.
    share_price_ratio: Decimal
        "c / mu"; defaults to 1, which reduces the invariant to z^a + y^a.
    init_share_price: Decimal
        "mu"; defaults to 1.

    Returns
    -------
    Decimal
        The solved amount, always positive for a trade that is on the curve, or
        NaN when the trade leaves the curve's domain.
    """
    with decimal.localcontext(high_precision()):
        k = calc_invariant(base_reserves, fy_token_reserves, a, share_price_ratio, init_share_price)
        if direction.base_is_known:
            new_base_reserves = base_reserves + amount if direction.pool_pays else base_reserves - amount
            if new_base_reserves < 0:
                return Decimal("NaN")
            remainder = k - share_price_ratio * (init_share_price * new_base_reserves) ** a
            if remainder.is_nan() or remainder < 0:
                return Decimal("NaN")
            new_fy_token_reserves = remainder**inv_a
            if direction.pool_pays:
                delta = fy_token_reserves - new_fy_token_reserves
            else:
                delta = new_fy_token_reserves - fy_token_reserves
        else:
            new_fy_token_reserves = fy_token_reserves + amount if direction.pool_pays else fy_token_reserves - amount
            if new_fy_token_reserves < 0:
                return Decimal("NaN")
            remainder = (k - new_fy_token_reserves**a) / share_price_ratio
            if remainder.is_nan() or remainder < 0:
                return Decimal("NaN")
            new_base_reserves = remainder**inv_a / init_share_price
            if direction.pool_pays:
                delta = base_reserves - new_base_reserves
            else:
                delta = new_base_reserves - base_reserves
        with_fee = delta - precision_fee if direction.pool_pays else delta + precision_fee
    logging.debug(
        "%s: z=%s, y=%s, amount=%s, a=%s, k=%s, delta=%s, with_fee=%s",
        direction.value,
        base_reserves,
        fy_token_reserves,
        amount,
        a,
        k,
        delta,
        with_fee,
    )
    return with_fee
