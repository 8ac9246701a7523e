"""Liquidity provision: proportional and single-sided mint and burn"""
from __future__ import annotations  # types will be strings by default in 3.11

import decimal
import logging
from decimal import Decimal

from yieldpy import INTERNAL_DECIMALS, PRECISION_FEE
from yieldpy.config import CurveConfig
from yieldpy.errors import DomainError
from yieldpy.math import floor_to_int, high_precision
from yieldpy.pricing_models.trades import quote_buy_fy_token, sell_fy_token
from yieldpy.types import InfeasibleTrade

# pylint: disable=too-many-arguments


def mint(
    base_reserves: int,
    fy_token_reserves: int,
    total_supply: int,
    amount_in: int,
    from_base: bool = False,
) -> tuple[int, int]:
    r"""Calculates the LP tokens minted for a proportional deposit.

    .. math::
        m = s \cdot \frac{\Delta}{R_{driving}}, \quad \Delta_{other} = R_{other} \cdot \frac{m}{s}

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; real fyToken reserves in the pool.
    total_supply: int
        "s"; LP tokens outstanding.
    amount_in: int
        The driving amount deposited; base if ``from_base``, fyToken otherwise.
    from_base: bool, optional
        Whether ``amount_in`` is denominated in base. Defaults to False.

    Returns
    -------
    tuple[int, int]
        The LP tokens minted and the amount of the other asset required.
    """
    driving_reserves = base_reserves if from_base else fy_token_reserves
    other_reserves = fy_token_reserves if from_base else base_reserves
    if driving_reserves <= 0:
        raise DomainError(f"cannot mint proportionally against {driving_reserves=}; {from_base=}")
    if total_supply == 0:
        raise DomainError("cannot mint proportionally with zero LP supply; the pool must be seeded first")
    with decimal.localcontext(high_precision()):
        minted = Decimal(total_supply) * Decimal(amount_in) / Decimal(driving_reserves)
        other = Decimal(other_reserves) * minted / Decimal(total_supply)
        return floor_to_int(minted), floor_to_int(other)


def burn(
    base_reserves: int,
    fy_token_reserves: int,
    total_supply: int,
    lp_tokens: int,
) -> tuple[int, int]:
    r"""Calculates the base and fyToken returned for burning LP tokens.

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves: int
        "y"; real fyToken reserves in the pool.
    total_supply: int
        "s"; LP tokens outstanding.
    lp_tokens: int
        LP tokens being burned.

    Returns
    -------
    tuple[int, int]
        The base and fyToken paid out.
    """
    if total_supply == 0:
        raise DomainError("cannot burn against zero LP supply")
    with decimal.localcontext(high_precision()):
        base_out = Decimal(lp_tokens) * Decimal(base_reserves) / Decimal(total_supply)
        fy_token_out = Decimal(lp_tokens) * Decimal(fy_token_reserves) / Decimal(total_supply)
        return floor_to_int(base_out), floor_to_int(fy_token_out)


def mint_with_base(
    base_reserves: int,
    fy_token_reserves_virtual: int,
    fy_token_reserves_real: int,
    mu: int,
    c: int,
    fy_token: int,
    time_to_maturity: int,
    ts: int,
    g1: int,
    decimals: int = INTERNAL_DECIMALS,
    precision_fee: int = PRECISION_FEE,
) -> tuple[int, int]:
    r"""Calculates the LP tokens and total base for a deposit made only in base.

    The fyToken leg is bought from the pool with part of the base, then the
    remaining deposit is minted proportionally against the post-trade reserves
    with ``fy_token`` as the driving amount.

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves_virtual: int
        Virtual fyToken reserves, which include the LP supply.
    fy_token_reserves_real: int
        fyToken actually held by the pool.
    mu: int
        Price per share at pool initialization, as a fixed-point integer.
    c: int
        Current price per share, as a fixed-point integer.
    fy_token: int
        fyToken to buy from the pool and immediately deposit back.
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

    Returns
    -------
    tuple[int, int]
        The LP tokens minted and the total base consumed.
    """
    if fy_token > fy_token_reserves_real:
        raise DomainError(f"cannot buy {fy_token=} from a pool holding {fy_token_reserves_real=}")
    total_supply = fy_token_reserves_virtual - fy_token_reserves_real
    base_for_fy_token = quote_buy_fy_token(
        base_reserves,
        fy_token_reserves_virtual,
        fy_token,
        c,
        mu,
        time_to_maturity,
        ts,
        g1,
        decimals=decimals,
        precision_fee=precision_fee,
    )
    if isinstance(base_for_fy_token, InfeasibleTrade):
        raise DomainError(base_for_fy_token.reason)
    # reserves after the internal trade
    minted, base_for_mint = mint(
        base_reserves + base_for_fy_token,
        fy_token_reserves_real - fy_token,
        total_supply,
        fy_token,
        from_base=False,
    )
    logging.debug(
        "mint_with_base: fy_token=%d, base_for_fy_token=%d, base_for_mint=%d, minted=%d",
        fy_token,
        base_for_fy_token,
        base_for_mint,
        minted,
    )
    return minted, base_for_fy_token + base_for_mint


def burn_for_base(
    base_reserves: int,
    fy_token_reserves_virtual: int,
    fy_token_reserves_real: int,
    total_supply: int,
    lp_tokens: int,
    time_to_maturity: int,
    scale_factor: int = 1,
    curve: CurveConfig | None = None,
) -> int:
    r"""Calculates the base returned for burning LP tokens and selling the fyToken leg.

    The fyToken sale is priced against the reserves as they were before the burn.

    Arguments
    ---------
    base_reserves: int
        "z"; base reserves in the pool.
    fy_token_reserves_virtual: int
        Virtual fyToken reserves, which include the LP supply.
    fy_token_reserves_real: int
        fyToken actually held by the pool.
    total_supply: int
        "s"; LP tokens outstanding.
    lp_tokens: int
        LP tokens being burned.
    time_to_maturity: int
        Seconds until maturity.
    scale_factor: int, optional
        Multiplier that lifts amounts to the curve's working precision. Defaults to 1.
    curve: CurveConfig, optional
        Curve parameters. Defaults to CurveConfig().

    Returns
    -------
    int
        Total base paid out.
    """
    base_out, fy_token_out = burn(base_reserves, fy_token_reserves_real, total_supply, lp_tokens)
    base_from_sale = sell_fy_token(
        base_reserves,
        fy_token_reserves_virtual,
        fy_token_out,
        time_to_maturity,
        scale_factor,
        curve=curve,
    )
    logging.debug(
        "burn_for_base: lp_tokens=%d, base_out=%d, fy_token_out=%d, base_from_sale=%d",
        lp_tokens,
        base_out,
        fy_token_out,
        base_from_sale,
    )
    return base_out + base_from_sale


def split_liquidity(x_balance: int, y_balance: int, x_amount: int) -> tuple[int, int]:
    """Split an amount into two parts in proportion to two balances, e.g. base and fyToken.

    Arguments
    ---------
    x_balance: int
        Balance of the first asset, e.g. base.
    y_balance: int
        Balance of the second asset, e.g. fyToken.
    x_amount: int
        The amount to split.

    Returns
    -------
    tuple[int, int]
        The first asset's portion (rounded down) and the remainder.
    """
    if x_balance + y_balance == 0:
        raise DomainError("cannot split liquidity against two empty balances")
    with decimal.localcontext(high_precision()):
        x_portion = floor_to_int(Decimal(x_amount) * Decimal(x_balance) / Decimal(x_balance + y_balance))
    return x_portion, x_amount - x_portion
