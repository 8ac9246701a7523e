"""High-precision decimal helpers for the YieldSpace curve math

Reserve amounts cross the engine boundary as integers in the asset's native
decimals. Internally they are lifted into ``decimal.Decimal`` and evaluated under
a local context with ``DECIMAL_PRECISION`` significant digits, which gives a real
valued power function (via ln/exp) with enough headroom for 18 decimal amounts.
"""
from __future__ import annotations

import decimal
from decimal import Decimal

from yieldpy import DECIMAL_PRECISION, INTERNAL_DECIMALS
from yieldpy.errors import DomainError

ONE_64X64 = 2**64

# InvalidOperation is left untrapped so that a power of a negative base becomes NaN
# instead of raising; callers decide whether NaN is an error or an infeasible trade.
HIGH_PRECISION_CONTEXT = decimal.Context(
    prec=DECIMAL_PRECISION,
    rounding=decimal.ROUND_HALF_EVEN,
    traps=[decimal.DivisionByZero, decimal.Overflow],
)


def high_precision() -> decimal.Context:
    """Return a fresh copy of the engine's decimal context.

    Use as ``with decimal.localcontext(high_precision()):`` so the thread's
    current context is never modified.
    """
    return HIGH_PRECISION_CONTEXT.copy()


def floor_to_int(value: Decimal) -> int:
    r"""Round a decimal toward negative infinity and return it as an integer.

    Arguments
    ---------
    value: Decimal
        The value to floor.

    Returns
    -------
    int
        The largest integer that is less than or equal to ``value``.
    """
    if not value.is_finite():
        raise DomainError(f"cannot convert non-finite curve result {value=} to an integer amount")
    return int(value.to_integral_value(rounding=decimal.ROUND_FLOOR))


def decimal_n_to_18(amount: int, decimals: int) -> int:
    r"""Convert an amount with ``decimals`` decimals to 18 decimals by appending zero digits.

    Arguments
    ---------
    amount: int
        The amount in the asset's native decimals.
    decimals: int
        The number of decimals of the asset; must not exceed 18.

    Returns
    -------
    int
        The same amount expressed with 18 decimals.
    """
    if not 0 <= decimals <= INTERNAL_DECIMALS:
        raise ValueError(f"{decimals=} must be between 0 and {INTERNAL_DECIMALS}")
    return amount * 10 ** (INTERNAL_DECIMALS - decimals)


def decimal_18_to_n(amount: int, decimals: int) -> int:
    r"""Convert an 18 decimal amount to ``decimals`` decimals, truncating the dropped digits.

    Truncation is toward zero, so both signs lose the same trailing digits.

    Arguments
    ---------
    amount: int
        The amount with 18 decimals.
    decimals: int
        The number of decimals of the asset; must not exceed 18.

    Returns
    -------
    int
        The amount expressed in the asset's native decimals.
    """
    if not 0 <= decimals <= INTERNAL_DECIMALS:
        raise ValueError(f"{decimals=} must be between 0 and {INTERNAL_DECIMALS}")
    divisor = 10 ** (INTERNAL_DECIMALS - decimals)
    if amount < 0:
        return -(-amount // divisor)
    return amount // divisor


def from_64x64(raw: int) -> Decimal:
    """Decode a 64.64 binary fixed-point integer into a decimal."""
    with decimal.localcontext(high_precision()):
        return Decimal(raw) / Decimal(ONE_64X64)


def to_64x64(value: Decimal) -> int:
    """Encode a decimal as a 64.64 binary fixed-point integer, rounding down."""
    with decimal.localcontext(high_precision()):
        return floor_to_int(value * ONE_64X64)


def from_fixed(raw: int, decimals: int = INTERNAL_DECIMALS) -> Decimal:
    """Turn a base-10 fixed-point integer (e.g. an 18 decimal price) into its ratio."""
    with decimal.localcontext(high_precision()):
        return Decimal(raw) / Decimal(10**decimals)
