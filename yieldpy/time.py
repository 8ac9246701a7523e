"""Helper functions for time to maturity"""
from __future__ import annotations

import time

from yieldpy.errors import DomainError


def current_timestamp() -> int:
    """Current unix time in whole seconds"""
    return round(time.time())


def seconds_to_from(to: int, from_: int | None = None) -> int:
    r"""Signed number of seconds from ``from_`` to ``to``

    Arguments
    ---------
    to: int
        Unix timestamp to measure to.
    from_: int, optional
        Unix timestamp to measure from. Defaults to the current time.

    Returns
    -------
    int
        ``to - from_``; negative when ``to`` is in the past.
    """
    if from_ is None:
        from_ = current_timestamp()
    return to - from_


def calc_time_to_maturity(maturity: int, now: int | None = None) -> int:
    r"""Seconds left until a pool matures

    Arguments
    ---------
    maturity: int
        Unix timestamp at which the fyToken converges to par.
    now: int, optional
        Unix timestamp to measure from. Defaults to the current time.

    Returns
    -------
    int
        Non-negative seconds until maturity.
    """
    time_to_maturity = seconds_to_from(maturity, now)
    if time_to_maturity < 0:
        raise DomainError(f"pool matured {-time_to_maturity} seconds ago at {maturity=}")
    return time_to_maturity
