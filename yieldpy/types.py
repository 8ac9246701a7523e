"""Core types used across the repo"""
from __future__ import annotations  # types will be strings by default in 3.11

from dataclasses import dataclass, is_dataclass
from functools import wraps
from typing import Any, Type


def freezable(frozen: bool = False, no_new_attribs: bool = False) -> Type:
    r"""A wrapper that allows classes to be frozen, such that existing member attributes cannot be changed"""

    def decorator(cls):
        if not is_dataclass(cls):
            raise TypeError("The class must be a data class.")

        @wraps(wrapped=cls, updated=())
        class FrozenClass(cls):
            """Subclass cls to enable freezing of attributes"""

            def __init__(self, *args, frozen=frozen, no_new_attribs=no_new_attribs, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                super().__setattr__("frozen", frozen)
                super().__setattr__("no_new_attribs", no_new_attribs)

            def __setattr__(self, attrib: str, value: Any) -> None:
                if hasattr(self, attrib) and hasattr(self, "frozen") and getattr(self, "frozen"):
                    raise AttributeError(f"{self.__class__.__name__} is frozen, cannot change attribute '{attrib}'.")
                if not hasattr(self, attrib) and hasattr(self, "no_new_attribs") and getattr(self, "no_new_attribs"):
                    raise AttributeError(
                        f"{self.__class__.__name__} has no_new_attribs set, cannot add attribute '{attrib}'."
                    )
                super().__setattr__(attrib, value)

            def freeze(self) -> None:
                """disallows changing existing members"""
                super().__setattr__("frozen", True)

            def disable_new_attribs(self) -> None:
                """disallows adding new members"""
                super().__setattr__("no_new_attribs", True)

        # Set the name of the wrapped class to the name of the input class to preserve metadata
        FrozenClass.__name__ = cls.__name__
        return FrozenClass

    return decorator


@freezable(frozen=True, no_new_attribs=True)
@dataclass
class Reserves:
    r"""Pool balances as seen by the pricing engine

    Attributes
    ----------
    base_reserves: int
        "Z"; base asset held by the pool.
    fy_token_reserves_virtual: int
        "Y"; fyToken reserves used in the invariant, which include an offset equal to the LP supply.
    fy_token_reserves_real: int
        "Yreal"; fyToken actually held by the pool.
    """

    base_reserves: int
    fy_token_reserves_virtual: int
    fy_token_reserves_real: int

    def __post_init__(self):
        if self.base_reserves < 0:
            raise ValueError(f"{self.base_reserves=} must be non-negative")
        if not self.fy_token_reserves_virtual >= self.fy_token_reserves_real >= 0:
            raise ValueError(
                f"expected {self.fy_token_reserves_virtual=} >= {self.fy_token_reserves_real=} >= 0"
            )

    @property
    def lp_total_supply(self) -> int:
        """The LP supply embedded in the virtual fyToken reserves"""
        return self.fy_token_reserves_virtual - self.fy_token_reserves_real


@freezable(frozen=True, no_new_attribs=True)
@dataclass
class PoolState:
    r"""Snapshot of everything the estimator needs to know about a pool

    Attributes
    ----------
    reserves: Reserves
        Base and fyToken balances.
    maturity: int
        Unix timestamp, in seconds, at which the fyToken converges to par.
    scale_factor: int
        Multiplier applied to amounts before they enter the curve.
    c: int
        Current price per share of the base asset, as a fixed-point integer in the asset's decimals.
    mu: int
        Price per share at pool initialization, as a fixed-point integer in the asset's decimals.
    decimals: int
        Native decimals of the base asset.
    """

    reserves: Reserves
    maturity: int
    scale_factor: int = 1
    c: int = 10**18
    mu: int = 10**18
    decimals: int = 18


@dataclass(frozen=True)
class InfeasibleTrade:
    r"""Result of a fyToken purchase that the curve cannot price

    Returned instead of an amount so that "this trade costs zero" and
    "this trade cannot happen" are not conflated.

    Attributes
    ----------
    reason: str
        Human readable explanation of why the trade is infeasible.
    """

    reason: str
