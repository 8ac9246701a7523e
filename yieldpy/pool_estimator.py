"""Estimates pool operations from a snapshot of a pool's state"""
from __future__ import annotations

import logging
from dataclasses import replace

import yieldpy.time as time_utils
from yieldpy.config import CurveConfig, SolverConfig
from yieldpy.pricing_models import (
    burn,
    burn_for_base,
    buy_base,
    buy_fy_token,
    calc_fee_delta,
    mint,
    mint_with_base,
    sell_base,
    sell_fy_token,
    solve_fy_token_for_exact_base_mint,
)
from yieldpy.types import PoolState


class PoolEstimator:
    """Prices trades and liquidity operations against one pool.

    The pool state is read once by the caller (from a ledger, a contract, or a
    test harness) and is never modified here. The share prices in ``pool_state``
    take precedence over the ones in ``curve``.
    """

    def __init__(
        self,
        pool_state: PoolState,
        curve: CurveConfig | None = None,
        solver: SolverConfig | None = None,
        now: int | None = None,
    ):
        """Initialize the estimator.

        Arguments
        ---------
        pool_state: PoolState
            Reserves, maturity and share prices of the pool.
        curve: CurveConfig, optional
            Curve parameters. Defaults to CurveConfig().
        solver: SolverConfig, optional
            Bounds for the single-sided mint search. Defaults to SolverConfig().
        now: int, optional
            Unix timestamp used to compute time to maturity. Defaults to the wall clock at each call.
        """
        self.pool_state = pool_state
        self.curve = replace(curve if curve is not None else CurveConfig(), c=pool_state.c, mu=pool_state.mu)
        self.solver = solver if solver is not None else SolverConfig()
        self.now = now

    @property
    def time_to_maturity(self) -> int:
        """Seconds until the pool matures"""
        return time_utils.calc_time_to_maturity(self.pool_state.maturity, self.now)

    def sell_base(self, base_in: int) -> int:
        """fyToken received for selling ``base_in`` base"""
        reserves = self.pool_state.reserves
        return sell_base(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            base_in,
            self.time_to_maturity,
            self.pool_state.scale_factor,
            curve=self.curve,
        )

    def sell_fy_token(self, fy_token_in: int) -> int:
        """Base received for selling ``fy_token_in`` fyToken"""
        reserves = self.pool_state.reserves
        return sell_fy_token(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            fy_token_in,
            self.time_to_maturity,
            self.pool_state.scale_factor,
            curve=self.curve,
        )

    def buy_base(self, base_out: int) -> int:
        """fyToken paid to receive ``base_out`` base"""
        reserves = self.pool_state.reserves
        return buy_base(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            base_out,
            self.time_to_maturity,
            self.pool_state.scale_factor,
            curve=self.curve,
        )

    def buy_fy_token(self, fy_token_out: int) -> int:
        """Base paid to receive ``fy_token_out`` fyToken; 0 means the trade is infeasible"""
        reserves = self.pool_state.reserves
        return buy_fy_token(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            fy_token_out,
            self.pool_state.c,
            self.pool_state.mu,
            self.time_to_maturity,
            self.curve.ts_64x64,
            self.curve.g1_64x64,
            decimals=self.pool_state.decimals,
            precision_fee=self.curve.precision_fee,
        )

    def mint(self, amount_in: int, from_base: bool = False) -> tuple[int, int]:
        """LP tokens minted and the other asset required for a proportional deposit"""
        reserves = self.pool_state.reserves
        return mint(
            reserves.base_reserves,
            reserves.fy_token_reserves_real,
            reserves.lp_total_supply,
            amount_in,
            from_base=from_base,
        )

    def burn(self, lp_tokens: int) -> tuple[int, int]:
        """Base and fyToken returned for burning ``lp_tokens``"""
        reserves = self.pool_state.reserves
        return burn(
            reserves.base_reserves,
            reserves.fy_token_reserves_real,
            reserves.lp_total_supply,
            lp_tokens,
        )

    def mint_with_base(self, fy_token: int) -> tuple[int, int]:
        """LP tokens minted and total base consumed when buying ``fy_token`` as part of the deposit"""
        reserves = self.pool_state.reserves
        return mint_with_base(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            reserves.fy_token_reserves_real,
            self.pool_state.mu,
            self.pool_state.c,
            fy_token,
            self.time_to_maturity,
            self.curve.ts_64x64,
            self.curve.g1_64x64,
            decimals=self.pool_state.decimals,
            precision_fee=self.curve.precision_fee,
        )

    def burn_for_base(self, lp_tokens: int) -> int:
        """Base returned for burning ``lp_tokens`` and selling the fyToken leg"""
        reserves = self.pool_state.reserves
        return burn_for_base(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            reserves.fy_token_reserves_real,
            reserves.lp_total_supply,
            lp_tokens,
            self.time_to_maturity,
            self.pool_state.scale_factor,
            curve=self.curve,
        )

    def fy_token_for_mint(self, base_in: int) -> int:
        """fyToken to buy so that a base-only deposit of ``base_in`` leaves no fyToken unused"""
        reserves = self.pool_state.reserves
        fy_token = solve_fy_token_for_exact_base_mint(
            reserves.base_reserves,
            reserves.fy_token_reserves_real,
            reserves.fy_token_reserves_virtual,
            base_in,
            self.time_to_maturity,
            curve=self.curve,
            solver=self.solver,
            decimals=self.pool_state.decimals,
        )
        logging.info("fy_token_for_mint: base_in=%d, fy_token=%d", base_in, fy_token)
        return fy_token

    def fee(self, fy_token: int) -> int:
        """Base cost of the fee for a signed fyToken trade; positive buys, negative sells"""
        reserves = self.pool_state.reserves
        return calc_fee_delta(
            reserves.base_reserves,
            reserves.fy_token_reserves_virtual,
            fy_token,
            self.time_to_maturity,
            self.pool_state.scale_factor,
            curve=self.curve,
            decimals=self.pool_state.decimals,
        )
