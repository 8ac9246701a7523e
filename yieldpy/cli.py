"""Quotes a single trade or liquidity operation against a pool described on the command line."""
from __future__ import annotations

import argparse
import json
import logging
from typing import Any, NamedTuple, Sequence

from fixedpointmath import FixedPoint

from yieldpy.config import build_curve_config, build_solver_config
from yieldpy.errors import ConvergenceError
from yieldpy.json_encoder import ExtendedJSONEncoder
from yieldpy.logs import setup_logging
from yieldpy.math import decimal_18_to_n, decimal_n_to_18
from yieldpy.pool_estimator import PoolEstimator
from yieldpy.types import PoolState, Reserves

OPERATIONS = (
    "sell-base",
    "buy-base",
    "sell-fy-token",
    "buy-fy-token",
    "mint",
    "burn",
    "mint-with-base",
    "burn-for-base",
    "fy-token-for-mint",
    "fee",
)


class Args(NamedTuple):
    """Command line arguments for the quote tool."""

    operation: str
    amount: str
    base_reserves: str
    fy_token_reserves: str
    lp_supply: str
    time_to_maturity: int
    scale_factor: int
    decimals: int
    c: str | None
    mu: str | None
    wei: bool
    dotenv_file: str
    log_level: str
    log_filename: str | None


def main(argv: Sequence[str] | None = None) -> int:
    """Prints the quote as JSON.

    Arguments
    ---------
    argv: Sequence[str]
        The argv values returned from argparser.

    Returns
    -------
    int
        The process exit code.
    """
    parsed_args = parse_arguments(argv)
    setup_logging(
        log_filename=parsed_args.log_filename,
        log_level=logging.getLevelName(parsed_args.log_level.upper()),
    )
    try:
        estimator = build_estimator(parsed_args)
        amount = parse_amount(parsed_args.amount, parsed_args.decimals, parsed_args.wei)
        result = run_operation(estimator, parsed_args.operation, amount)
    except (ValueError, ConvergenceError) as err:
        logging.error("unable to quote %s: %r", parsed_args.operation, err)
        return 1
    output = {
        "operation": parsed_args.operation,
        "time_to_maturity": parsed_args.time_to_maturity,
        "result": {name: format_amount(value, parsed_args.decimals) for name, value in result.items()},
    }
    print(json.dumps(output, indent=2, cls=ExtendedJSONEncoder))
    return 0


def parse_amount(value: str, decimals: int, wei: bool) -> int:
    """Convert a command line amount into an integer in the asset's native decimals.

    Arguments
    ---------
    value: str
        A human readable number such as "1_000.5", or an integer string when ``wei`` is set.
    decimals: int
        Native decimals of the asset.
    wei: bool
        Whether ``value`` is already an integer in native decimals.

    Returns
    -------
    int
        The amount in native decimals.
    """
    if wei:
        return int(value)
    return decimal_18_to_n(FixedPoint(value).scaled_value, decimals)


def format_amount(value: int, decimals: int) -> dict[str, Any]:
    """Report an amount both as a raw integer and as a human readable FixedPoint."""
    return {"wei": value, "amount": FixedPoint(scaled_value=decimal_n_to_18(value, decimals))}


def build_estimator(args: Args) -> PoolEstimator:
    """Build a pool estimator from the command line description of the pool.

    Time is measured from 0, so the pool's maturity is the time to maturity.
    """
    curve = build_curve_config(args.dotenv_file)
    solver = build_solver_config(args.dotenv_file)
    base_reserves = parse_amount(args.base_reserves, args.decimals, args.wei)
    fy_token_reserves = parse_amount(args.fy_token_reserves, args.decimals, args.wei)
    lp_supply = parse_amount(args.lp_supply, args.decimals, args.wei)
    # share prices are ratios, so they are never given in wei; the curve keeps them with 18 decimals
    c = decimal_18_to_n(curve.c if args.c is None else FixedPoint(args.c).scaled_value, args.decimals)
    mu = decimal_18_to_n(curve.mu if args.mu is None else FixedPoint(args.mu).scaled_value, args.decimals)
    pool_state = PoolState(
        reserves=Reserves(
            base_reserves=base_reserves,
            fy_token_reserves_virtual=fy_token_reserves,
            fy_token_reserves_real=fy_token_reserves - lp_supply,
        ),
        maturity=args.time_to_maturity,
        scale_factor=args.scale_factor,
        c=c,
        mu=mu,
        decimals=args.decimals,
    )
    return PoolEstimator(pool_state, curve=curve, solver=solver, now=0)


def run_operation(estimator: PoolEstimator, operation: str, amount: int) -> dict[str, int]:
    """Dispatch one operation to the estimator and name its outputs."""
    # pylint: disable=too-many-return-statements
    if operation == "sell-base":
        return {"fy_token_out": estimator.sell_base(amount)}
    if operation == "buy-base":
        return {"fy_token_in": estimator.buy_base(amount)}
    if operation == "sell-fy-token":
        return {"base_out": estimator.sell_fy_token(amount)}
    if operation == "buy-fy-token":
        return {"base_in": estimator.buy_fy_token(amount)}
    if operation == "mint":
        lp_tokens, base_in = estimator.mint(amount)
        return {"lp_tokens": lp_tokens, "base_in": base_in}
    if operation == "burn":
        base_out, fy_token_out = estimator.burn(amount)
        return {"base_out": base_out, "fy_token_out": fy_token_out}
    if operation == "mint-with-base":
        lp_tokens, base_in = estimator.mint_with_base(amount)
        return {"lp_tokens": lp_tokens, "base_in": base_in}
    if operation == "burn-for-base":
        return {"base_out": estimator.burn_for_base(amount)}
    if operation == "fy-token-for-mint":
        return {"fy_token": estimator.fy_token_for_mint(amount)}
    if operation == "fee":
        return {"fee": estimator.fee(amount)}
    raise ValueError(f"unknown {operation=}")


def namespace_to_args(namespace: argparse.Namespace) -> Args:
    """Converts argprase.Namespace to Args."""
    return Args(
        operation=namespace.operation,
        amount=namespace.amount,
        base_reserves=namespace.base_reserves,
        fy_token_reserves=namespace.fy_token_reserves,
        lp_supply=namespace.lp_supply,
        time_to_maturity=namespace.time_to_maturity,
        scale_factor=namespace.scale_factor,
        decimals=namespace.decimals,
        c=namespace.c,
        mu=namespace.mu,
        wei=namespace.wei,
        dotenv_file=namespace.dotenv_file,
        log_level=namespace.log_level,
        log_filename=namespace.log_filename,
    )


def parse_arguments(argv: Sequence[str] | None = None) -> Args:
    """Parses input arguments.

    Arguments
    ---------
    argv: Sequence[str]
        The argv values returned from argparser.

    Returns
    -------
    Args
        Formatted arguments
    """
    parser = argparse.ArgumentParser(description="Quotes a YieldSpace pool operation.")
    parser.add_argument("operation", choices=OPERATIONS, help="The operation to price.")
    parser.add_argument(
        "amount",
        type=str,
        help="The driving amount of the operation; negative fyToken amounts price a sale for `fee`.",
    )
    parser.add_argument("--base-reserves", type=str, required=True, help="Base held by the pool.")
    parser.add_argument(
        "--fy-token-reserves",
        type=str,
        required=True,
        help="Virtual fyToken reserves, including the LP supply offset.",
    )
    parser.add_argument("--lp-supply", type=str, default="0", help="LP tokens outstanding. Defaults to 0.")
    parser.add_argument(
        "--time-to-maturity", type=int, required=True, help="Seconds until the fyToken matures."
    )
    parser.add_argument("--scale-factor", type=int, default=1, help="Curve scale factor. Defaults to 1.")
    parser.add_argument("--decimals", type=int, default=18, help="Decimals of the base asset. Defaults to 18.")
    parser.add_argument("--c", type=str, default=None, help="Current price per share, e.g. 1.05.")
    parser.add_argument("--mu", type=str, default=None, help="Initial price per share, e.g. 1.0.")
    parser.add_argument(
        "--wei",
        default=False,
        action="store_true",
        help="Amounts are integers in the asset's native decimals instead of human readable numbers.",
    )
    parser.add_argument(
        "--dotenv-file", type=str, default="yieldpy.env", help="Env file with curve parameters."
    )
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level. Defaults to WARNING.")
    parser.add_argument("--log-filename", type=str, default=None, help="Log to this file instead of stderr.")
    return namespace_to_args(parser.parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
