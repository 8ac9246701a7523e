"""YieldSpace pricing: curve math, trades, liquidity, the single-sided mint solver and fee helpers"""
# pyright: reportUnusedImport=false

from .curve import TradeDirection, calc_invariant, calc_trade_delta, compute_exponent
from .fees import calc_fee_delta
from .liquidity import burn, burn_for_base, mint, mint_with_base, split_liquidity
from .solver import solve_fy_token_for_exact_base_mint
from .trades import buy_base, buy_fy_token, quote_buy_fy_token, sell_base, sell_fy_token
